"""
API error handling for consistent error responses across the application.
"""

from contextlib import contextmanager
from typing import Generator

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.middleware import get_request_id
from app.api.utils import error_body
from app.schemas.analytics import ChartType

GENERIC_FAILURE_MESSAGE = "Something went wrong"


class RouteFailure(Exception):
    """
    An unexpected failure inside a route, reported under a route-specific label.
    """

    def __init__(self, label: str):
        super().__init__(label)
        self.label = label


class InvalidChartTypeError(Exception):
    """
    Raised by the chart route for a chart type outside ``ChartType``.
    """

    def __init__(self, provided: str):
        super().__init__(f"Invalid chart type: {provided}")
        self.provided = provided


@contextmanager
def failure_reported_as(label: str) -> Generator[None, None, None]:
    """
    Turn unexpected exceptions raised in the block into a ``RouteFailure``.

    HTTP exceptions pass through untouched. The original exception is logged
    with its traceback and chained, but never sent to the client.
    """
    try:
        yield
    except HTTPException:
        raise
    except Exception as exc:
        logger.bind(request_id=get_request_id()).exception(f"{label}: {exc}")
        raise RouteFailure(label) from exc


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register exception handlers for the FastAPI application.
    """

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        """
        Handle validation errors and return a standardized response.
        """
        logger.warning(f"Validation error: {exc.errors()}")

        def flatten_error(err: dict) -> str:
            location = ".".join(str(loc) for loc in err.get("loc", []))
            message = err.get("msg", "Validation error")
            return f"{location}: {message}"

        flat_errors = [flatten_error(err) for err in exc.errors()]
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_body("Validation error", " | ".join(flat_errors)),
        )

    @app.exception_handler(InvalidChartTypeError)
    async def invalid_chart_type_handler(request: Request, exc: InvalidChartTypeError) -> JSONResponse:
        """
        Reject chart types outside the supported set.
        """
        logger.warning(f"Rejected chart type: {exc.provided}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_body(
                "Invalid chart type",
                validChartTypes=ChartType.values(),
                provided=exc.provided,
            ),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        """
        Render HTTP exceptions, including unknown paths, in the error envelope.
        """
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            content = error_body("Endpoint not found", "The requested endpoint does not exist")
        else:
            content = error_body(str(exc.detail))
        return JSONResponse(status_code=exc.status_code, content=content, headers=getattr(exc, "headers", None))

    @app.exception_handler(RouteFailure)
    async def route_failure_handler(request: Request, exc: RouteFailure) -> JSONResponse:
        """
        Report a failed route without exposing the underlying error.
        """
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_body(exc.label, GENERIC_FAILURE_MESSAGE),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """
        Handle all other uncaught exceptions.
        """
        logger.exception(f"Unhandled exception: {str(exc)}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_body("Internal server error", GENERIC_FAILURE_MESSAGE),
        )
