"""
API middleware components.

This module contains the request context middleware, which assigns a
request ID for log correlation and adds security headers to every response.
"""

import contextvars
import time
import uuid
from typing import Dict, Optional

from fastapi import Request, Response
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

# Context variables for request-scoped data
request_id_var = contextvars.ContextVar[Optional[str]]("request_id", default=None)

SECURITY_HEADERS: Dict[str, str] = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "X-DNS-Prefetch-Control": "off",
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Resource-Policy": "same-origin",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
}


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Middleware that tags each request with an ID and hardens the response headers.
    """

    def __init__(self, app: ASGIApp, security_headers: Optional[Dict[str, str]] = None):
        """
        Initialize the middleware.

        Args:
            app: The ASGI application
            security_headers: Headers set on every response; defaults to ``SECURITY_HEADERS``
        """
        super().__init__(app)
        self.security_headers = security_headers if security_headers is not None else SECURITY_HEADERS

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        """
        Process a request with a fresh request ID.

        Args:
            request: The FastAPI request
            call_next: The next request handler

        Returns:
            The response
        """
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        token = request_id_var.set(request_id)
        start_time = time.time()

        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        logger.bind(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            client_host=request.client.host if request.client else None,
        ).info(f"Request {request.method} {request.url.path} took {time.time() - start_time:.4f}s")

        for header, value in self.security_headers.items():
            response.headers.setdefault(header, value)
        response.headers["X-Request-ID"] = request_id

        return response


def get_request_id() -> str:
    """
    Get the request ID for the current request.

    Returns:
        The current request ID or an empty string if not in a request context
    """
    request_id = request_id_var.get()
    return request_id if request_id is not None else ""
