"""
Logging configuration.
"""

import json
import logging
import sys
from typing import Any, Dict, cast

from loguru import logger

from app.core.config import settings

# Loggers of the server stack that are redirected into loguru.
INTERCEPTED_LOGGERS = ["uvicorn", "uvicorn.error", "uvicorn.access", "fastapi"]


class InterceptHandler(logging.Handler):
    """
    Intercept standard logging messages toward Loguru.
    """

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: Any = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        logger.opt(depth=6, exception=record.exc_info).log(level, record.getMessage())


def serialize_record(record: Dict[str, Any]) -> str:
    """
    Serialize a loguru record into a single JSON line.
    """
    try:
        subset = {
            "timestamp": record["time"].isoformat(),
            "level": record["level"].name,
            "message": record["message"],
            "service": settings.SERVICE_NAME,
            "environment": settings.ENVIRONMENT,
        }

        for source, target in (("name", "module"), ("function", "function"), ("line", "line")):
            if source in record:
                subset[target] = record[source]

        extra = record.get("extra")
        if isinstance(extra, dict):
            for key, value in extra.items():
                if not key.startswith("_"):
                    subset[key] = value

        if record.get("exception"):
            subset["exception"] = str(record["exception"])

        return json.dumps(subset)
    except Exception as e:
        # Keep the log line even if a field cannot be serialized
        time = record.get("time", "")
        return json.dumps(
            {
                "timestamp": time.isoformat() if hasattr(time, "isoformat") else str(time),
                "level": "ERROR",
                "message": f"Error serializing log: {str(e)}",
                "original_message": str(record.get("message", "")),
                "service": settings.SERVICE_NAME,
                "environment": settings.ENVIRONMENT,
            }
        )


def configure_logging() -> None:
    """
    Configure loguru logger.
    """
    logger.remove()

    if settings.JSON_LOGS:
        logger.add(
            lambda msg: print(serialize_record(cast(Dict[str, Any], msg.record)), file=sys.stderr),
            level=settings.LOG_LEVEL,
            backtrace=True,
            diagnose=settings.DEBUG,
        )
    else:
        logger.add(
            sys.stderr,
            level=settings.LOG_LEVEL,
            format="{time} | {level} | {name}:{function}:{line} | {message} | {extra}",
            backtrace=True,
            diagnose=settings.DEBUG,
        )

    logging.getLogger().handlers = [InterceptHandler()]

    for logger_name in INTERCEPTED_LOGGERS:
        logging_logger = logging.getLogger(logger_name)
        logging_logger.handlers = [InterceptHandler()]
        logging_logger.propagate = False

    logger.info("Logging configured successfully.")
