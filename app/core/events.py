"""
Application lifecycle event handlers.

These functions are executed during application startup and shutdown.
"""

import logging
from typing import Callable, List

import sentry_sdk
from loguru import logger
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.logging import LoggingIntegration

from app.core.config import settings
from app.db.seed import build_default_dataset, load_dataset_file
from app.db.store import DonationDataset


def load_dataset() -> DonationDataset:
    """
    Build the dataset the service will serve.

    Reads ``DATASET_PATH`` when configured, otherwise the built-in fixture.
    Any failure here aborts startup.
    """
    try:
        if settings.DATASET_PATH:
            logger.info(f"Loading dataset from {settings.DATASET_PATH}...")
            dataset = load_dataset_file(settings.DATASET_PATH)
        else:
            dataset = build_default_dataset()
    except Exception as e:
        logger.error(f"Dataset loading failed: {e}")
        raise

    logger.info(f"Dataset ready: {len(dataset.categories)} categories, {len(dataset.donations)} donations")
    return dataset


async def init_error_reporting() -> None:
    """
    Initialize Sentry when a DSN is configured.
    """
    if not settings.SENTRY_DSN:
        return

    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        integrations=[
            FastApiIntegration(),
            LoggingIntegration(level=logging.INFO, event_level=logging.ERROR),
        ],
        environment=settings.ENVIRONMENT,
        traces_sample_rate=settings.SENTRY_TRACES_SAMPLE_RATE,
        release=f"{settings.SERVICE_NAME}@{settings.VERSION}",
    )
    logger.info("Sentry initialized")


async def flush_error_reporting() -> None:
    """
    Flush pending Sentry events before the process exits.
    """
    if settings.SENTRY_DSN:
        sentry_sdk.flush(timeout=2.0)


# List of startup event handlers to be executed in order
startup_event_handlers: List[Callable] = [
    init_error_reporting,
]

# List of shutdown event handlers to be executed in order
shutdown_event_handlers: List[Callable] = [
    flush_error_reporting,
]
