"""
FastAPI API dependencies.
"""

import math
import time
from collections import deque
from typing import Deque, Dict, Optional

from fastapi import Depends, HTTPException, Request, status
from loguru import logger

from app.api.utils import get_client_ip
from app.db.store import DonationDataset
from app.services.analytics import AnalyticsService
from app.services.reports import ReportService

RATE_LIMIT_MESSAGE = "Too many requests from this IP, please try again later."


def get_dataset(request: Request) -> DonationDataset:
    """
    Dependency for the dataset attached to the application.
    """
    dataset: Optional[DonationDataset] = getattr(request.app.state, "dataset", None)
    if dataset is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Dataset not loaded",
        )
    return dataset


def get_analytics_service(dataset: DonationDataset = Depends(get_dataset)) -> AnalyticsService:
    """Dependency for the analytics engine."""
    return AnalyticsService(dataset)


def get_report_service(analytics: AnalyticsService = Depends(get_analytics_service)) -> ReportService:
    """Dependency for the composite report service."""
    return ReportService(analytics)


class SlidingWindowRateLimiter:
    """
    In-memory per-client request limiter over a sliding time window.

    Keys whose window has fully expired are dropped, at most once per window,
    so the table only holds clients seen in the last window.

    Args:
        max_requests: Requests allowed per window
        window_seconds: Window length in seconds
    """

    def __init__(self, max_requests: int, window_seconds: float):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._hits: Dict[str, Deque[float]] = {}
        self._last_sweep: Optional[float] = None

    def __len__(self) -> int:
        return len(self._hits)

    def hit(self, key: str, now: Optional[float] = None) -> Optional[int]:
        """
        Register a request for ``key``.

        Returns:
            None if the request is allowed, otherwise the number of seconds
            until the oldest request in the window expires.
        """
        now = time.monotonic() if now is None else now
        window_start = now - self.window_seconds
        self._sweep(now, window_start)

        hits = self._hits.setdefault(key, deque())
        while hits and hits[0] <= window_start:
            hits.popleft()

        if len(hits) >= self.max_requests:
            return max(1, math.ceil(hits[0] - window_start))

        hits.append(now)
        return None

    def _sweep(self, now: float, window_start: float) -> None:
        if self._last_sweep is not None and now - self._last_sweep < self.window_seconds:
            return
        self._last_sweep = now
        expired = [key for key, hits in self._hits.items() if not hits or hits[-1] <= window_start]
        for key in expired:
            del self._hits[key]
        if expired:
            logger.debug(f"Evicted {len(expired)} expired rate limit keys")

    def reset(self) -> None:
        """
        Forget every tracked client.
        """
        self._hits.clear()
        self._last_sweep = None


async def check_rate_limit(request: Request) -> None:
    """
    Check if the client has exceeded the request rate limit.

    Raises:
        HTTPException: If rate limit is exceeded
    """
    limiter: Optional[SlidingWindowRateLimiter] = getattr(request.app.state, "rate_limiter", None)
    if limiter is None:
        return

    client_ip = get_client_ip(request, getattr(request.app.state, "trusted_proxies", ()))
    retry_after = limiter.hit(client_ip)
    if retry_after is not None:
        logger.warning(f"Rate limit exceeded for {client_ip} on {request.url.path}")
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=RATE_LIMIT_MESSAGE,
            headers={"Retry-After": str(retry_after)},
        )
