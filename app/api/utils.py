"""
API utility functions.
"""

from datetime import datetime, timezone
from typing import Any, Collection, Dict, Optional

from fastapi import Request


def utc_timestamp() -> datetime:
    return datetime.now(timezone.utc)


def envelope(data: Any, **extra: Any) -> Dict[str, Any]:
    """
    Wrap a payload in the success envelope.

    Args:
        data: The payload
        extra: Additional top-level fields, e.g. ``count`` or ``chartType``

    Returns:
        The envelope as a dictionary
    """
    return {"success": True, "data": data, "timestamp": utc_timestamp(), **extra}


def counted_envelope(data: list) -> Dict[str, Any]:
    """Wrap a list payload, adding its length as ``count``."""
    return envelope(data, count=len(data))


def error_body(error: str, message: Optional[str] = None, **extra: Any) -> Dict[str, Any]:
    """
    Build the error envelope body.

    Args:
        error: Short error label
        message: Optional human readable detail
        extra: Additional top-level fields

    Returns:
        The error body as a dictionary
    """
    body: Dict[str, Any] = {"success": False, "error": error}
    if message is not None:
        body["message"] = message
    body.update(extra)
    return body


def get_client_ip(request: Request, trusted_proxies: Collection[str] = ()) -> str:
    """
    Get the client address used to key per-client limits.

    ``X-Forwarded-For`` is only read when the direct peer is a trusted proxy.
    The rightmost hop that is not itself a trusted proxy is the client.
    """
    client_host = request.client.host if request.client else None
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for and client_host in trusted_proxies:
        hops = [hop.strip() for hop in forwarded_for.split(",") if hop.strip()]
        for hop in reversed(hops):
            if hop not in trusted_proxies:
                return hop
        if hops:
            return hops[0]
    return client_host or "unknown"
