"""
Record model for donation categories.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Category:
    """
    A classification for donations sharing a unit of measure.
    """

    id: str
    name: str
    measure_unity: str
    active: bool = True
    created_at: datetime = field(default_factory=utc_now)
