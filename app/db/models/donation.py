"""
Record model for donations.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from app.db.models.category import utc_now
from app.utils.percentages import percentage

# A donation is running low once less than this share of it remains.
RUNNING_LOW_THRESHOLD = 0.2


@dataclass(frozen=True)
class Donation:
    """
    A tracked in-kind contribution.

    Only ``category_id`` is stored; the category itself is resolved through
    the dataset that owns the record.
    """

    id: str
    category_id: str
    name: str
    description: Optional[str] = None
    initial_quantity: int = 0
    current_quantity: int = 0
    donator_name: Optional[str] = None
    gender: Optional[str] = None
    size: Optional[str] = None
    active: bool = True
    available: bool = True
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    @property
    def used_quantity(self) -> int:
        # Negative when current exceeds initial; left as is to surface bad data.
        return self.initial_quantity - self.current_quantity

    @property
    def usage_percentage(self) -> int:
        return percentage(self.used_quantity, self.initial_quantity)

    @property
    def is_running_low(self) -> bool:
        return self.current_quantity < self.initial_quantity * RUNNING_LOW_THRESHOLD
