"""
Record models.
"""

from app.db.models.category import Category
from app.db.models.donation import RUNNING_LOW_THRESHOLD, Donation

__all__ = [
    "Category",
    "Donation",
    "RUNNING_LOW_THRESHOLD",
]
