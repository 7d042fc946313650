"""
In-memory data context holding the category and donation records.

The dataset is built once at startup and handed to the services that read
it. Nothing in the application mutates it afterwards.
"""

from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Tuple

from loguru import logger

from app.db.models import Category, Donation


class DonationDataset:
    """
    Immutable collection of categories and donations.

    Raises:
        ValueError: If ids are duplicated or a donation references an
            unknown category.
    """

    def __init__(self, categories: Iterable[Category], donations: Iterable[Donation]):
        self._categories: Tuple[Category, ...] = tuple(categories)
        self._donations: Tuple[Donation, ...] = tuple(donations)

        by_id = {}
        for category in self._categories:
            if category.id in by_id:
                raise ValueError(f"Duplicate category id: {category.id}")
            by_id[category.id] = category
        self._categories_by_id: Mapping[str, Category] = MappingProxyType(by_id)

        seen_donations = set()
        for donation in self._donations:
            if donation.id in seen_donations:
                raise ValueError(f"Duplicate donation id: {donation.id}")
            seen_donations.add(donation.id)
            if donation.category_id not in by_id:
                raise ValueError(f"Donation {donation.id} references unknown category {donation.category_id}")

        logger.debug(f"Dataset built with {len(self._categories)} categories and {len(self._donations)} donations")

    @property
    def categories(self) -> Tuple[Category, ...]:
        return self._categories

    @property
    def donations(self) -> Tuple[Donation, ...]:
        return self._donations

    def category(self, category_id: str) -> Optional[Category]:
        """Get a category by id, or None if it is unknown."""
        return self._categories_by_id.get(category_id)

    def category_for(self, donation: Donation) -> Category:
        """Resolve the category a donation belongs to."""
        return self._categories_by_id[donation.category_id]

    def __len__(self) -> int:
        return len(self._donations)
