"""
Pydantic schemas for donation and category records.
"""

from dataclasses import asdict
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from app.db.models import Category, Donation


class CategoryBase(BaseModel):
    """
    Base schema for category data.
    """

    name: str = Field(..., min_length=1, max_length=100, description="Category name")
    measure_unity: str = Field(..., min_length=1, max_length=50, description="Unit of measure, e.g. kg")
    active: bool = Field(True, description="Whether the category is active")


class CategoryCreate(CategoryBase):
    """
    Schema for a category entry in a dataset file.
    """

    id: str = Field(..., min_length=1, description="Category ID")
    created_at: Optional[datetime] = Field(None, description="Creation timestamp")

    def to_record(self) -> Category:
        data = self.model_dump(exclude_none=True)
        return Category(**data)


class CategoryResponse(BaseModel):
    """
    Schema for category response.
    """

    id: str = Field(..., description="Category ID")
    name: str = Field(..., description="Category name")
    measure_unity: str = Field(..., description="Unit of measure")
    created_at: datetime = Field(..., description="Creation timestamp")
    active: bool = Field(..., description="Whether the category is active")

    model_config = {"from_attributes": True}


class DonationBase(BaseModel):
    """
    Base schema for donation data.
    """

    category_id: str = Field(..., min_length=1, description="Category ID")
    name: str = Field(..., min_length=1, max_length=255, description="Donation name")
    description: Optional[str] = Field(None, max_length=1000, description="Donation description")
    initial_quantity: int = Field(0, ge=0, description="Originally donated amount")
    current_quantity: int = Field(0, ge=0, description="Amount remaining")
    donator_name: Optional[str] = Field(None, max_length=255, description="Name of the donator")
    gender: Optional[str] = Field(None, max_length=50, description="Gender classification")
    size: Optional[str] = Field(None, max_length=50, description="Size label")
    active: bool = Field(True, description="Whether the donation is active")
    available: bool = Field(True, description="Whether the donation is available")


class DonationCreate(DonationBase):
    """
    Schema for a donation entry in a dataset file.
    """

    id: str = Field(..., min_length=1, description="Donation ID")
    created_at: Optional[datetime] = Field(None, description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")

    def to_record(self) -> Donation:
        data = self.model_dump(exclude_none=True)
        return Donation(**data)


class DonationResponse(BaseModel):
    """
    Schema for donation response, including the resolved category and the
    derived usage fields.
    """

    id: str = Field(..., description="Donation ID")
    category_id: str = Field(..., description="Category ID")
    name: str = Field(..., description="Donation name")
    description: Optional[str] = Field(None, description="Donation description")
    initial_quantity: int = Field(..., description="Originally donated amount")
    current_quantity: int = Field(..., description="Amount remaining")
    donator_name: Optional[str] = Field(None, description="Name of the donator")
    gender: Optional[str] = Field(None, description="Gender classification")
    size: Optional[str] = Field(None, description="Size label")
    active: bool = Field(..., description="Whether the donation is active")
    available: bool = Field(..., description="Whether the donation is available")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")
    category: CategoryResponse = Field(..., description="Category the donation belongs to")
    used_quantity: int = Field(..., description="initial_quantity - current_quantity")
    usage_percentage: int = Field(..., description="Share of the donation already used, in percent")
    is_running_low: bool = Field(..., description="Whether less than 20% remains")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "id": "don-1",
                    "category_id": "cat-1",
                    "name": "Camisetas",
                    "description": "Camisetas em bom estado",
                    "initial_quantity": 150,
                    "current_quantity": 45,
                    "donator_name": "João Silva",
                    "gender": "Unissex",
                    "size": "M/G",
                    "active": True,
                    "available": True,
                    "created_at": "2024-01-15T00:00:00Z",
                    "updated_at": "2024-01-15T00:00:00Z",
                    "category": {
                        "id": "cat-1",
                        "name": "Roupas",
                        "measure_unity": "peças",
                        "created_at": "2024-01-01T00:00:00Z",
                        "active": True,
                    },
                    "used_quantity": 105,
                    "usage_percentage": 70,
                    "is_running_low": False,
                }
            ]
        },
    }

    @classmethod
    def from_record(cls, donation: Donation, category: Category) -> "DonationResponse":
        """Build the response from a donation record and its resolved category."""
        data = asdict(donation)
        data.update(
            category=CategoryResponse.model_validate(category),
            used_quantity=donation.used_quantity,
            usage_percentage=donation.usage_percentage,
            is_running_low=donation.is_running_low,
        )
        return cls.model_validate(data)


class DatasetFile(BaseModel):
    """
    Schema of a JSON dataset file.
    """

    categories: List[CategoryCreate] = Field(default_factory=list)
    donations: List[DonationCreate] = Field(default_factory=list)
