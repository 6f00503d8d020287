"""
Inventory Data Models.
Defines the vehicle record and the search query used by the repositories.
"""

from typing import Optional, List

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class Vehicle(BaseModel):
    """Car inventory entity. Serialized with camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True
    )

    id: str = Field(..., min_length=1)
    make: str = Field(..., min_length=1)
    model: str = Field(..., min_length=1)
    year: int
    price: int = Field(..., ge=0)
    mileage: int = Field(..., ge=0)
    color: str = Field(..., min_length=1)
    fuel_type: str = Field(..., min_length=1)
    transmission: str = Field(..., min_length=1)
    drivetrain: str = Field(..., min_length=1)
    mpg_city: Optional[int] = None
    mpg_highway: Optional[int] = None
    features: List[str] = Field(default_factory=list)
    description: Optional[str] = None
    image_url: Optional[str] = None
    is_available: bool = True

    @property
    def title(self) -> str:
        return f"{self.year} {self.make} {self.model}"

    def __repr__(self):
        return f"<Vehicle {self.id}: {self.title}>"


class CarSearchQuery(BaseModel):
    """
    Filter for inventory scans. Every field is optional and an unset
    field imposes no constraint. Empty strings count as unset.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True
    )

    make: Optional[str] = None
    min_price: Optional[int] = None
    max_price: Optional[int] = None
    year: Optional[int] = None
    color: Optional[str] = None
    fuel_type: Optional[str] = None

    @field_validator("*", mode="before")
    @classmethod
    def _blank_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def is_empty(self) -> bool:
        return all(value is None for value in self.model_dump().values())

    def matches(self, vehicle: Vehicle) -> bool:
        """Check every supplied predicate against a vehicle."""
        if self.make is not None and self.make.lower() not in vehicle.make.lower():
            return False
        if self.min_price is not None and vehicle.price < self.min_price:
            return False
        if self.max_price is not None and vehicle.price > self.max_price:
            return False
        if self.year is not None and vehicle.year != self.year:
            return False
        if self.color is not None and self.color.lower() not in vehicle.color.lower():
            return False
        if self.fuel_type is not None and self.fuel_type.lower() not in vehicle.fuel_type.lower():
            return False
        return True
