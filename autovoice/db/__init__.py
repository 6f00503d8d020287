"""Inventory module initialization."""

from autovoice.db.models import Vehicle, CarSearchQuery
from autovoice.db.seed import SAMPLE_CARS, sample_vehicles

__all__ = [
    "Vehicle",
    "CarSearchQuery",
    "SAMPLE_CARS",
    "sample_vehicles"
]
