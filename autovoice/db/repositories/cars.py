"""
Car Repository.
Data access layer for the car inventory.
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional

from autovoice.core.exceptions import CarNotFoundException
from autovoice.db.models import Vehicle, CarSearchQuery

logger = logging.getLogger(__name__)


class CarRepository(ABC):
    """
    Read interface for the car inventory.

    Callers depend on this interface only, so a durable implementation
    can replace the in-memory one without touching them.
    """

    @abstractmethod
    async def get_all(self) -> List[Vehicle]:
        """Get every car."""

    @abstractmethod
    async def get_by_id(self, car_id: str) -> Vehicle:
        """Get a car by ID. Raises CarNotFoundException if unknown."""

    @abstractmethod
    async def search(self, query: CarSearchQuery) -> List[Vehicle]:
        """Get every car matching all supplied filters."""

    async def get_by_make(self, make: str) -> List[Vehicle]:
        """Get cars whose make equals `make`, ignoring case."""
        make = make.lower()
        return [car for car in await self.get_all() if car.make.lower() == make]


class InMemoryCarRepository(CarRepository):
    """Car repository backed by a dict seeded once at construction."""

    def __init__(self, vehicles: Optional[Iterable[Vehicle]] = None):
        self._cars: Dict[str, Vehicle] = {}

        for vehicle in vehicles or []:
            if vehicle.id in self._cars:
                raise ValueError(f"Duplicate car id in inventory: {vehicle.id}")
            self._cars[vehicle.id] = vehicle

        logger.info(f"Inventory loaded with {len(self._cars)} cars")

    def __len__(self) -> int:
        return len(self._cars)

    async def get_all(self) -> List[Vehicle]:
        return list(self._cars.values())

    async def get_by_id(self, car_id: str) -> Vehicle:
        car = self._cars.get(car_id)
        if car is None:
            raise CarNotFoundException(car_id)
        return car

    async def search(self, query: CarSearchQuery) -> List[Vehicle]:
        if query.is_empty():
            return await self.get_all()

        return [car for car in self._cars.values() if query.matches(car)]
