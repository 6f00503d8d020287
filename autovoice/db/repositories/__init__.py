"""Inventory repositories initialization."""

from autovoice.db.repositories.cars import CarRepository, InMemoryCarRepository

__all__ = [
    "CarRepository",
    "InMemoryCarRepository"
]
