"""
Car Inventory REST Endpoints.
Browse, look up and filter the cars on the lot.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Query, Request
from pydantic import ValidationError

from autovoice.core.exceptions import BadInputException
from autovoice.db.models import Vehicle, CarSearchQuery

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=List[Vehicle])
async def list_cars(request: Request):
    """Get every car in the inventory."""
    return await request.app.state.car_repository.get_all()


# Declared before /{car_id} so "search" is not taken for an id
@router.get("/search", response_model=List[Vehicle])
async def search_cars(
    request: Request,
    make: Optional[str] = Query(None),
    min_price: Optional[str] = Query(None, alias="minPrice"),
    max_price: Optional[str] = Query(None, alias="maxPrice"),
    year: Optional[str] = Query(None),
    color: Optional[str] = Query(None),
    fuel_type: Optional[str] = Query(None, alias="fuelType")
):
    """
    Filter the inventory. Every parameter is optional; with none given
    the whole inventory is returned.
    """
    try:
        query = CarSearchQuery(
            make=make,
            min_price=min_price,
            max_price=max_price,
            year=year,
            color=color,
            fuel_type=fuel_type
        )
    except ValidationError as e:
        raise BadInputException(
            "Invalid search parameters",
            details={"errors": e.errors(include_url=False, include_context=False)}
        )

    return await request.app.state.car_repository.search(query)


@router.get("/{car_id}", response_model=Vehicle)
async def get_car(request: Request, car_id: str):
    """Get a single car by id."""
    return await request.app.state.car_repository.get_by_id(car_id)
