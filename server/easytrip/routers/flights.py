"""Flight router for catalog search and creation."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse

from ..core.dependencies import get_catalog_service
from ..schemas.flight import CreateFlightRequest, FlightListResponse, FlightResponse
from ..schemas.trip import TripSearchCriteria
from ..services.catalog import CatalogService, ResourceType, get_catalog

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/flights", tags=["flights"])

catalog = get_catalog(ResourceType.FLIGHT)


@router.get("", response_model=FlightListResponse)
async def search_flights(
    origin: Optional[str] = Query(None, alias="from", description="Case-insensitive substring of the origin"),
    destination: Optional[str] = Query(None, alias="to", description="Case-insensitive substring of the destination"),
    date: Optional[str] = Query(None, description="Departure day, YYYY-MM-DD (UTC)"),
    service: CatalogService = Depends(get_catalog_service),
) -> JSONResponse:
    """
    Search flights.

    All filters are optional. Results are ordered by price, cheapest first.
    """
    criteria = TripSearchCriteria(origin=origin, destination=destination, date=date)
    flights = await service.search(ResourceType.FLIGHT, criteria)

    response_data = FlightListResponse(
        count=len(flights),
        data=[catalog.to_schema(flight) for flight in flights],
    )

    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content=response_data.model_dump(mode="json", by_alias=True),
    )


@router.post("", response_model=FlightResponse, status_code=status.HTTP_201_CREATED)
async def create_flight(
    request: CreateFlightRequest,
    service: CatalogService = Depends(get_catalog_service),
) -> JSONResponse:
    """Create a new flight. Arrival is not checked against departure."""
    flight = await service.create(ResourceType.FLIGHT, request)

    logger.info(
        "Flight created successfully",
        extra={
            "flight_id": str(flight.id),
            "airline": flight.airline,
            "departure_time": flight.departure_time.isoformat(),
        },
    )

    response_data = FlightResponse(
        message="Flight created successfully",
        data=catalog.to_schema(flight),
    )

    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content=response_data.model_dump(mode="json", by_alias=True),
    )
