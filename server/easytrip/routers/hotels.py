"""Hotel router for catalog search and creation."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse

from ..core.dependencies import get_catalog_service
from ..schemas.hotel import CreateHotelRequest, HotelListResponse, HotelResponse, HotelSearchCriteria
from ..services.catalog import CatalogService, ResourceType, get_catalog

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/hotels", tags=["hotels"])

catalog = get_catalog(ResourceType.HOTEL)


@router.get("", response_model=HotelListResponse)
async def search_hotels(
    location: Optional[str] = Query(None, description="Case-insensitive substring of the location"),
    max_price: Optional[str] = Query(None, alias="maxPrice", description="Inclusive upper bound on pricePerNight"),
    amenities: Optional[str] = Query(None, description="Comma-separated amenities; any one must match"),
    service: CatalogService = Depends(get_catalog_service),
) -> JSONResponse:
    """
    Search hotels.

    All filters are optional. Results are ordered by pricePerNight, cheapest first.
    """
    criteria = HotelSearchCriteria(location=location, max_price=max_price, amenities=amenities)
    hotels = await service.search(ResourceType.HOTEL, criteria)

    response_data = HotelListResponse(
        count=len(hotels),
        data=[catalog.to_schema(hotel) for hotel in hotels],
    )

    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content=response_data.model_dump(mode="json", by_alias=True),
    )


@router.post("", response_model=HotelResponse, status_code=status.HTTP_201_CREATED)
async def create_hotel(
    request: CreateHotelRequest,
    service: CatalogService = Depends(get_catalog_service),
) -> JSONResponse:
    """Create a new hotel."""
    hotel = await service.create(ResourceType.HOTEL, request)

    logger.info(
        "Hotel created successfully",
        extra={"hotel_id": str(hotel.id), "location": hotel.location},
    )

    response_data = HotelResponse(
        message="Hotel created successfully",
        data=catalog.to_schema(hotel),
    )

    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content=response_data.model_dump(mode="json", by_alias=True),
    )
