"""Train router for catalog search and creation."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse

from ..core.dependencies import get_catalog_service
from ..schemas.train import CreateTrainRequest, TrainListResponse, TrainResponse
from ..schemas.trip import TripSearchCriteria
from ..services.catalog import CatalogService, ResourceType, get_catalog

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/trains", tags=["trains"])

catalog = get_catalog(ResourceType.TRAIN)


@router.get("", response_model=TrainListResponse)
async def search_trains(
    origin: Optional[str] = Query(None, alias="from", description="Case-insensitive substring of the origin"),
    destination: Optional[str] = Query(None, alias="to", description="Case-insensitive substring of the destination"),
    date: Optional[str] = Query(None, description="Departure day, YYYY-MM-DD (UTC)"),
    service: CatalogService = Depends(get_catalog_service),
) -> JSONResponse:
    """
    Search trains.

    All filters are optional. Results are ordered by price, cheapest first.
    """
    criteria = TripSearchCriteria(origin=origin, destination=destination, date=date)
    trains = await service.search(ResourceType.TRAIN, criteria)

    response_data = TrainListResponse(
        count=len(trains),
        data=[catalog.to_schema(train) for train in trains],
    )

    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content=response_data.model_dump(mode="json", by_alias=True),
    )


@router.post("", response_model=TrainResponse, status_code=status.HTTP_201_CREATED)
async def create_train(
    request: CreateTrainRequest,
    service: CatalogService = Depends(get_catalog_service),
) -> JSONResponse:
    """Create a new train."""
    train = await service.create(ResourceType.TRAIN, request)

    logger.info(
        "Train created successfully",
        extra={"train_id": str(train.id), "train_name": train.train_name},
    )

    response_data = TrainResponse(
        message="Train created successfully",
        data=catalog.to_schema(train),
    )

    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content=response_data.model_dump(mode="json", by_alias=True),
    )
