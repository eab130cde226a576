"""Catalog search and creation for hotels, flights and trains."""

import math
from abc import ABC, abstractmethod
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Any, Mapping, Union

import pydantic
import structlog
from sqlalchemy import ColumnElement, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import is_unique_violation
from ..core.exceptions import (
    DuplicateKeyError,
    PersistenceError,
    ValidationError,
    field_errors_from_validation,
)
from ..core.observability import metrics_collector
from ..models import Flight, Hotel, HotelAmenity, Train
from ..schemas.common import as_utc, to_naive_utc, utcnow
from ..schemas.flight import CreateFlightRequest
from ..schemas.flight import Flight as FlightSchema
from ..schemas.hotel import CreateHotelRequest, HotelSearchCriteria
from ..schemas.hotel import Hotel as HotelSchema
from ..schemas.train import CreateTrainRequest
from ..schemas.train import Train as TrainSchema
from ..schemas.trip import CreateTripRequest, TripSearchCriteria

logger = structlog.get_logger(__name__)


class ResourceType(str, Enum):
    """Catalog resource types."""
    HOTEL = "hotel"
    FLIGHT = "flight"
    TRAIN = "train"


def parse_max_price(raw: str) -> float:
    """Parse a ``maxPrice`` filter; a non-numeric bound is a malformed query."""
    try:
        value = float(raw)
    except ValueError:
        raise PersistenceError(f"Malformed maxPrice filter: {raw!r}")
    if not math.isfinite(value):
        raise PersistenceError(f"Malformed maxPrice filter: {raw!r}")
    return value


def parse_amenities(raw: str) -> list[str]:
    """Split a comma-separated amenity filter, dropping blanks."""
    return [item.strip() for item in raw.split(",") if item.strip()]


def day_window(raw: str) -> tuple[datetime, datetime]:
    """
    Return the half-open UTC window ``[day 00:00, next day 00:00)`` for a date filter.

    Accepts ``YYYY-MM-DD`` or a full ISO 8601 timestamp, in which case the
    timestamp's UTC calendar day is used.

    Raises:
        PersistenceError: If the value is not a parseable date
    """
    try:
        day = date.fromisoformat(raw)
    except ValueError:
        try:
            day = to_naive_utc(datetime.fromisoformat(raw)).date()
        except ValueError:
            raise PersistenceError(f"Malformed date filter: {raw!r}")

    start = datetime.combine(day, datetime.min.time())
    return start, start + timedelta(days=1)


class ResourceCatalog(ABC):
    """
    Per-resource query shape.

    A catalog knows its model, how to turn search criteria into filter
    conditions, how results are ordered, and how to build and render records.
    """

    resource_type: ResourceType
    model: Any
    request_schema: type[pydantic.BaseModel]

    @abstractmethod
    def build_filters(self, criteria) -> list[ColumnElement[bool]]:
        """Turn search criteria into WHERE conditions."""

    @abstractmethod
    def sort_order(self) -> list:
        """ORDER BY clauses, cheapest first."""

    @abstractmethod
    def build_record(self, payload):
        """Build an unsaved model instance from a validated request."""

    @abstractmethod
    def to_schema(self, record) -> pydantic.BaseModel:
        """Render a stored record as its response schema."""


class HotelCatalog(ResourceCatalog):
    """Hotels filtered by location, price ceiling and amenities; cheapest first."""

    resource_type = ResourceType.HOTEL
    model = Hotel
    request_schema = CreateHotelRequest

    def build_filters(self, criteria: HotelSearchCriteria) -> list[ColumnElement[bool]]:
        conditions = []

        if criteria.location:
            conditions.append(Hotel.location.icontains(criteria.location, autoescape=True))

        if criteria.max_price:
            conditions.append(Hotel.price_per_night <= parse_max_price(criteria.max_price))

        if criteria.amenities:
            names = parse_amenities(criteria.amenities)
            if names:
                conditions.append(Hotel.amenity_rows.any(HotelAmenity.name.in_(names)))

        return conditions

    def sort_order(self) -> list:
        return [Hotel.price_per_night.asc(), Hotel.created_at.asc(), Hotel.id.asc()]

    def build_record(self, payload: CreateHotelRequest) -> Hotel:
        return Hotel(
            name=payload.name,
            location=payload.location,
            price_per_night=payload.price_per_night,
            available_rooms=payload.available_rooms,
            created_at=payload.created_at or utcnow(),
            amenity_rows=[
                HotelAmenity(name=name, position=position)
                for position, name in enumerate(payload.amenities)
            ],
        )

    def to_schema(self, record: Hotel) -> HotelSchema:
        return HotelSchema(
            id=record.id,
            name=record.name,
            location=record.location,
            price_per_night=record.price_per_night,
            amenities=record.amenities,
            available_rooms=record.available_rooms,
            created_at=as_utc(record.created_at),
        )


class TripCatalog(ResourceCatalog):
    """Scheduled trips filtered by origin, destination and departure day; cheapest first."""

    def build_filters(self, criteria: TripSearchCriteria) -> list[ColumnElement[bool]]:
        model = self.model
        conditions = []

        if criteria.origin:
            conditions.append(model.origin.icontains(criteria.origin, autoescape=True))

        if criteria.destination:
            conditions.append(model.destination.icontains(criteria.destination, autoescape=True))

        if criteria.date:
            start, end = day_window(criteria.date)
            conditions.append(model.departure_time >= start)
            conditions.append(model.departure_time < end)

        return conditions

    def sort_order(self) -> list:
        model = self.model
        return [model.price.asc(), model.created_at.asc(), model.id.asc()]

    def trip_fields(self, payload: CreateTripRequest) -> dict[str, Any]:
        return {
            "origin": payload.origin,
            "destination": payload.destination,
            "departure_time": payload.departure_time,
            "arrival_time": payload.arrival_time,
            "price": payload.price,
            "available_seats": payload.available_seats,
            "created_at": payload.created_at or utcnow(),
        }

    def schema_fields(self, record) -> dict[str, Any]:
        return {
            "id": record.id,
            "origin": record.origin,
            "destination": record.destination,
            "departure_time": as_utc(record.departure_time),
            "arrival_time": as_utc(record.arrival_time),
            "price": record.price,
            "available_seats": record.available_seats,
            "created_at": as_utc(record.created_at),
        }


class FlightCatalog(TripCatalog):
    resource_type = ResourceType.FLIGHT
    model = Flight
    request_schema = CreateFlightRequest

    def build_record(self, payload: CreateFlightRequest) -> Flight:
        return Flight(airline=payload.airline, **self.trip_fields(payload))

    def to_schema(self, record: Flight) -> FlightSchema:
        return FlightSchema(airline=record.airline, **self.schema_fields(record))


class TrainCatalog(TripCatalog):
    resource_type = ResourceType.TRAIN
    model = Train
    request_schema = CreateTrainRequest

    def build_record(self, payload: CreateTrainRequest) -> Train:
        return Train(train_name=payload.train_name, **self.trip_fields(payload))

    def to_schema(self, record: Train) -> TrainSchema:
        return TrainSchema(train_name=record.train_name, **self.schema_fields(record))


CATALOGS: dict[ResourceType, ResourceCatalog] = {
    ResourceType.HOTEL: HotelCatalog(),
    ResourceType.FLIGHT: FlightCatalog(),
    ResourceType.TRAIN: TrainCatalog(),
}


def get_catalog(resource_type: ResourceType) -> ResourceCatalog:
    return CATALOGS[ResourceType(resource_type)]


class CatalogService:
    """Service for searching and creating catalog records."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def search(
        self,
        resource_type: ResourceType,
        criteria: Union[HotelSearchCriteria, TripSearchCriteria],
    ) -> list:
        """
        Search one catalog.

        Args:
            resource_type: Which catalog to query
            criteria: Optional filters; absent values impose no constraint

        Returns:
            Matching records, cheapest first

        Raises:
            PersistenceError: If a filter is malformed or the store fails
        """
        catalog = get_catalog(resource_type)
        stmt = (
            select(catalog.model)
            .where(*catalog.build_filters(criteria))
            .order_by(*catalog.sort_order())
        )

        try:
            result = await self.db.execute(stmt)
            records = list(result.scalars())
        except SQLAlchemyError as e:
            logger.error("catalog_search_failed", resource=catalog.resource_type.value, error=str(e))
            raise PersistenceError(f"{catalog.resource_type.value} search failed: {e}") from e

        metrics_collector.record_search(catalog.resource_type.value)
        logger.info(
            "catalog_search_completed",
            resource=catalog.resource_type.value,
            total_found=len(records),
            filters=criteria.model_dump(exclude_none=True),
        )
        return records

    async def create(
        self,
        resource_type: ResourceType,
        payload: Union[pydantic.BaseModel, Mapping[str, Any]],
    ):
        """
        Validate and store a new catalog record.

        Args:
            resource_type: Which catalog to insert into
            payload: A validated request schema, or raw fields to validate

        Returns:
            The stored record with its generated id and creation time

        Raises:
            ValidationError: If any field is missing or malformed (all are reported)
            DuplicateKeyError: If the store rejects the insert on a unique key
            PersistenceError: If the store fails
        """
        catalog = get_catalog(resource_type)

        if not isinstance(payload, catalog.request_schema):
            try:
                payload = catalog.request_schema.model_validate(payload)
            except pydantic.ValidationError as e:
                raise ValidationError(errors=field_errors_from_validation(e)) from e

        record = catalog.build_record(payload)

        try:
            self.db.add(record)
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            logger.warning(
                "catalog_insert_rejected",
                resource=catalog.resource_type.value,
                error=str(e),
            )
            if is_unique_violation(e):
                raise DuplicateKeyError(f"{catalog.resource_type.value.capitalize()} already exists") from e
            raise PersistenceError(f"{catalog.resource_type.value} insert violated a constraint: {e}") from e
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise PersistenceError(f"{catalog.resource_type.value} insert failed: {e}") from e

        metrics_collector.record_resource_created(catalog.resource_type.value)
        logger.info(
            "catalog_record_created",
            resource=catalog.resource_type.value,
            record_id=str(record.id),
        )
        return record
