"""Unit tests for catalog search and creation."""

from datetime import datetime

import pytest
from sqlalchemy.exc import IntegrityError

from easytrip.core.database import is_unique_violation
from easytrip.core.exceptions import DuplicateKeyError, PersistenceError, ValidationError
from easytrip.schemas.flight import CreateFlightRequest
from easytrip.schemas.hotel import CreateHotelRequest, HotelSearchCriteria
from easytrip.schemas.train import CreateTrainRequest
from easytrip.schemas.trip import TripSearchCriteria
from easytrip.services.catalog import ResourceType, TripCatalog, get_catalog


def hotel(name, location="Lisbon", price=100.0, **extra):
    return CreateHotelRequest(name=name, location=location, pricePerNight=price, **extra)


def flight(airline, origin, destination, departs, price=100.0):
    return CreateFlightRequest(
        airline=airline,
        origin=origin,
        destination=destination,
        departure_time=departs,
        arrival_time=departs,
        price=price,
    )


@pytest.mark.asyncio
async def test_create_hotel_defaults_available_rooms(catalog_service):
    """Test that omitted availableRooms is stored as zero."""
    record = await catalog_service.create(ResourceType.HOTEL, hotel("Casa Azul"))

    assert record.id is not None
    assert record.available_rooms == 0
    assert record.created_at is not None


@pytest.mark.asyncio
async def test_create_hotel_preserves_available_rooms(catalog_service):
    """Test that a supplied availableRooms is kept exactly."""
    record = await catalog_service.create(
        ResourceType.HOTEL, hotel("Casa Azul", availableRooms=7)
    )

    assert record.available_rooms == 7


@pytest.mark.asyncio
async def test_create_hotel_keeps_supplied_created_at(catalog_service):
    """Test that an explicit createdAt is not overwritten."""
    record = await catalog_service.create(
        ResourceType.HOTEL, hotel("Casa Azul", createdAt="2023-12-31T23:00:00Z")
    )

    assert record.created_at == datetime(2023, 12, 31, 23, 0, 0)


@pytest.mark.asyncio
async def test_create_from_raw_payload_reports_every_missing_field(catalog_service):
    """Test that validation lists all failed fields, not just the first."""
    with pytest.raises(ValidationError) as exc_info:
        await catalog_service.create(ResourceType.HOTEL, {"name": "Nameless"})

    fields = {error["field"] for error in exc_info.value.errors}
    assert fields == {"location", "pricePerNight"}


@pytest.mark.asyncio
async def test_create_rejects_negative_price(catalog_service):
    """Test that negative prices fail validation."""
    with pytest.raises(ValidationError) as exc_info:
        await catalog_service.create(
            ResourceType.FLIGHT,
            {
                "airline": "TAP",
                "from": "Lisbon",
                "to": "Porto",
                "departureTime": "2024-03-01T08:00:00",
                "arrivalTime": "2024-03-01T09:00:00",
                "price": -1,
            },
        )

    assert [error["field"] for error in exc_info.value.errors] == ["price"]


@pytest.mark.asyncio
async def test_create_does_not_enforce_arrival_after_departure(catalog_service):
    """Test that an arrival before departure is accepted as-is."""
    record = await catalog_service.create(
        ResourceType.TRAIN,
        CreateTrainRequest(
            trainName="Alfa Pendular",
            origin="Porto",
            destination="Lisbon",
            departure_time=datetime(2024, 3, 1, 10, 0),
            arrival_time=datetime(2024, 3, 1, 7, 0),
            price=30.0,
        ),
    )

    assert record.arrival_time < record.departure_time
    assert record.available_seats == 0


@pytest.mark.asyncio
async def test_create_translates_integrity_error(catalog_service, test_session, monkeypatch):
    """Test that a storage-level uniqueness rejection becomes DuplicateKeyError."""
    async def failing_commit():
        raise IntegrityError("INSERT INTO hotels", {}, Exception("UNIQUE constraint failed"))

    monkeypatch.setattr(test_session, "commit", failing_commit)

    with pytest.raises(DuplicateKeyError):
        await catalog_service.create(ResourceType.HOTEL, hotel("Casa Azul"))


@pytest.mark.asyncio
async def test_search_hotels_sorted_by_price(catalog_service):
    """Test that hotels come back cheapest first."""
    for price in (300, 100, 200):
        await catalog_service.create(ResourceType.HOTEL, hotel(f"Hotel {price}", price=price))

    results = await catalog_service.search(ResourceType.HOTEL, HotelSearchCriteria())

    assert [record.price_per_night for record in results] == [100, 200, 300]


@pytest.mark.asyncio
async def test_search_hotels_location_is_case_insensitive_substring(catalog_service):
    """Test location matching ignores case and matches inside the value."""
    await catalog_service.create(ResourceType.HOTEL, hotel("A", location="Paris, France"))
    await catalog_service.create(ResourceType.HOTEL, hotel("B", location="Rome, Italy"))

    results = await catalog_service.search(
        ResourceType.HOTEL, HotelSearchCriteria(location="PARIS")
    )

    assert [record.name for record in results] == ["A"]


@pytest.mark.asyncio
async def test_search_hotels_location_treats_wildcards_literally(catalog_service):
    """Test that LIKE wildcards in the filter do not match everything."""
    await catalog_service.create(ResourceType.HOTEL, hotel("A", location="Paris"))

    results = await catalog_service.search(ResourceType.HOTEL, HotelSearchCriteria(location="%"))

    assert results == []


@pytest.mark.asyncio
async def test_search_hotels_max_price_is_inclusive(catalog_service):
    """Test that maxPrice keeps hotels priced exactly at the bound."""
    for price in (99.99, 150, 150.01):
        await catalog_service.create(ResourceType.HOTEL, hotel(f"Hotel {price}", price=price))

    results = await catalog_service.search(
        ResourceType.HOTEL, HotelSearchCriteria(max_price="150")
    )

    assert [record.price_per_night for record in results] == [99.99, 150]


@pytest.mark.asyncio
async def test_search_hotels_matches_any_listed_amenity(catalog_service):
    """Test that a hotel needs only one of the requested amenities."""
    await catalog_service.create(ResourceType.HOTEL, hotel("Spa", price=1, amenities=["spa"]))
    await catalog_service.create(ResourceType.HOTEL, hotel("Pool", price=2, amenities=["pool", "wifi"]))
    await catalog_service.create(ResourceType.HOTEL, hotel("Bare", price=3))

    results = await catalog_service.search(
        ResourceType.HOTEL, HotelSearchCriteria(amenities="pool, spa")
    )

    assert [record.name for record in results] == ["Spa", "Pool"]
    assert results[1].amenities == ["pool", "wifi"]


@pytest.mark.asyncio
async def test_search_hotels_malformed_max_price(catalog_service):
    """Test that a non-numeric maxPrice surfaces as a persistence failure."""
    with pytest.raises(PersistenceError):
        await catalog_service.search(ResourceType.HOTEL, HotelSearchCriteria(max_price="cheap"))


@pytest.mark.asyncio
async def test_search_flights_by_day(catalog_service):
    """Test that the date filter keeps only departures on that calendar day."""
    first = await catalog_service.create(
        ResourceType.FLIGHT, flight("TAP", "Lisbon", "Madrid", datetime(2024, 3, 1, 8, 0))
    )
    await catalog_service.create(
        ResourceType.FLIGHT, flight("TAP", "Lisbon", "Madrid", datetime(2024, 3, 2, 8, 0))
    )

    results = await catalog_service.search(
        ResourceType.FLIGHT, TripSearchCriteria(date="2024-03-01")
    )

    assert [record.id for record in results] == [first.id]


@pytest.mark.asyncio
async def test_search_flights_day_boundaries(catalog_service):
    """Test that midnight belongs to its own day and not the previous one."""
    await catalog_service.create(
        ResourceType.FLIGHT, flight("A", "X", "Y", datetime(2024, 3, 1, 0, 0), price=1)
    )
    await catalog_service.create(
        ResourceType.FLIGHT, flight("B", "X", "Y", datetime(2024, 3, 1, 23, 59, 59), price=2)
    )
    await catalog_service.create(
        ResourceType.FLIGHT, flight("C", "X", "Y", datetime(2024, 3, 2, 0, 0), price=3)
    )

    results = await catalog_service.search(
        ResourceType.FLIGHT, TripSearchCriteria(date="2024-03-01")
    )

    assert [record.airline for record in results] == ["A", "B"]


@pytest.mark.asyncio
async def test_search_flights_route_filters(catalog_service):
    """Test origin and destination substring filters together."""
    await catalog_service.create(ResourceType.FLIGHT, flight("A", "New York JFK", "London LHR", datetime(2024, 3, 1)))
    await catalog_service.create(ResourceType.FLIGHT, flight("B", "New York JFK", "Paris CDG", datetime(2024, 3, 1)))
    await catalog_service.create(ResourceType.FLIGHT, flight("C", "Boston", "London LHR", datetime(2024, 3, 1)))

    results = await catalog_service.search(
        ResourceType.FLIGHT, TripSearchCriteria(origin="new york", destination="lhr")
    )

    assert [record.airline for record in results] == ["A"]


@pytest.mark.asyncio
async def test_search_trains_sorted_by_price(catalog_service):
    """Test that trains come back cheapest first."""
    for price in (55.0, 12.5, 30.0):
        await catalog_service.create(
            ResourceType.TRAIN,
            CreateTrainRequest(
                trainName=f"Train {price}",
                origin="Berlin",
                destination="Munich",
                departure_time=datetime(2024, 3, 1, 9, 0),
                arrival_time=datetime(2024, 3, 1, 13, 0),
                price=price,
            ),
        )

    results = await catalog_service.search(ResourceType.TRAIN, TripSearchCriteria())

    assert [record.price for record in results] == [12.5, 30.0, 55.0]


@pytest.mark.asyncio
async def test_search_malformed_date(catalog_service):
    """Test that an unparseable date surfaces as a persistence failure."""
    with pytest.raises(PersistenceError):
        await catalog_service.search(ResourceType.TRAIN, TripSearchCriteria(date="next tuesday"))


@pytest.mark.asyncio
async def test_search_is_repeatable(catalog_service):
    """Test that the same search twice gives the same ordered results."""
    for price in (200, 100, 100, 300):
        await catalog_service.create(ResourceType.HOTEL, hotel(f"Hotel {price}", price=price))

    first = await catalog_service.search(ResourceType.HOTEL, HotelSearchCriteria())
    second = await catalog_service.search(ResourceType.HOTEL, HotelSearchCriteria())

    assert [record.id for record in first] == [record.id for record in second]


def test_to_schema_renders_camel_case_and_utc():
    """Test that responses use camelCase names and UTC timestamps."""
    record = get_catalog(ResourceType.FLIGHT).build_record(
        flight("TAP", "Lisbon", "Madrid", datetime(2024, 3, 1, 8, 0))
    )
    record.id = "00000000-0000-0000-0000-000000000001"

    data = get_catalog(ResourceType.FLIGHT).to_schema(record).model_dump(mode="json", by_alias=True)

    assert data["from"] == "Lisbon"
    assert data["to"] == "Madrid"
    assert data["departureTime"] == "2024-03-01T08:00:00Z"
    assert data["availableSeats"] == 0


@pytest.mark.asyncio
async def test_create_check_constraint_failure_is_not_a_duplicate(catalog_service):
    """Test that a non-unique integrity failure surfaces as a persistence failure."""
    # Skip schema validation so the negative price reaches the CHECK constraint
    payload = CreateHotelRequest.model_construct(
        name="Underwater Hotel",
        location="Atlantis",
        price_per_night=-5.0,
        amenities=[],
        available_rooms=0,
        created_at=None,
    )

    with pytest.raises(PersistenceError):
        await catalog_service.create(ResourceType.HOTEL, payload)


@pytest.mark.parametrize(
    "orig,expected",
    [
        (Exception("UNIQUE constraint failed: accounts.email"), True),
        (Exception('duplicate key value violates unique constraint "accounts_email_key"'), True),
        (Exception("CHECK constraint failed: ck_hotel_price_per_night_non_negative"), False),
        (Exception("NOT NULL constraint failed: hotels.name"), False),
    ],
)
def test_is_unique_violation_by_message(orig, expected):
    assert is_unique_violation(IntegrityError("INSERT", {}, orig)) is expected


def test_is_unique_violation_by_sqlstate():
    class DriverError(Exception):
        sqlstate = "23505"

    assert is_unique_violation(IntegrityError("INSERT", {}, DriverError("rejected")))


def test_catalog_without_renderer_cannot_be_built():
    """Test that a catalog missing an override fails at construction."""
    class PartialCatalog(TripCatalog):
        def build_record(self, payload):
            return None

    with pytest.raises(TypeError):
        PartialCatalog()
