"""Test configuration and fixtures."""

import os

# Test database URL (in-memory SQLite for speed)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

os.environ.setdefault("DATABASE_URL", TEST_DATABASE_URL)
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("PASSWORD_HASH_ITERATIONS", "1000")

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from easytrip.core.database import Base, Database, get_db  # noqa: E402
from easytrip.core.dependencies import get_password_hasher  # noqa: E402
from easytrip.core.security import PasswordHasher  # noqa: E402
from easytrip.services.auth_service import AuthService  # noqa: E402
from easytrip.services.catalog import CatalogService  # noqa: E402


@pytest_asyncio.fixture(scope="function")
async def test_database():
    """Create a connected test database with all tables."""
    database = Database(TEST_DATABASE_URL)
    await database.connect()

    yield database

    async with database.engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await database.dispose()


@pytest_asyncio.fixture(scope="function")
async def test_session(test_database):
    """Create a test database session."""
    async with test_database.session() as session:
        yield session


@pytest.fixture
def password_hasher():
    """Cheap hasher so tests don't spend time in key stretching."""
    return PasswordHasher(iterations=1000)


@pytest.fixture
def catalog_service(test_session):
    return CatalogService(test_session)


@pytest.fixture
def auth_service(test_session, password_hasher):
    return AuthService(test_session, password_hasher)


@pytest_asyncio.fixture(scope="function")
async def test_app(test_database, test_session, password_hasher):
    """Create the application wired to the test database."""
    from easytrip.main import create_app

    app = create_app()
    app.state.database = test_database

    # Override database dependency
    async def override_get_db():
        yield test_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_password_hasher] = lambda: password_hasher

    yield app

    # Clean up
    app.dependency_overrides.clear()


@pytest_asyncio.fixture(scope="function")
async def test_client(test_app):
    """Create a test HTTP client."""
    transport = ASGITransport(app=test_app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def sample_hotel_data():
    """Sample hotel data for testing."""
    return {
        "name": "Harbour View Inn",
        "location": "Sydney, Australia",
        "pricePerNight": 180.0,
        "amenities": ["wifi", "pool", "breakfast"],
        "availableRooms": 12,
    }


@pytest.fixture
def sample_flight_data():
    """Sample flight data for testing."""
    return {
        "airline": "Qantas",
        "from": "Sydney",
        "to": "Melbourne",
        "departureTime": "2024-03-01T08:00:00Z",
        "arrivalTime": "2024-03-01T09:35:00Z",
        "price": 149.0,
        "availableSeats": 40,
    }


@pytest.fixture
def sample_train_data():
    """Sample train data for testing."""
    return {
        "trainName": "Indian Pacific",
        "from": "Sydney",
        "to": "Perth",
        "departureTime": "2024-03-01T15:00:00Z",
        "arrivalTime": "2024-03-05T15:00:00Z",
        "price": 1299.0,
    }
