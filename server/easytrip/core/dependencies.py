"""FastAPI dependencies wiring sessions and hashing into the services."""

from functools import lru_cache

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..services.auth_service import AuthService
from ..services.catalog import CatalogService
from .config import settings
from .database import get_db
from .security import PasswordHasher


@lru_cache
def get_password_hasher() -> PasswordHasher:
    """Return the process-wide password hasher configured from settings."""
    return PasswordHasher(iterations=settings.password_hash_iterations)


async def get_catalog_service(db: AsyncSession = Depends(get_db)) -> CatalogService:
    """Catalog service bound to the request's session."""
    return CatalogService(db)


async def get_auth_service(
    db: AsyncSession = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> AuthService:
    """Auth service bound to the request's session."""
    return AuthService(db, hasher)
