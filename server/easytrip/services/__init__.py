"""Service layer package."""

from .auth_service import AuthService
from .catalog import CatalogService, ResourceType

__all__ = [
    "AuthService",
    "CatalogService",
    "ResourceType",
]
