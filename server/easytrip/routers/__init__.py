"""FastAPI routers package."""

from .auth import router as auth_router
from .flights import router as flights_router
from .health import router as health_router
from .hotels import router as hotels_router
from .metrics import router as metrics_router
from .trains import router as trains_router

__all__ = [
    "auth_router",
    "flights_router",
    "health_router",
    "hotels_router",
    "metrics_router",
    "trains_router",
]
