"""Models module exporting all database models."""

from .account import Account
from .flight import Flight
from .hotel import Hotel, HotelAmenity
from .train import Train

__all__ = [
    # Catalog entities
    "Hotel",
    "HotelAmenity",
    "Flight",
    "Train",

    # Credential entity
    "Account",
]
