"""EasyTrip travel inventory and account API."""

__version__ = "1.0.0"
