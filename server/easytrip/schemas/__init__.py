"""Pydantic schemas for request/response validation."""

from .auth import *  # noqa: F403
from .common import *  # noqa: F403
from .flight import *  # noqa: F403
from .health import *  # noqa: F403
from .hotel import *  # noqa: F403
from .train import *  # noqa: F403
from .trip import *  # noqa: F403
