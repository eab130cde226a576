"""Column sets shared by the catalog models."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import DateTime, Float, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column


class RecordMixin:
    """Generated identifier and creation timestamp (naive UTC)."""

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)


class ScheduledTripMixin(RecordMixin):
    """Route, schedule, fare and seat stock shared by flights and trains."""

    origin: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    destination: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    departure_time: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)
    arrival_time: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    price: Mapped[float] = mapped_column(Float, nullable=False, index=True)
    available_seats: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
