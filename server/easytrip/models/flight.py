"""Flight model definition."""

from sqlalchemy import CheckConstraint, String
from sqlalchemy.orm import Mapped, mapped_column

from ..core.database import Base
from .mixins import ScheduledTripMixin


class Flight(ScheduledTripMixin, Base):
    """Flight entity: one scheduled departure of an airline between two places."""

    __tablename__ = "flights"

    airline: Mapped[str] = mapped_column(String(255), nullable=False)

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_flight_price_non_negative"),
        CheckConstraint("available_seats >= 0", name="ck_flight_available_seats_non_negative"),
    )

    def __repr__(self) -> str:
        return (
            f"<Flight(id={self.id}, airline='{self.airline}', "
            f"{self.origin}->{self.destination}, departs={self.departure_time})>"
        )
