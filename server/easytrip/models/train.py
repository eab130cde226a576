"""Train model definition."""

from sqlalchemy import CheckConstraint, String
from sqlalchemy.orm import Mapped, mapped_column

from ..core.database import Base
from .mixins import ScheduledTripMixin


class Train(ScheduledTripMixin, Base):
    """Train entity: one scheduled departure of a named train between two stations."""

    __tablename__ = "trains"

    train_name: Mapped[str] = mapped_column(String(255), nullable=False)

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_train_price_non_negative"),
        CheckConstraint("available_seats >= 0", name="ck_train_available_seats_non_negative"),
    )

    def __repr__(self) -> str:
        return (
            f"<Train(id={self.id}, train_name='{self.train_name}', "
            f"{self.origin}->{self.destination}, departs={self.departure_time})>"
        )
