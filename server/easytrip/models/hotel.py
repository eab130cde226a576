"""Hotel model definitions."""

from uuid import UUID

from sqlalchemy import CheckConstraint, Float, ForeignKey, Integer, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..core.database import Base
from .mixins import RecordMixin


class Hotel(RecordMixin, Base):
    """Hotel entity offering rooms at a nightly price."""

    __tablename__ = "hotels"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    location: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    price_per_night: Mapped[float] = mapped_column(Float, nullable=False, index=True)
    available_rooms: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # Constraints
    __table_args__ = (
        CheckConstraint("price_per_night >= 0", name="ck_hotel_price_per_night_non_negative"),
        CheckConstraint("available_rooms >= 0", name="ck_hotel_available_rooms_non_negative"),
    )

    # Relationships
    amenity_rows: Mapped[list["HotelAmenity"]] = relationship(
        "HotelAmenity",
        back_populates="hotel",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="HotelAmenity.position",
    )

    @property
    def amenities(self) -> list[str]:
        return [row.name for row in self.amenity_rows]

    def __repr__(self) -> str:
        return f"<Hotel(id={self.id}, name='{self.name}', location='{self.location}')>"


class HotelAmenity(Base):
    """One amenity offered by a hotel."""

    __tablename__ = "hotel_amenities"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    hotel_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("hotels.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    __table_args__ = (
        UniqueConstraint("hotel_id", "name", name="uq_hotel_amenity_name"),
    )

    hotel: Mapped["Hotel"] = relationship("Hotel", back_populates="amenity_rows")

    def __repr__(self) -> str:
        return f"<HotelAmenity(hotel_id={self.hotel_id}, name='{self.name}')>"
