"""Account model definition."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from ..core.database import Base
from .mixins import RecordMixin


class Account(RecordMixin, Base):
    """
    Account entity holding login credentials.

    ``email`` is stored lowercased and is unique at the storage layer; the
    unique index is what actually guarantees one account per email when
    signups race.
    """

    __tablename__ = "accounts"

    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:
        return f"<Account(id={self.id}, email='{self.email}')>"
