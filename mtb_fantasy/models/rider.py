"""Rider model."""

import enum

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from mtb_fantasy.database import Base
from mtb_fantasy.models.base import TimestampMixin


class Gender(str, enum.Enum):
    """Rider gender."""

    MALE = "male"
    FEMALE = "female"


class RiderCategory(str, enum.Enum):
    """Which team types a rider may be picked for."""

    ELITE = "elite"
    JUNIOR = "junior"
    BOTH = "both"


class Rider(Base, TimestampMixin):
    """Rider table model. ``cost`` is the live price used for team building."""

    __tablename__ = "riders"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    uci_id: Mapped[str] = mapped_column(String(50), nullable=False, unique=True, index=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    gender: Mapped[str] = mapped_column(String(10), nullable=False)
    category: Mapped[str] = mapped_column(
        String(10), nullable=False, default=RiderCategory.ELITE.value
    )
    team_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    cost: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    def __repr__(self) -> str:
        return f"<Rider(uci_id='{self.uci_id}', cost={self.cost})>"
