"""Race model."""

import enum
from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from mtb_fantasy.database import Base
from mtb_fantasy.models.base import TimestampMixin


class GameStatus(str, enum.Enum):
    """Race lifecycle. Only ever moves forward."""

    SCHEDULED = "scheduled"
    LOCKED = "locked"
    FINAL = "final"
    SETTLED = "settled"


GAME_STATUS_ORDER = [status.value for status in GameStatus]


class Discipline(str, enum.Enum):
    """Race discipline."""

    DHI = "DHI"  # downhill
    XCO = "XCO"  # cross-country olympic


class Race(Base, TimestampMixin):
    """Race table model."""

    __tablename__ = "races"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    season_id: Mapped[int] = mapped_column(Integer, ForeignKey("seasons.id"), nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    location: Mapped[str | None] = mapped_column(String(100), nullable=True)
    start_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    discipline: Mapped[str] = mapped_column(String(10), nullable=False, default=Discipline.DHI.value)
    lock_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    game_status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=GameStatus.SCHEDULED.value, index=True
    )
    needs_resettle: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    def has_reached(self, status: GameStatus) -> bool:
        """True if the race is at ``status`` or later."""
        return GAME_STATUS_ORDER.index(self.game_status) >= GAME_STATUS_ORDER.index(status.value)

    def advance_to(self, status: GameStatus) -> bool:
        """Move forward to ``status``; never rewinds. Returns True on change."""
        if self.has_reached(status):
            return False
        self.game_status = status.value
        return True

    def __repr__(self) -> str:
        return f"<Race(id={self.id}, name='{self.name}', status={self.game_status})>"
