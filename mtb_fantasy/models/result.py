"""Race result models."""

import enum
from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from mtb_fantasy import clock
from mtb_fantasy.database import Base
from mtb_fantasy.models.base import TimestampMixin


class ResultStatus(str, enum.Enum):
    """Rider outcome in a race."""

    FIN = "FIN"  # finished
    DNF = "DNF"  # did not finish
    DNS = "DNS"  # did not start
    DNQ = "DNQ"  # did not qualify
    DSQ = "DSQ"  # disqualified


class RaceResult(Base, TimestampMixin):
    """One row per rider per race, replaced by the latest batch naming it."""

    __tablename__ = "race_results"
    __table_args__ = (UniqueConstraint("race_id", "uci_id", name="uq_race_result_rider"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    race_id: Mapped[int] = mapped_column(Integer, ForeignKey("races.id"), nullable=False, index=True)
    uci_id: Mapped[str] = mapped_column(String(50), nullable=False)
    status: Mapped[str] = mapped_column(String(5), nullable=False)
    position: Mapped[int | None] = mapped_column(Integer, nullable=True)  # FIN only
    qualification_position: Mapped[int | None] = mapped_column(Integer, nullable=True)
    gender: Mapped[str | None] = mapped_column(String(10), nullable=True)
    category: Mapped[str | None] = mapped_column(String(10), nullable=True)

    def __repr__(self) -> str:
        return f"<RaceResult(race_id={self.race_id}, uci_id='{self.uci_id}', status={self.status})>"


class RaceResultImport(Base):
    """Latest import for one (race, gender, category) result set."""

    __tablename__ = "race_result_imports"
    __table_args__ = (
        UniqueConstraint("race_id", "gender", "category", name="uq_result_import_set"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    race_id: Mapped[int] = mapped_column(Integer, ForeignKey("races.id"), nullable=False, index=True)
    gender: Mapped[str] = mapped_column(String(10), nullable=False)
    category: Mapped[str] = mapped_column(String(10), nullable=False)
    discipline: Mapped[str] = mapped_column(String(10), nullable=False)
    source_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    is_final: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    content_hash: Mapped[str | None] = mapped_column(String(64), nullable=True)
    row_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: clock.now(), nullable=False
    )

    def __repr__(self) -> str:
        return (
            f"<RaceResultImport(race_id={self.race_id}, set={self.gender}:{self.category}, "
            f"final={self.is_final})>"
        )
