"""Frozen roster and settlement models."""

from datetime import datetime

from sqlalchemy import JSON, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from mtb_fantasy import clock
from mtb_fantasy.database import Base


class RaceSnapshot(Base):
    """Roster as it stood when the race locked. Written once per team."""

    __tablename__ = "race_snapshots"
    __table_args__ = (
        UniqueConstraint("race_id", "user_id", "team_type", name="uq_race_snapshot_team"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    race_id: Mapped[int] = mapped_column(Integer, ForeignKey("races.id"), nullable=False, index=True)
    user_id: Mapped[str] = mapped_column(String(64), ForeignKey("users.id"), nullable=False)
    team_type: Mapped[str] = mapped_column(String(10), nullable=False)
    starters_json: Mapped[list] = mapped_column(JSON, nullable=False)
    bench_json: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    total_cost_at_lock: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    snapshot_hash: Mapped[str] = mapped_column(String(64), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: clock.now(), nullable=False
    )

    def __repr__(self) -> str:
        return f"<RaceSnapshot(race_id={self.race_id}, user_id='{self.user_id}', type={self.team_type})>"


class RaceScore(Base):
    """Settled points for one team in one race."""

    __tablename__ = "race_scores"
    __table_args__ = (
        UniqueConstraint("race_id", "user_id", "team_type", name="uq_race_score_team"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    race_id: Mapped[int] = mapped_column(Integer, ForeignKey("races.id"), nullable=False, index=True)
    user_id: Mapped[str] = mapped_column(String(64), ForeignKey("users.id"), nullable=False)
    team_type: Mapped[str] = mapped_column(String(10), nullable=False)
    total_points: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    breakdown_json: Mapped[dict] = mapped_column(JSON, nullable=False)
    snapshot_hash_used: Mapped[str] = mapped_column(String(64), nullable=False)
    results_hash_used: Mapped[str] = mapped_column(String(64), nullable=False)
    settled_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: clock.now(), nullable=False
    )

    def __repr__(self) -> str:
        return f"<RaceScore(race_id={self.race_id}, user_id='{self.user_id}', points={self.total_points})>"


class RiderCostUpdate(Base):
    """Audit row for a price change caused by a race."""

    __tablename__ = "rider_cost_updates"
    __table_args__ = (UniqueConstraint("race_id", "uci_id", name="uq_rider_cost_update"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    race_id: Mapped[int] = mapped_column(Integer, ForeignKey("races.id"), nullable=False, index=True)
    uci_id: Mapped[str] = mapped_column(String(50), nullable=False)
    status: Mapped[str] = mapped_column(String(5), nullable=False)
    position: Mapped[int | None] = mapped_column(Integer, nullable=True)
    previous_cost: Mapped[int] = mapped_column(Integer, nullable=False)
    updated_cost: Mapped[int] = mapped_column(Integer, nullable=False)
    delta: Mapped[int] = mapped_column(Integer, nullable=False)
    results_hash: Mapped[str] = mapped_column(String(64), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: clock.now(), nullable=False
    )
