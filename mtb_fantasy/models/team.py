"""Team roster models."""

import enum
from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from mtb_fantasy import clock
from mtb_fantasy.database import Base
from mtb_fantasy.models.base import TimestampMixin


class TeamType(str, enum.Enum):
    """Team type enum."""

    ELITE = "elite"
    JUNIOR = "junior"


class MemberRole(str, enum.Enum):
    """Roster role."""

    STARTER = "STARTER"
    BENCH = "BENCH"


class Team(Base, TimestampMixin):
    """Fantasy team table model (one per user, season and team type)."""

    __tablename__ = "teams"
    __table_args__ = (
        UniqueConstraint("season_id", "user_id", "team_type", name="uq_team_season_user_type"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    season_id: Mapped[int] = mapped_column(Integer, ForeignKey("seasons.id"), nullable=False)
    user_id: Mapped[str] = mapped_column(String(64), ForeignKey("users.id"), nullable=False)
    team_type: Mapped[str] = mapped_column(String(10), nullable=False, default=TeamType.ELITE.value)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    budget_cap: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_points: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    swaps_used: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    swaps_remaining: Mapped[int] = mapped_column(Integer, nullable=False, default=2)
    is_locked: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    locked_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    # Relationships
    members = relationship("TeamMember", back_populates="team", cascade="all, delete-orphan")

    def __repr__(self) -> str:
        return f"<Team(id={self.id}, name='{self.name}', type={self.team_type})>"


class TeamMember(Base, TimestampMixin):
    """Current, mutable roster entry."""

    __tablename__ = "team_members"
    __table_args__ = (UniqueConstraint("team_id", "uci_id", name="uq_team_member"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    team_id: Mapped[int] = mapped_column(Integer, ForeignKey("teams.id"), nullable=False)
    uci_id: Mapped[str] = mapped_column(String(50), ForeignKey("riders.uci_id"), nullable=False)
    role: Mapped[str] = mapped_column(String(10), nullable=False, default=MemberRole.STARTER.value)
    starter_index: Mapped[int | None] = mapped_column(Integer, nullable=True)  # null for bench
    gender: Mapped[str] = mapped_column(String(10), nullable=False)
    cost_at_save: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # Relationships
    team = relationship("Team", back_populates="members")

    def __repr__(self) -> str:
        return f"<TeamMember(team_id={self.team_id}, uci_id='{self.uci_id}', role={self.role})>"


class TeamSwap(Base):
    """Swap history. Written by the roster editor, removed with its race."""

    __tablename__ = "team_swaps"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    team_id: Mapped[int] = mapped_column(Integer, ForeignKey("teams.id"), nullable=False)
    race_id: Mapped[int] = mapped_column(Integer, ForeignKey("races.id"), nullable=False)
    removed_uci_id: Mapped[str] = mapped_column(String(50), nullable=False)
    added_uci_id: Mapped[str] = mapped_column(String(50), nullable=False)
    swapped_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: clock.now(), nullable=False
    )
