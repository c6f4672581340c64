"""Race lifecycle schemas."""

from datetime import datetime

from pydantic import Field

from mtb_fantasy.schemas.common import BaseSchema, TimestampSchema


class RaceResponse(TimestampSchema):
    """Race response schema."""

    id: int
    season_id: int
    name: str
    location: str | None = None
    start_date: datetime
    end_date: datetime
    discipline: str
    lock_at: datetime | None = None
    game_status: str
    needs_resettle: bool


class RaceListResponse(BaseSchema):
    """Race list response schema."""

    items: list[RaceResponse]
    total: int


class LockRaceResponse(BaseSchema):
    """Outcome of a lock pass."""

    race_id: int
    locked_teams: int = Field(0, description="Snapshots written")
    skipped_teams: int = Field(0, description="Teams already frozen or with an invalid roster")
    lock_at: datetime
    status: str
    locked: bool


class SettleRaceResponse(BaseSchema):
    """Outcome of a settlement pass."""

    race_id: int
    results_hash: str
    updated_scores: int = Field(0, description="Scores written; 0 when nothing changed")
    cost_updates: int = 0


class DeleteRaceResponse(BaseSchema):
    """Rows removed by a race delete."""

    race_id: int
    name: str
    deleted: bool = True
    removed: dict[str, int] = Field(default_factory=dict)


class ResultSetStatus(BaseSchema):
    """Completeness of one required result set."""

    gender: str
    category: str
    label: str
    is_final: bool
    row_count: int = 0
    discipline: str | None = None
    source_url: str | None = None
    updated_at: datetime | None = None


class TickLockResult(BaseSchema):
    race_id: int
    locked_teams: int
    skipped_teams: int


class TickSettleResult(BaseSchema):
    race_id: int
    updated_scores: int
    results_hash: str


class TickError(BaseSchema):
    race_id: int
    stage: str
    message: str


class GameTickResponse(BaseSchema):
    """Summary of a scheduler pass."""

    now: datetime
    locked: list[TickLockResult] = Field(default_factory=list)
    settled: list[TickSettleResult] = Field(default_factory=list)
    errors: list[TickError] = Field(default_factory=list)
