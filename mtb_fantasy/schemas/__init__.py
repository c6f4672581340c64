"""Pydantic schemas."""

from mtb_fantasy.schemas.common import (
    BaseSchema,
    CategoryEnum,
    ForceRequest,
    GenderEnum,
    TeamTypeEnum,
    TimestampSchema,
)
from mtb_fantasy.schemas.race import (
    DeleteRaceResponse,
    GameTickResponse,
    LockRaceResponse,
    RaceListResponse,
    RaceResponse,
    ResultSetStatus,
    SettleRaceResponse,
    TickError,
    TickLockResult,
    TickSettleResult,
)
from mtb_fantasy.schemas.result import (
    RaceResultInput,
    ResultImportRequest,
    ResultImportResponse,
)
from mtb_fantasy.schemas.snapshot import (
    LeaderboardEntryResponse,
    RaceScoreResponse,
    RaceSnapshotResponse,
    SnapshotRider,
)

__all__ = [
    # Common
    "BaseSchema",
    "TimestampSchema",
    "ForceRequest",
    "GenderEnum",
    "CategoryEnum",
    "TeamTypeEnum",
    # Race
    "RaceResponse",
    "RaceListResponse",
    "LockRaceResponse",
    "SettleRaceResponse",
    "DeleteRaceResponse",
    "ResultSetStatus",
    "GameTickResponse",
    "TickLockResult",
    "TickSettleResult",
    "TickError",
    # Result
    "RaceResultInput",
    "ResultImportRequest",
    "ResultImportResponse",
    # Snapshot / score
    "SnapshotRider",
    "RaceSnapshotResponse",
    "RaceScoreResponse",
    "LeaderboardEntryResponse",
]
