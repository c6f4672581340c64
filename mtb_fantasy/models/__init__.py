"""SQLAlchemy models."""

from mtb_fantasy.models.race import Discipline, GameStatus, Race
from mtb_fantasy.models.result import RaceResult, RaceResultImport, ResultStatus
from mtb_fantasy.models.rider import Gender, Rider, RiderCategory
from mtb_fantasy.models.season import Season, User
from mtb_fantasy.models.snapshot import RaceScore, RaceSnapshot, RiderCostUpdate
from mtb_fantasy.models.team import MemberRole, Team, TeamMember, TeamSwap, TeamType

__all__ = [
    "Season",
    "User",
    "Rider",
    "Team",
    "TeamMember",
    "TeamSwap",
    "Race",
    "RaceResult",
    "RaceResultImport",
    "RaceSnapshot",
    "RaceScore",
    "RiderCostUpdate",
    "Discipline",
    "GameStatus",
    "Gender",
    "MemberRole",
    "ResultStatus",
    "RiderCategory",
    "TeamType",
]
