"""Data access repositories."""

from mtb_fantasy.repositories.base import BaseRepository
from mtb_fantasy.repositories.race_repository import RaceRepository
from mtb_fantasy.repositories.result_repository import ResultRepository
from mtb_fantasy.repositories.rider_repository import RiderRepository
from mtb_fantasy.repositories.snapshot_repository import (
    CostUpdateRepository,
    ScoreRepository,
    SnapshotRepository,
)
from mtb_fantasy.repositories.team_repository import TeamRepository

__all__ = [
    "BaseRepository",
    "RaceRepository",
    "ResultRepository",
    "RiderRepository",
    "TeamRepository",
    "SnapshotRepository",
    "ScoreRepository",
    "CostUpdateRepository",
]
