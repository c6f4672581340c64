"""Business logic services."""

from mtb_fantasy.services.cost_service import CostRepricer, CostUpdateOutcome
from mtb_fantasy.services.leaderboard_service import LeaderboardService
from mtb_fantasy.services.lock_service import LockService
from mtb_fantasy.services.race_service import RaceService
from mtb_fantasy.services.result_service import ResultImportService
from mtb_fantasy.services.settlement_service import SettlementService
from mtb_fantasy.services.tick_service import run_game_tick

__all__ = [
    "RaceService",
    "LockService",
    "ResultImportService",
    "SettlementService",
    "CostRepricer",
    "CostUpdateOutcome",
    "LeaderboardService",
    "run_game_tick",
]
