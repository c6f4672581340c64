"""API routers."""

from mtb_fantasy.api.leaderboard import router as leaderboard_router
from mtb_fantasy.api.races import router as races_router

__all__ = [
    "races_router",
    "leaderboard_router",
]
