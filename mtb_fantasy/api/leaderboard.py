"""Leaderboard API routes."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from mtb_fantasy.database import get_db
from mtb_fantasy.schemas import LeaderboardEntryResponse, TeamTypeEnum
from mtb_fantasy.services import LeaderboardService

router = APIRouter(prefix="/leaderboard", tags=["leaderboard"])


@router.get("", response_model=list[LeaderboardEntryResponse])
async def get_leaderboard(
    season_id: int = Query(...),
    team_type: TeamTypeEnum = TeamTypeEnum.ELITE,
    db: AsyncSession = Depends(get_db),
):
    """Season standings for one team type."""
    service = LeaderboardService(db)
    entries = await service.get_leaderboard(season_id, team_type.value)
    return [LeaderboardEntryResponse.model_validate(entry) for entry in entries]
