"""Race API routes."""

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from mtb_fantasy.database import get_db
from mtb_fantasy.errors import GameError
from mtb_fantasy.schemas import (
    DeleteRaceResponse,
    ForceRequest,
    LockRaceResponse,
    RaceListResponse,
    RaceResponse,
    RaceScoreResponse,
    RaceSnapshotResponse,
    ResultImportRequest,
    ResultImportResponse,
    ResultSetStatus,
    SettleRaceResponse,
)
from mtb_fantasy.services import (
    LockService,
    RaceService,
    ResultImportService,
    SettlementService,
)

router = APIRouter(prefix="/races", tags=["races"])


def _http_error(exc: GameError) -> HTTPException:
    return HTTPException(status_code=exc.status_code, detail=exc.message)


@router.get("", response_model=RaceListResponse)
async def get_races(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    season_id: int | None = None,
    game_status: str | None = None,
    db: AsyncSession = Depends(get_db),
):
    """Get all races with pagination."""
    service = RaceService(db)
    races, total = await service.list_races(
        skip=skip, limit=limit, season_id=season_id, game_status=game_status
    )
    return RaceListResponse(items=races, total=total)


@router.get("/{race_id}", response_model=RaceResponse)
async def get_race(
    race_id: int,
    db: AsyncSession = Depends(get_db),
):
    """Get a race by ID."""
    try:
        return await RaceService(db).get_race(race_id)
    except GameError as exc:
        raise _http_error(exc) from exc


@router.delete("/{race_id}", response_model=DeleteRaceResponse)
async def delete_race(
    race_id: int,
    db: AsyncSession = Depends(get_db),
):
    """Delete a race and everything recorded against it."""
    try:
        return await RaceService(db).delete_race(race_id)
    except GameError as exc:
        raise _http_error(exc) from exc


@router.post("/{race_id}/lock", response_model=LockRaceResponse)
async def lock_race(
    race_id: int,
    data: ForceRequest | None = None,
    db: AsyncSession = Depends(get_db),
):
    """Freeze team rosters for a race."""
    try:
        return await LockService(db).lock_race(race_id, force=data.force if data else False)
    except GameError as exc:
        raise _http_error(exc) from exc


@router.post("/{race_id}/results", response_model=ResultImportResponse)
async def import_results(
    race_id: int,
    data: ResultImportRequest,
    db: AsyncSession = Depends(get_db),
):
    """Import one gender/category result batch."""
    try:
        return await ResultImportService(db).upsert_race_results(race_id, data)
    except GameError as exc:
        raise _http_error(exc) from exc


@router.post("/{race_id}/settle", response_model=SettleRaceResponse)
async def settle_race(
    race_id: int,
    data: ForceRequest | None = None,
    db: AsyncSession = Depends(get_db),
):
    """Score every snapshot of a race."""
    try:
        return await SettlementService(db).settle_race(race_id, force=data.force if data else False)
    except GameError as exc:
        raise _http_error(exc) from exc


@router.get("/{race_id}/snapshots", response_model=list[RaceSnapshotResponse])
async def get_snapshots(
    race_id: int,
    db: AsyncSession = Depends(get_db),
):
    try:
        return await RaceService(db).get_snapshots(race_id)
    except GameError as exc:
        raise _http_error(exc) from exc


@router.get("/{race_id}/scores", response_model=list[RaceScoreResponse])
async def get_scores(
    race_id: int,
    db: AsyncSession = Depends(get_db),
):
    try:
        return await RaceService(db).get_scores(race_id)
    except GameError as exc:
        raise _http_error(exc) from exc


@router.get("/{race_id}/result-sets", response_model=list[ResultSetStatus])
async def get_result_sets(
    race_id: int,
    db: AsyncSession = Depends(get_db),
):
    """Completeness of each required result set."""
    try:
        return await RaceService(db).get_result_sets(race_id)
    except GameError as exc:
        raise _http_error(exc) from exc
