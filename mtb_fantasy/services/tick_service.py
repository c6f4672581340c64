"""Scheduled game tick: lock due races, settle finished ones."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from mtb_fantasy import clock
from mtb_fantasy.config import Settings, get_settings
from mtb_fantasy.errors import GameError
from mtb_fantasy.models import GameStatus
from mtb_fantasy.repositories import RaceRepository
from mtb_fantasy.schemas import GameTickResponse, TickError, TickLockResult, TickSettleResult
from mtb_fantasy.services.lock_service import LockService
from mtb_fantasy.services.settlement_service import SettlementService

logger = logging.getLogger(__name__)


async def run_game_tick(
    session_factory: async_sessionmaker[AsyncSession],
    force_lock: bool = False,
    force_settle: bool = False,
    settings: Settings | None = None,
) -> GameTickResponse:
    """
    Run one scheduler pass.

    Each race is locked or settled in its own transaction, so one failing
    race does not roll back the others.
    """
    settings = settings or get_settings()
    now = clock.now()
    outcome = GameTickResponse(now=now)

    async with session_factory() as session:
        lock_service = LockService(session, settings)
        scheduled = await RaceRepository(session).get_by_status(GameStatus.SCHEDULED)
        due_ids = [
            race.id for race in scheduled if force_lock or lock_service.get_lock_at(race) <= now
        ]

    for race_id in due_ids:
        try:
            async with session_factory() as session:
                async with session.begin():
                    result = await LockService(session, settings).lock_race(race_id, force=force_lock)
        except GameError as exc:
            logger.warning("Lock failed for race %s: %s", race_id, exc.message)
            outcome.errors.append(TickError(race_id=race_id, stage="lock", message=exc.message))
            continue
        outcome.locked.append(
            TickLockResult(
                race_id=race_id,
                locked_teams=result.locked_teams,
                skipped_teams=result.skipped_teams,
            )
        )

    async with session_factory() as session:
        settle_ids = [race.id for race in await RaceRepository(session).get_settle_candidates()]

    for race_id in settle_ids:
        try:
            async with session_factory() as session:
                async with session.begin():
                    result = await SettlementService(session, settings).settle_race(
                        race_id, force=force_settle
                    )
        except GameError as exc:
            logger.warning("Settlement failed for race %s: %s", race_id, exc.message)
            outcome.errors.append(TickError(race_id=race_id, stage="settle", message=exc.message))
            continue
        outcome.settled.append(
            TickSettleResult(
                race_id=race_id,
                updated_scores=result.updated_scores,
                results_hash=result.results_hash,
            )
        )

    logger.info(
        "Game tick: %s locked, %s settled, %s errors",
        len(outcome.locked),
        len(outcome.settled),
        len(outcome.errors),
    )
    return outcome
