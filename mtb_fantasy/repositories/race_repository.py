"""Race repository."""

from sqlalchemy import delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from mtb_fantasy.models import (
    GameStatus,
    Race,
    RaceResult,
    RaceResultImport,
    RaceScore,
    RaceSnapshot,
    RiderCostUpdate,
    TeamSwap,
)
from mtb_fantasy.repositories.base import BaseRepository

# Children first so foreign keys hold at every step
RACE_DEPENDENTS = (
    RaceSnapshot,
    RaceResult,
    RaceResultImport,
    RaceScore,
    RiderCostUpdate,
    TeamSwap,
)


class RaceRepository(BaseRepository[Race]):
    """Repository for Race model."""

    def __init__(self, session: AsyncSession):
        super().__init__(Race, session)

    async def get_by_status(self, status: GameStatus) -> list[Race]:
        """Races in one lifecycle state, earliest first."""
        result = await self.session.execute(
            select(Race)
            .where(Race.game_status == status.value)
            .order_by(Race.start_date, Race.id)
        )
        return list(result.scalars().all())

    async def get_settle_candidates(self) -> list[Race]:
        """Races with final results or flagged for resettlement."""
        result = await self.session.execute(
            select(Race)
            .where(
                or_(
                    Race.game_status == GameStatus.FINAL.value,
                    Race.needs_resettle.is_(True),
                )
            )
            .order_by(Race.start_date)
        )
        return list(result.scalars().all())

    async def get_latest_settled(self, season_id: int) -> Race | None:
        """Most recent settled race of a season."""
        result = await self.session.execute(
            select(Race)
            .where(
                Race.season_id == season_id,
                Race.game_status == GameStatus.SETTLED.value,
            )
            .order_by(Race.start_date.desc(), Race.id.desc())
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def delete_with_dependents(self, race: Race) -> dict[str, int]:
        """Delete a race and every row that references it. Returns row counts."""
        removed = {}
        for model in RACE_DEPENDENTS:
            result = await self.session.execute(delete(model).where(model.race_id == race.id))
            removed[model.__tablename__] = result.rowcount or 0

        await self.session.delete(race)
        await self.session.flush()
        return removed
