"""Snapshot and score repositories."""

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from mtb_fantasy.models import RaceScore, RaceSnapshot, RiderCostUpdate
from mtb_fantasy.repositories.base import BaseRepository


class SnapshotRepository(BaseRepository[RaceSnapshot]):
    """Repository for RaceSnapshot model."""

    def __init__(self, session: AsyncSession):
        super().__init__(RaceSnapshot, session)

    async def get_by_race(self, race_id: int, team_type: str | None = None) -> list[RaceSnapshot]:
        """Snapshots of a race, optionally for one team type."""
        query = select(RaceSnapshot).where(RaceSnapshot.race_id == race_id)
        if team_type:
            query = query.where(RaceSnapshot.team_type == team_type)
        result = await self.session.execute(query.order_by(RaceSnapshot.id))
        return list(result.scalars().all())


class ScoreRepository(BaseRepository[RaceScore]):
    """Repository for RaceScore model."""

    def __init__(self, session: AsyncSession):
        super().__init__(RaceScore, session)

    async def get_by_race(self, race_id: int) -> list[RaceScore]:
        """Scores of a race, best first."""
        result = await self.session.execute(
            select(RaceScore)
            .where(RaceScore.race_id == race_id)
            .order_by(RaceScore.total_points.desc(), RaceScore.id)
        )
        return list(result.scalars().all())


class CostUpdateRepository(BaseRepository[RiderCostUpdate]):
    """Repository for RiderCostUpdate model."""

    def __init__(self, session: AsyncSession):
        super().__init__(RiderCostUpdate, session)

    async def get_by_race(self, race_id: int) -> list[RiderCostUpdate]:
        result = await self.session.execute(
            select(RiderCostUpdate)
            .where(RiderCostUpdate.race_id == race_id)
            .order_by(RiderCostUpdate.uci_id)
        )
        return list(result.scalars().all())

    async def delete_by_race(self, race_id: int) -> int:
        result = await self.session.execute(
            delete(RiderCostUpdate).where(RiderCostUpdate.race_id == race_id)
        )
        return result.rowcount or 0
