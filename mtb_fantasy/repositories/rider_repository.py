"""Rider repository."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from mtb_fantasy.models import Rider
from mtb_fantasy.repositories.base import BaseRepository


class RiderRepository(BaseRepository[Rider]):
    """Repository for Rider model."""

    def __init__(self, session: AsyncSession):
        super().__init__(Rider, session)

    async def get_by_uci_id(self, uci_id: str) -> Rider | None:
        result = await self.session.execute(select(Rider).where(Rider.uci_id == uci_id))
        return result.scalar_one_or_none()

    async def get_by_uci_ids(self, uci_ids: list[str]) -> dict[str, Rider]:
        """Riders keyed by UCI id. Unknown ids are absent."""
        if not uci_ids:
            return {}
        result = await self.session.execute(
            select(Rider).where(Rider.uci_id.in_(set(uci_ids)))
        )
        return {rider.uci_id: rider for rider in result.scalars().all()}
