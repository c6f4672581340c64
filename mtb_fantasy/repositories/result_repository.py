"""Race result repository."""

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from mtb_fantasy import clock
from mtb_fantasy.models import RaceResult, RaceResultImport
from mtb_fantasy.repositories.base import BaseRepository


class ResultRepository(BaseRepository[RaceResult]):
    """Repository for RaceResult and RaceResultImport models."""

    def __init__(self, session: AsyncSession):
        super().__init__(RaceResult, session)

    async def get_by_race(self, race_id: int) -> list[RaceResult]:
        """Get all results for a race, ordered by UCI id."""
        result = await self.session.execute(
            select(RaceResult)
            .where(RaceResult.race_id == race_id)
            .order_by(RaceResult.uci_id)
        )
        return list(result.scalars().all())

    async def upsert_results(self, race_id: int, rows: list[dict[str, Any]]) -> int:
        """Replace the named rows wholesale; leave the others untouched."""
        uci_ids = [row["uci_id"] for row in rows]
        result = await self.session.execute(
            select(RaceResult).where(
                RaceResult.race_id == race_id,
                RaceResult.uci_id.in_(uci_ids),
            )
        )
        existing = {row.uci_id: row for row in result.scalars().all()}

        for row in rows:
            current = existing.get(row["uci_id"])
            if current is None:
                self.session.add(RaceResult(race_id=race_id, **row))
                continue
            for key, value in row.items():
                setattr(current, key, value)

        await self.session.flush()
        return len(rows)

    async def get_imports(self, race_id: int) -> list[RaceResultImport]:
        """Import rows for a race."""
        result = await self.session.execute(
            select(RaceResultImport)
            .where(RaceResultImport.race_id == race_id)
            .order_by(RaceResultImport.gender, RaceResultImport.category)
        )
        return list(result.scalars().all())

    async def upsert_import(
        self,
        race_id: int,
        gender: str,
        category: str,
        data: dict[str, Any],
    ) -> RaceResultImport:
        """Overwrite the import row for one (race, gender, category) set."""
        result = await self.session.execute(
            select(RaceResultImport).where(
                RaceResultImport.race_id == race_id,
                RaceResultImport.gender == gender,
                RaceResultImport.category == category,
            )
        )
        row = result.scalar_one_or_none()
        if row is None:
            row = RaceResultImport(race_id=race_id, gender=gender, category=category)
            self.session.add(row)

        for key, value in data.items():
            setattr(row, key, value)
        row.updated_at = clock.now()

        await self.session.flush()
        return row
