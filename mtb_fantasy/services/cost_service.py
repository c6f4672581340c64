"""Rider cost repricing after settlement."""

import logging
from dataclasses import dataclass, field

from sqlalchemy.ext.asyncio import AsyncSession

from mtb_fantasy.config import Settings, get_settings
from mtb_fantasy.game.pricing import calculate_updated_cost
from mtb_fantasy.models import RaceResult, RiderCostUpdate
from mtb_fantasy.repositories import CostUpdateRepository, RiderRepository

logger = logging.getLogger(__name__)


@dataclass
class CostUpdateOutcome:
    applied: bool
    updates: list[RiderCostUpdate] = field(default_factory=list)


class CostRepricer:
    """Applies price changes once per results fingerprint."""

    def __init__(self, session: AsyncSession, settings: Settings | None = None):
        self.session = session
        self.settings = settings or get_settings()
        self.rider_repo = RiderRepository(session)
        self.cost_repo = CostUpdateRepository(session)

    async def apply_rider_cost_updates(
        self,
        race_id: int,
        results_hash: str,
        results: list[RaceResult],
        force: bool = False,
    ) -> CostUpdateOutcome:
        """
        Reprice every rider with a result in the race.

        A second pass with the same fingerprint is a no-op. A pass with a new
        fingerprint first takes back the deltas recorded by the previous pass,
        then prices from the cost the rider had before this race. Changes made
        by other races since then are kept.
        """
        existing = await self.cost_repo.get_by_race(race_id)
        base_costs: dict[str, int] = {}

        if existing:
            if not force and all(entry.results_hash == results_hash for entry in existing):
                return CostUpdateOutcome(applied=False)

            riders = await self.rider_repo.get_by_uci_ids([entry.uci_id for entry in existing])
            for entry in existing:
                base_costs[entry.uci_id] = entry.previous_cost
                rider = riders.get(entry.uci_id)
                if rider is not None:
                    rider.cost -= entry.delta
            await self.cost_repo.delete_by_race(race_id)
            await self.session.flush()
            logger.info("Reverted %s cost updates for race %s", len(existing), race_id)

        if not results:
            return CostUpdateOutcome(applied=False)

        riders = await self.rider_repo.get_by_uci_ids([result.uci_id for result in results])
        updates = []
        for result in results:
            rider = riders.get(result.uci_id)
            if rider is None:
                continue

            base_cost = base_costs.get(result.uci_id, rider.cost)
            change = calculate_updated_cost(base_cost, result.status, result.position, self.settings)
            update = RiderCostUpdate(
                race_id=race_id,
                uci_id=result.uci_id,
                status=result.status,
                position=result.position,
                previous_cost=base_cost,
                updated_cost=change.updated_cost,
                delta=change.delta,
                results_hash=results_hash,
            )
            rider.cost += change.delta
            self.session.add(update)
            updates.append(update)

        await self.session.flush()

        logger.info("Applied %s cost updates for race %s", len(updates), race_id)
        return CostUpdateOutcome(applied=bool(updates), updates=updates)
