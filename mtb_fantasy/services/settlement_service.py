"""Settlement service: turns snapshots and results into race scores."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from mtb_fantasy import clock
from mtb_fantasy.config import Settings, get_settings
from mtb_fantasy.errors import (
    MissingResultsError,
    RaceNotFoundError,
    RaceNotLockedError,
    SettlementError,
)
from mtb_fantasy.game.hashing import results_fingerprint
from mtb_fantasy.game.result_sets import missing_final_result_sets, parse_result_sets
from mtb_fantasy.game.scoring import score_team_snapshot
from mtb_fantasy.models import GameStatus, RaceScore
from mtb_fantasy.repositories import (
    RaceRepository,
    ResultRepository,
    ScoreRepository,
    SnapshotRepository,
    TeamRepository,
)
from mtb_fantasy.schemas import SettleRaceResponse
from mtb_fantasy.services.cost_service import CostRepricer

logger = logging.getLogger(__name__)


class SettlementService:
    """Service for settling races."""

    def __init__(self, session: AsyncSession, settings: Settings | None = None):
        self.session = session
        self.settings = settings or get_settings()
        self.race_repo = RaceRepository(session)
        self.result_repo = ResultRepository(session)
        self.snapshot_repo = SnapshotRepository(session)
        self.score_repo = ScoreRepository(session)
        self.team_repo = TeamRepository(session)
        self.repricer = CostRepricer(session, self.settings)

    async def settle_race(self, race_id: int, force: bool = False) -> SettleRaceResponse:
        """
        Score every snapshot of a race.

        Scores whose snapshot and results fingerprints are unchanged are left
        alone, so repeated calls are cheap and report ``updated_scores == 0``.

        Args:
            race_id: Race to settle
            force: Skip the final-results gate and rewrite every score

        Returns:
            SettleRaceResponse with the number of scores written
        """
        race = await self.race_repo.get_for_update(race_id)
        if race is None:
            raise RaceNotFoundError(race_id)
        if not race.has_reached(GameStatus.LOCKED):
            raise RaceNotLockedError(f"Race {race_id} must be locked before settling.")

        required = parse_result_sets(self.settings.required_result_sets)
        imports = await self.result_repo.get_imports(race_id)
        missing = missing_final_result_sets(imports, required, race.discipline)
        if missing and not force:
            raise MissingResultsError(
                f"Race {race_id} is missing final results for: "
                + ", ".join(definition.label for definition in missing),
                [definition.key for definition in missing],
            )
        if force:
            logger.warning("Forced settlement requested for race %s", race_id)

        results = await self.result_repo.get_by_race(race_id)
        if not results:
            raise SettlementError(
                f"Race {race_id} has no results loaded. Import results before settling."
            )

        snapshots = await self.snapshot_repo.get_by_race(race_id)
        if not snapshots:
            raise SettlementError(
                f"Race {race_id} has no team snapshots. Lock the race before settling."
            )

        results_hash = results_fingerprint(
            race_id,
            results,
            self.settings.scoring_fingerprint(),
            self.settings.game_version,
        )
        results_by_uci_id = {result.uci_id: result for result in results}
        scores_by_key = {
            (score.user_id, score.team_type): score
            for score in await self.score_repo.get_by_race(race_id)
        }

        now = clock.now()
        updated_scores = 0
        touched_teams = set()

        for snapshot in snapshots:
            key = (snapshot.user_id, snapshot.team_type)
            existing = scores_by_key.get(key)
            if (
                existing is not None
                and not force
                and existing.snapshot_hash_used == snapshot.snapshot_hash
                and existing.results_hash_used == results_hash
            ):
                continue

            scored = score_team_snapshot(
                snapshot.starters_json or [],
                snapshot.bench_json,
                results_by_uci_id,
                self.settings,
            )

            if existing is None:
                existing = RaceScore(race_id=race_id, user_id=snapshot.user_id, team_type=snapshot.team_type)
                self.session.add(existing)

            existing.total_points = scored.total_points
            existing.breakdown_json = scored.breakdown
            existing.snapshot_hash_used = snapshot.snapshot_hash
            existing.results_hash_used = results_hash
            existing.settled_at = now

            updated_scores += 1
            touched_teams.add(key)

        await self.session.flush()

        for user_id, team_type in touched_teams:
            await self.team_repo.recalculate_total_points(race.season_id, user_id, team_type)

        cost_updates = 0
        if not missing:
            outcome = await self.repricer.apply_rider_cost_updates(
                race_id, results_hash, results, force=force
            )
            cost_updates = len(outcome.updates)

        race.advance_to(GameStatus.SETTLED)
        race.needs_resettle = False
        await self.session.flush()

        logger.info(
            "Settled race %s: %s scores updated, %s cost updates",
            race_id,
            updated_scores,
            cost_updates,
        )
        return SettleRaceResponse(
            race_id=race_id,
            results_hash=results_hash,
            updated_scores=updated_scores,
            cost_updates=cost_updates,
        )
