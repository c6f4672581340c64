"""Result import service."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from mtb_fantasy.config import Settings, get_settings
from mtb_fantasy.errors import RaceNotFoundError, RaceNotLockedError, ResultValidationError
from mtb_fantasy.game.hashing import hash_payload, results_fingerprint
from mtb_fantasy.game.result_sets import (
    missing_final_result_sets,
    normalize_discipline,
    parse_result_sets,
)
from mtb_fantasy.models import GameStatus
from mtb_fantasy.repositories import (
    CostUpdateRepository,
    RaceRepository,
    ResultRepository,
    ScoreRepository,
)
from mtb_fantasy.schemas import ResultImportRequest, ResultImportResponse

logger = logging.getLogger(__name__)


class ResultImportService:
    """Service for importing race results batch by batch."""

    def __init__(self, session: AsyncSession, settings: Settings | None = None):
        self.session = session
        self.settings = settings or get_settings()
        self.race_repo = RaceRepository(session)
        self.result_repo = ResultRepository(session)
        self.score_repo = ScoreRepository(session)
        self.cost_repo = CostUpdateRepository(session)

    async def upsert_race_results(
        self, race_id: int, data: ResultImportRequest
    ) -> ResultImportResponse:
        """
        Store one (gender, category) result batch for a locked race.

        Rows named in the batch replace the stored ones; others are kept.
        Flags the race for resettlement when its results no longer match
        what the last settlement used.
        """
        race = await self.race_repo.get_for_update(race_id)
        if race is None:
            raise RaceNotFoundError(race_id)
        if not race.has_reached(GameStatus.LOCKED):
            raise RaceNotLockedError(f"Race {race_id} must be locked before importing results.")

        seen: set[str] = set()
        for row in data.results:
            if row.uci_id in seen:
                raise ResultValidationError(f"Rider {row.uci_id} appears twice in the batch")
            seen.add(row.uci_id)

        gender = data.gender.value
        category = data.category.value
        discipline = normalize_discipline(data.discipline, fallback=race.discipline)
        if discipline != normalize_discipline(race.discipline):
            raise ResultValidationError(
                f"Batch discipline {discipline} does not match race discipline {race.discipline}"
            )

        rows = [
            {
                "uci_id": row.uci_id,
                "status": row.status,
                "position": row.position,
                "qualification_position": row.qualification_position,
                "gender": gender,
                "category": category,
            }
            for row in data.results
        ]
        updated = await self.result_repo.upsert_results(race_id, rows) if rows else 0

        content_hash = hash_payload(
            {
                "race_id": race_id,
                "gender": gender,
                "category": category,
                "discipline": discipline,
                "results": sorted(rows, key=lambda row: row["uci_id"]),
            }
        )
        await self.result_repo.upsert_import(
            race_id,
            gender,
            category,
            {
                "discipline": discipline,
                "source_url": data.source_url,
                "is_final": data.is_final,
                "content_hash": content_hash,
                "row_count": len(rows),
            },
        )

        imports = await self.result_repo.get_imports(race_id)
        required = parse_result_sets(self.settings.required_result_sets)
        complete = not missing_final_result_sets(imports, required, race.discipline)
        if complete:
            race.advance_to(GameStatus.FINAL)

        scores = await self.score_repo.get_by_race(race_id)
        if scores:
            results_hash = results_fingerprint(
                race_id,
                await self.result_repo.get_by_race(race_id),
                self.settings.scoring_fingerprint(),
                self.settings.game_version,
            )
            if any(score.results_hash_used != results_hash for score in scores):
                race.needs_resettle = True
                logger.info("Race %s results changed after settlement; flagged for resettle", race_id)
            elif complete and not await self.cost_repo.get_by_race(race_id):
                # Settled early without repricing; settle again now the sets are final
                race.needs_resettle = True
                logger.info("Race %s results are final after a forced settle; flagged for resettle", race_id)

        await self.session.flush()

        logger.info(
            "Imported %s results for race %s (%s:%s, final=%s)",
            updated,
            race_id,
            gender,
            category,
            data.is_final,
        )
        return ResultImportResponse(
            race_id=race_id,
            updated=updated,
            status=race.game_status,
            needs_resettle=race.needs_resettle,
            content_hash=content_hash,
        )
