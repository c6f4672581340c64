"""Race service."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from mtb_fantasy.config import Settings, get_settings
from mtb_fantasy.errors import RaceNotFoundError
from mtb_fantasy.game.result_sets import parse_result_sets
from mtb_fantasy.models import Race
from mtb_fantasy.repositories import (
    RaceRepository,
    ResultRepository,
    ScoreRepository,
    SnapshotRepository,
    TeamRepository,
)
from mtb_fantasy.schemas import (
    DeleteRaceResponse,
    RaceResponse,
    RaceScoreResponse,
    RaceSnapshotResponse,
    ResultSetStatus,
)

logger = logging.getLogger(__name__)


class RaceService:
    """Service for race administration."""

    def __init__(self, session: AsyncSession, settings: Settings | None = None):
        self.session = session
        self.settings = settings or get_settings()
        self.race_repo = RaceRepository(session)
        self.result_repo = ResultRepository(session)
        self.snapshot_repo = SnapshotRepository(session)
        self.score_repo = ScoreRepository(session)
        self.team_repo = TeamRepository(session)

    async def _get_or_raise(self, race_id: int) -> Race:
        race = await self.race_repo.get(race_id)
        if race is None:
            raise RaceNotFoundError(race_id)
        return race

    async def get_race(self, race_id: int) -> RaceResponse:
        """Get a race by ID."""
        race = await self._get_or_raise(race_id)
        return RaceResponse.model_validate(race)

    async def list_races(
        self,
        skip: int = 0,
        limit: int = 100,
        season_id: int | None = None,
        game_status: str | None = None,
    ) -> tuple[list[RaceResponse], int]:
        """Get races with pagination."""
        filters = {"season_id": season_id, "game_status": game_status}
        races = await self.race_repo.get_all(skip=skip, limit=limit, filters=filters)
        total = await self.race_repo.count(filters=filters)
        return [RaceResponse.model_validate(race) for race in races], total

    async def delete_race(self, race_id: int) -> DeleteRaceResponse:
        """Delete a race together with its snapshots, results and scores.

        Season totals of the teams that scored in the race are recalculated
        without it.
        """
        race = await self.race_repo.get_for_update(race_id)
        if race is None:
            raise RaceNotFoundError(race_id)

        name = race.name
        season_id = race.season_id
        scored_teams = {
            (score.user_id, score.team_type) for score in await self.score_repo.get_by_race(race_id)
        }
        removed = await self.race_repo.delete_with_dependents(race)

        for user_id, team_type in sorted(scored_teams):
            await self.team_repo.recalculate_total_points(season_id, user_id, team_type)

        logger.info("Deleted race %s (%s): %s", race_id, name, removed)
        return DeleteRaceResponse(race_id=race_id, name=name, removed=removed)

    async def get_snapshots(self, race_id: int) -> list[RaceSnapshotResponse]:
        await self._get_or_raise(race_id)
        snapshots = await self.snapshot_repo.get_by_race(race_id)
        return [RaceSnapshotResponse.model_validate(s) for s in snapshots]

    async def get_scores(self, race_id: int) -> list[RaceScoreResponse]:
        await self._get_or_raise(race_id)
        scores = await self.score_repo.get_by_race(race_id)
        return [RaceScoreResponse.model_validate(s) for s in scores]

    async def get_result_sets(self, race_id: int) -> list[ResultSetStatus]:
        """Completeness of each required result set."""
        await self._get_or_raise(race_id)
        imports = {
            f"{row.gender}:{row.category}": row
            for row in await self.result_repo.get_imports(race_id)
        }

        statuses = []
        for definition in parse_result_sets(self.settings.required_result_sets):
            row = imports.get(definition.key)
            statuses.append(
                ResultSetStatus(
                    gender=definition.gender,
                    category=definition.category,
                    label=definition.label,
                    is_final=bool(row and row.is_final),
                    row_count=row.row_count if row else 0,
                    discipline=row.discipline if row else None,
                    source_url=row.source_url if row else None,
                    updated_at=row.updated_at if row else None,
                )
            )
        return statuses
