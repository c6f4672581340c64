"""Tests for race repository."""

import pytest

from mtb_fantasy.models import GameStatus
from mtb_fantasy.repositories import RaceRepository
from tests.fixtures.factories import create_race, create_result, utc


class TestRaceRepository:
    """Tests for RaceRepository specialized queries."""

    @pytest.mark.asyncio
    async def test_get_by_status(self, db_session, test_season):
        later = create_race(test_season.id, name="Later", start_date=utc(2024, 6, 1))
        earlier = create_race(test_season.id, name="Earlier", start_date=utc(2024, 4, 1))
        locked = create_race(test_season.id, name="Locked", game_status="locked")
        db_session.add_all([later, earlier, locked])
        await db_session.flush()
        repo = RaceRepository(db_session)

        scheduled = await repo.get_by_status(GameStatus.SCHEDULED)

        assert [r.name for r in scheduled] == ["Earlier", "Later"]
        assert [r.name for r in await repo.get_by_status(GameStatus.LOCKED)] == ["Locked"]

    @pytest.mark.asyncio
    async def test_get_settle_candidates(self, db_session, test_season):
        db_session.add_all(
            [
                create_race(test_season.id, name="Final", game_status="final"),
                create_race(test_season.id, name="Corrected", game_status="settled", needs_resettle=True),
                create_race(test_season.id, name="Settled", game_status="settled"),
                create_race(test_season.id, name="Locked", game_status="locked"),
            ]
        )
        await db_session.flush()

        candidates = await RaceRepository(db_session).get_settle_candidates()

        assert sorted(r.name for r in candidates) == ["Corrected", "Final"]

    @pytest.mark.asyncio
    async def test_get_latest_settled(self, db_session, test_season):
        db_session.add_all(
            [
                create_race(test_season.id, name="Round 1", start_date=utc(2024, 4, 1), game_status="settled"),
                create_race(test_season.id, name="Round 2", start_date=utc(2024, 5, 1), game_status="settled"),
                create_race(test_season.id, name="Round 3", start_date=utc(2024, 6, 1), game_status="locked"),
            ]
        )
        await db_session.flush()
        repo = RaceRepository(db_session)

        latest = await repo.get_latest_settled(test_season.id)

        assert latest.name == "Round 2"
        assert await repo.get_latest_settled(99999) is None

    @pytest.mark.asyncio
    async def test_delete_with_dependents(self, db_session, test_race):
        db_session.add_all(
            [
                create_result(test_race.id, "m1", "FIN", 1),
                create_result(test_race.id, "m2", "DNF"),
            ]
        )
        await db_session.flush()
        repo = RaceRepository(db_session)

        removed = await repo.delete_with_dependents(test_race)

        assert removed["race_results"] == 2
        assert removed["race_snapshots"] == 0
        assert await repo.get(test_race.id) is None
