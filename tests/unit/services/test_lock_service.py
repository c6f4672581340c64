"""Tests for the race lock service."""

from datetime import timedelta

import pytest
from sqlalchemy import select

from mtb_fantasy import clock
from mtb_fantasy.errors import RaceNotFoundError
from mtb_fantasy.models import RaceSnapshot, TeamMember
from mtb_fantasy.services.lock_service import LockService
from tests.fixtures.factories import create_race, utc


async def get_snapshots(db_session, race_id):
    result = await db_session.execute(select(RaceSnapshot).where(RaceSnapshot.race_id == race_id))
    return list(result.scalars().all())


class TestLockService:
    """Tests for LockService.lock_race."""

    @pytest.mark.asyncio
    async def test_lock_creates_snapshot(self, db_session, settings, test_race, test_team):
        """Locking freezes the roster in slot order at current prices."""
        service = LockService(db_session, settings)

        response = await service.lock_race(test_race.id)

        assert response.locked is True
        assert response.status == "locked"
        assert response.locked_teams == 1
        assert response.skipped_teams == 0

        snapshots = await get_snapshots(db_session, test_race.id)
        assert len(snapshots) == 1
        snapshot = snapshots[0]
        assert [s["uci_id"] for s in snapshot.starters_json] == ["m1", "m2", "m3", "m4", "f1", "f2"]
        assert snapshot.bench_json == {"uci_id": "b1", "gender": "female", "cost_at_lock": 100_000}
        assert snapshot.total_cost_at_lock == 700_000
        assert len(snapshot.snapshot_hash) == 64
        assert test_team.is_locked is True

    @pytest.mark.asyncio
    async def test_lock_is_idempotent(self, db_session, settings, test_race, test_team):
        """A second lock writes nothing and keeps the original snapshot."""
        service = LockService(db_session, settings)
        await service.lock_race(test_race.id)
        first = (await get_snapshots(db_session, test_race.id))[0]
        first_hash = first.snapshot_hash

        response = await service.lock_race(test_race.id)

        assert response.locked_teams == 0
        assert response.skipped_teams == 1
        snapshots = await get_snapshots(db_session, test_race.id)
        assert len(snapshots) == 1
        assert snapshots[0].snapshot_hash == first_hash

    @pytest.mark.asyncio
    async def test_lock_before_lock_time_is_noop(self, db_session, settings, test_season, test_team):
        race = create_race(test_season.id, lock_at=clock.now() + timedelta(days=1))
        db_session.add(race)
        await db_session.flush()

        response = await LockService(db_session, settings).lock_race(race.id)

        assert response.locked is False
        assert response.status == "scheduled"
        assert response.locked_teams == 0
        assert await get_snapshots(db_session, race.id) == []

    @pytest.mark.asyncio
    async def test_force_lock_before_lock_time(self, db_session, settings, test_season, test_team):
        race = create_race(test_season.id, lock_at=clock.now() + timedelta(days=1))
        db_session.add(race)
        await db_session.flush()

        response = await LockService(db_session, settings).lock_race(race.id, force=True)

        assert response.locked is True
        assert response.locked_teams == 1

    @pytest.mark.asyncio
    async def test_default_lock_time_is_before_start(self, db_session, settings, test_season):
        race = create_race(test_season.id, start_date=utc(2024, 5, 4, 12), lock_at=None)
        db_session.add(race)
        await db_session.flush()

        lock_at = LockService(db_session, settings).get_lock_at(race)

        assert lock_at == utc(2024, 5, 2, 12)

    @pytest.mark.asyncio
    async def test_changed_roster_keeps_snapshot_unless_forced(
        self, db_session, settings, test_race, test_team, test_riders
    ):
        """Prices moving after lock do not rewrite the snapshot without force."""
        service = LockService(db_session, settings)
        await service.lock_race(test_race.id)
        original_hash = (await get_snapshots(db_session, test_race.id))[0].snapshot_hash

        test_riders["m1"].cost = 150_000
        await db_session.flush()

        response = await service.lock_race(test_race.id)
        assert response.locked_teams == 0
        assert response.skipped_teams == 1
        assert (await get_snapshots(db_session, test_race.id))[0].snapshot_hash == original_hash

        response = await service.lock_race(test_race.id, force=True)
        assert response.locked_teams == 1
        snapshot = (await get_snapshots(db_session, test_race.id))[0]
        assert snapshot.snapshot_hash != original_hash
        assert snapshot.total_cost_at_lock == 750_000

    @pytest.mark.asyncio
    async def test_invalid_team_is_skipped(self, db_session, settings, test_race, test_team):
        result = await db_session.execute(
            select(TeamMember).where(TeamMember.team_id == test_team.id, TeamMember.uci_id == "f2")
        )
        await db_session.delete(result.scalar_one())
        await db_session.flush()

        response = await LockService(db_session, settings).lock_race(test_race.id)

        assert response.locked is True
        assert response.locked_teams == 0
        assert response.skipped_teams == 1
        assert await get_snapshots(db_session, test_race.id) == []

    @pytest.mark.asyncio
    async def test_lock_without_teams(self, db_session, settings, test_race):
        response = await LockService(db_session, settings).lock_race(test_race.id)

        assert response.locked is True
        assert response.locked_teams == 0
        assert response.skipped_teams == 0

    @pytest.mark.asyncio
    async def test_lock_unknown_race(self, db_session, settings):
        with pytest.raises(RaceNotFoundError):
            await LockService(db_session, settings).lock_race(99999)
