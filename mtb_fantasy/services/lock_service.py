"""Race lock service: freezes rosters into snapshots."""

import logging
from datetime import datetime, timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from mtb_fantasy import clock
from mtb_fantasy.config import Settings, get_settings
from mtb_fantasy.errors import RaceNotFoundError
from mtb_fantasy.game.hashing import hash_payload
from mtb_fantasy.game.team_rules import validate_team
from mtb_fantasy.models import GameStatus, MemberRole, Race, RaceSnapshot, Team, TeamMember, TeamType
from mtb_fantasy.repositories import RaceRepository, RiderRepository, SnapshotRepository, TeamRepository
from mtb_fantasy.schemas import LockRaceResponse

logger = logging.getLogger(__name__)


class LockService:
    """Service for locking races."""

    def __init__(self, session: AsyncSession, settings: Settings | None = None):
        self.session = session
        self.settings = settings or get_settings()
        self.race_repo = RaceRepository(session)
        self.team_repo = TeamRepository(session)
        self.rider_repo = RiderRepository(session)
        self.snapshot_repo = SnapshotRepository(session)

    def get_lock_at(self, race: Race) -> datetime:
        """Stored lock time, or ``lock_lead_hours`` before the start."""
        if race.lock_at is not None:
            return clock.as_utc(race.lock_at)
        return clock.as_utc(race.start_date) - timedelta(hours=self.settings.lock_lead_hours)

    def team_types(self) -> list[str]:
        if self.settings.junior_team_enabled:
            return [TeamType.ELITE.value, TeamType.JUNIOR.value]
        return [TeamType.ELITE.value]

    async def lock_race(self, race_id: int, force: bool = False) -> LockRaceResponse:
        """
        Freeze every valid roster of the race's season into a snapshot.

        Args:
            race_id: Race to lock
            force: Lock before ``lock_at`` and overwrite snapshots whose roster changed

        Returns:
            LockRaceResponse with locked and skipped team counts
        """
        race = await self.race_repo.get_for_update(race_id)
        if race is None:
            raise RaceNotFoundError(race_id)

        now = clock.now()
        lock_at = self.get_lock_at(race)

        if not force and now < lock_at:
            return self._response(race, lock_at, 0, 0)

        if force:
            logger.warning("Forced lock requested for race %s", race_id)

        race.advance_to(GameStatus.LOCKED)

        locked_teams = 0
        skipped_teams = 0

        for team_type in self.team_types():
            teams = await self.team_repo.get_by_season_and_type(race.season_id, team_type)
            if not teams:
                continue

            members_by_team = await self.team_repo.get_members_by_team([t.id for t in teams])
            riders_by_uci_id = await self.rider_repo.get_by_uci_ids(
                [m.uci_id for members in members_by_team.values() for m in members]
            )
            snapshots_by_user = {
                snapshot.user_id: snapshot
                for snapshot in await self.snapshot_repo.get_by_race(race_id, team_type)
            }

            for team in teams:
                members = members_by_team.get(team.id, [])
                outcome = self._lock_team(
                    race,
                    team,
                    team_type,
                    members,
                    riders_by_uci_id,
                    snapshots_by_user.get(team.user_id),
                    force,
                    now,
                )
                if outcome == "locked":
                    locked_teams += 1
                elif outcome == "skipped":
                    skipped_teams += 1

        await self.session.flush()

        logger.info(
            "Locked race %s: %s teams locked, %s skipped",
            race_id,
            locked_teams,
            skipped_teams,
        )
        return self._response(race, lock_at, locked_teams, skipped_teams)

    def _lock_team(
        self,
        race: Race,
        team: Team,
        team_type: str,
        members: list[TeamMember],
        riders_by_uci_id: dict,
        existing: RaceSnapshot | None,
        force: bool,
        now: datetime,
    ) -> str | None:
        """Snapshot one team. Returns "locked", "skipped" or None when ignored."""
        starters = sorted(
            (m for m in members if m.role == MemberRole.STARTER.value),
            key=lambda m: m.starter_index if m.starter_index is not None else -1,
        )
        if not starters:
            return None

        bench_member = next((m for m in members if m.role == MemberRole.BENCH.value), None)

        validation = validate_team(
            team_type,
            [(m.uci_id, m.starter_index) for m in starters],
            bench_member.uci_id if bench_member else None,
            riders_by_uci_id,
            team.budget_cap or self.settings.budgets.get(team_type, 0),
            self.settings,
        )
        if not validation.ok:
            logger.warning(
                "Skipping team %s for race %s: %s",
                team.id,
                race.id,
                "; ".join(error.message for error in validation.errors),
            )
            return "skipped"

        starters_json = [self._snapshot_rider(m.uci_id, riders_by_uci_id) for m in starters]
        bench_json = (
            self._snapshot_rider(bench_member.uci_id, riders_by_uci_id) if bench_member else None
        )
        total_cost_at_lock = sum(r["cost_at_lock"] for r in starters_json) + (
            bench_json["cost_at_lock"] if bench_json else 0
        )
        snapshot_hash = hash_payload(
            {
                "game_version": self.settings.game_version,
                "race_id": race.id,
                "user_id": team.user_id,
                "team_type": team_type,
                "starters": starters_json,
                "bench": bench_json,
                "total_cost_at_lock": total_cost_at_lock,
            }
        )

        if existing is None:
            self.session.add(
                RaceSnapshot(
                    race_id=race.id,
                    user_id=team.user_id,
                    team_type=team_type,
                    starters_json=starters_json,
                    bench_json=bench_json,
                    total_cost_at_lock=total_cost_at_lock,
                    snapshot_hash=snapshot_hash,
                    created_at=now,
                )
            )
        elif existing.snapshot_hash == snapshot_hash:
            self._mark_locked(team, now)
            return "skipped"
        elif not force:
            logger.warning(
                "Team %s changed after race %s locked; keeping the original snapshot",
                team.id,
                race.id,
            )
            return "skipped"
        else:
            existing.starters_json = starters_json
            existing.bench_json = bench_json
            existing.total_cost_at_lock = total_cost_at_lock
            existing.snapshot_hash = snapshot_hash

        self._mark_locked(team, now)
        return "locked"

    @staticmethod
    def _snapshot_rider(uci_id: str, riders_by_uci_id: dict) -> dict:
        rider = riders_by_uci_id[uci_id]
        return {"uci_id": uci_id, "gender": rider.gender, "cost_at_lock": rider.cost}

    @staticmethod
    def _mark_locked(team: Team, now: datetime) -> None:
        if not team.is_locked:
            team.is_locked = True
            team.locked_at = now

    @staticmethod
    def _response(race: Race, lock_at: datetime, locked: int, skipped: int) -> LockRaceResponse:
        return LockRaceResponse(
            race_id=race.id,
            locked_teams=locked,
            skipped_teams=skipped,
            lock_at=lock_at,
            status=race.game_status,
            locked=race.has_reached(GameStatus.LOCKED),
        )
