"""Leaderboard service."""

from sqlalchemy.ext.asyncio import AsyncSession

from mtb_fantasy.config import Settings, get_settings
from mtb_fantasy.game.leaderboard import (
    LeaderboardEntry,
    LeaderboardTeam,
    LeaderboardUser,
    build_leaderboard_entries,
)
from mtb_fantasy.game.scoring import outcome_from_result, score_rider_result
from mtb_fantasy.repositories import RaceRepository, ResultRepository, TeamRepository


class LeaderboardService:
    """Service for season standings."""

    def __init__(self, session: AsyncSession, settings: Settings | None = None):
        self.session = session
        self.settings = settings or get_settings()
        self.race_repo = RaceRepository(session)
        self.team_repo = TeamRepository(session)
        self.result_repo = ResultRepository(session)

    async def get_latest_round_points(self, season_id: int) -> dict[str, int]:
        """Points each rider scored in the most recently settled race."""
        race = await self.race_repo.get_latest_settled(season_id)
        if race is None:
            return {}

        points = {}
        for result in await self.result_repo.get_by_race(race.id):
            scored = score_rider_result(outcome_from_result(result), self.settings)
            points[result.uci_id] = scored["final_points"]
        return points

    async def get_leaderboard(self, season_id: int, team_type: str = "elite") -> list[LeaderboardEntry]:
        """
        Rank the season's teams of one type.

        Args:
            season_id: Season ID
            team_type: "elite" or "junior"

        Returns:
            Ranked leaderboard entries
        """
        pairs = await self.team_repo.get_with_users(season_id, team_type)
        members = await self.team_repo.get_members_by_team([team.id for team, _ in pairs])

        teams = [
            (
                LeaderboardTeam(
                    id=team.id,
                    name=team.name,
                    user_id=team.user_id,
                    total_points=team.total_points,
                    team_type=team.team_type,
                    rider_ids=[m.uci_id for m in members.get(team.id, [])],
                ),
                LeaderboardUser(id=user.id, display_name=user.display_name),
            )
            for team, user in pairs
        ]

        latest_points = await self.get_latest_round_points(season_id)
        return build_leaderboard_entries(teams, latest_points)
