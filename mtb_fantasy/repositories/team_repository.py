"""Team and roster repository."""

from collections import defaultdict

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from mtb_fantasy.models import Race, RaceScore, Team, TeamMember, User
from mtb_fantasy.repositories.base import BaseRepository


class TeamRepository(BaseRepository[Team]):
    """Repository for Team model."""

    def __init__(self, session: AsyncSession):
        super().__init__(Team, session)

    async def get_by_season_and_type(self, season_id: int, team_type: str) -> list[Team]:
        """Get all teams of one type in a season."""
        result = await self.session.execute(
            select(Team)
            .where(Team.season_id == season_id, Team.team_type == team_type)
            .order_by(Team.id)
        )
        return list(result.scalars().all())

    async def get_members_by_team(self, team_ids: list[int]) -> dict[int, list[TeamMember]]:
        """Current roster rows grouped by team id."""
        if not team_ids:
            return {}
        result = await self.session.execute(
            select(TeamMember).where(TeamMember.team_id.in_(team_ids))
        )
        members: dict[int, list[TeamMember]] = defaultdict(list)
        for member in result.scalars().all():
            members[member.team_id].append(member)
        return members

    async def get_with_users(self, season_id: int, team_type: str) -> list[tuple[Team, User]]:
        """Teams joined to their owners."""
        result = await self.session.execute(
            select(Team, User)
            .join(User, User.id == Team.user_id)
            .where(Team.season_id == season_id, Team.team_type == team_type)
        )
        return [(team, user) for team, user in result.all()]

    async def recalculate_total_points(self, season_id: int, user_id: str, team_type: str) -> int | None:
        """Set a team's total to the sum of its settled race scores in the season."""
        result = await self.session.execute(
            select(Team).where(
                Team.season_id == season_id,
                Team.user_id == user_id,
                Team.team_type == team_type,
            )
        )
        team = result.scalar_one_or_none()
        if team is None:
            return None

        total = await self.session.execute(
            select(func.coalesce(func.sum(RaceScore.total_points), 0))
            .join(Race, Race.id == RaceScore.race_id)
            .where(
                Race.season_id == season_id,
                RaceScore.user_id == user_id,
                RaceScore.team_type == team_type,
            )
        )
        team.total_points = int(total.scalar_one())
        await self.session.flush()
        return team.total_points
