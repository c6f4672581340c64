"""Leaderboard ranking."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field


@dataclass
class LeaderboardTeam:
    """Team as seen by the leaderboard."""

    id: int
    name: str
    user_id: str
    total_points: int = 0
    team_type: str = "elite"
    rider_ids: list[str] = field(default_factory=list)


@dataclass
class LeaderboardUser:
    id: str
    display_name: str


@dataclass
class LeaderboardEntry:
    rank: int
    team: LeaderboardTeam
    user: LeaderboardUser
    last_round_points: int
    total_points: int


def build_leaderboard_entries(
    teams: Iterable[tuple[LeaderboardTeam, LeaderboardUser]],
    latest_round_points_by_rider_id: Mapping[str, int],
) -> list[LeaderboardEntry]:
    """
    Rank teams by total points, then team name.

    Args:
        teams: (team, user) pairs
        latest_round_points_by_rider_id: Points each rider scored in the latest round

    Returns:
        Entries with consecutive 1-based ranks
    """
    rows = []
    for team, user in teams:
        last_round_points = sum(
            latest_round_points_by_rider_id.get(rider_id, 0) for rider_id in team.rider_ids
        )
        rows.append((team, user, last_round_points, team.total_points or 0))

    rows.sort(key=lambda row: (-row[3], row[0].name))

    return [
        LeaderboardEntry(
            rank=rank,
            team=team,
            user=user,
            last_round_points=last_round_points,
            total_points=total_points,
        )
        for rank, (team, user, last_round_points, total_points) in enumerate(rows, 1)
    ]
