"""Snapshot, score and leaderboard schemas."""

from datetime import datetime

from mtb_fantasy.schemas.common import BaseSchema


class SnapshotRider(BaseSchema):
    uci_id: str
    gender: str
    cost_at_lock: int


class RaceSnapshotResponse(BaseSchema):
    """Frozen roster of one team."""

    race_id: int
    user_id: str
    team_type: str
    starters_json: list[SnapshotRider]
    bench_json: SnapshotRider | None = None
    total_cost_at_lock: int
    snapshot_hash: str
    created_at: datetime


class RaceScoreResponse(BaseSchema):
    """Settled score of one team."""

    race_id: int
    user_id: str
    team_type: str
    total_points: int
    breakdown_json: dict
    snapshot_hash_used: str
    results_hash_used: str
    settled_at: datetime


class LeaderboardTeamResponse(BaseSchema):
    id: int
    name: str
    team_type: str


class LeaderboardUserResponse(BaseSchema):
    id: str
    display_name: str


class LeaderboardEntryResponse(BaseSchema):
    """One leaderboard row."""

    rank: int
    team: LeaderboardTeamResponse
    user: LeaderboardUserResponse
    last_round_points: int
    total_points: int
