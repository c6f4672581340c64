"""Application configuration."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_POINTS_BY_POSITION: dict[int, int] = {
    1: 100,
    2: 80,
    3: 70,
    4: 60,
    5: 55,
    6: 50,
    7: 45,
    8: 40,
    9: 35,
    10: 30,
    11: 25,
    12: 22,
    13: 20,
    14: 18,
    15: 16,
    16: 15,
    17: 14,
    18: 13,
    19: 12,
    20: 11,
    21: 10,
    22: 9,
    23: 8,
    24: 7,
    25: 6,
    26: 5,
    27: 4,
    28: 3,
    29: 2,
    30: 1,
}

DEFAULT_QUALIFICATION_BONUS_BY_POSITION: dict[int, int] = {
    1: 10,
    2: 8,
    3: 6,
    **{position: 3 for position in range(4, 11)},
    **{position: 1 for position in range(11, 21)},
}


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Application
    app_name: str = "MTB Fantasy"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # Database
    database_url: str = "sqlite:///./data/mtb_fantasy.db"

    # Team rules
    game_version: str = "v1"
    team_size: int = 6
    gender_slots: dict[str, int] = Field(default_factory=lambda: {"male": 4, "female": 2})
    budgets: dict[str, int] = Field(
        default_factory=lambda: {"elite": 2_000_000, "junior": 500_000}
    )
    junior_team_enabled: bool = False
    lock_lead_hours: int = 48  # default lock_at when a race has none
    auto_sub_enabled: bool = True
    substitution_statuses: list[str] = Field(default_factory=lambda: ["DNS", "DNF", "DNQ"])

    # Scoring
    points_by_position: dict[int, int] = Field(
        default_factory=lambda: dict(DEFAULT_POINTS_BY_POSITION)
    )
    qualification_bonus_enabled: bool = True
    qualification_bonus_by_position: dict[int, int] = Field(
        default_factory=lambda: dict(DEFAULT_QUALIFICATION_BONUS_BY_POSITION)
    )
    dsq_penalty: int = 0

    # Result sets that must be final before a race can settle ("gender:category")
    required_result_sets: list[str] = Field(
        default_factory=lambda: ["male:elite", "female:elite"]
    )

    # Rider pricing
    cost_bonus_positions: int = 10
    cost_penalty_percent: int = 10
    cost_rounding: int = 1000

    def scoring_fingerprint(self) -> dict:
        """Scoring inputs that change what a result set is worth."""
        return {
            "points_by_position": self.points_by_position,
            "qualification_bonus_enabled": self.qualification_bonus_enabled,
            "qualification_bonus_by_position": self.qualification_bonus_by_position,
            "dsq_penalty": self.dsq_penalty,
            "auto_sub_enabled": self.auto_sub_enabled,
            "substitution_statuses": sorted(self.substitution_statuses),
            "team_size": self.team_size,
        }


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
