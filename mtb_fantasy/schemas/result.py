"""Race result schemas."""

from pydantic import Field, field_validator, model_validator

from mtb_fantasy.schemas.common import BaseSchema, CategoryEnum, GenderEnum

KNOWN_STATUSES = {"FIN", "DNF", "DNS", "DNQ", "DSQ"}


class RaceResultInput(BaseSchema):
    """One rider row from an upstream result batch."""

    uci_id: str = Field(..., min_length=1, max_length=50, description="UCI rider id")
    status: str = Field("FIN", description="FIN/DNF/DNS/DNQ/DSQ")
    position: int | None = Field(None, ge=1, description="Finishing position, FIN only")
    qualification_position: int | None = Field(None, ge=1, description="Qualifying position")

    @field_validator("status", mode="before")
    @classmethod
    def normalize_status(cls, value: object) -> str:
        status = str(value or "").strip().upper()
        # Unknown statuses are treated as non-starters
        return status if status in KNOWN_STATUSES else "DNS"

    @model_validator(mode="after")
    def check_position(self) -> "RaceResultInput":
        if self.status == "FIN" and self.position is None:
            raise ValueError(f"Rider {self.uci_id} finished without a position")
        if self.status != "FIN":
            self.position = None
        return self


class ResultImportRequest(BaseSchema):
    """A result batch for one (gender, category) set."""

    gender: GenderEnum
    category: CategoryEnum = CategoryEnum.ELITE
    discipline: str | None = Field(None, max_length=20, description="Defaults to the race discipline")
    source_url: str | None = Field(None, max_length=500)
    is_final: bool = False
    results: list[RaceResultInput] = Field(default_factory=list)


class ResultImportResponse(BaseSchema):
    """Outcome of an import."""

    race_id: int
    updated: int
    status: str
    needs_resettle: bool
    content_hash: str
