"""Roster validation applied when a race locks."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from mtb_fantasy.config import Settings


@dataclass
class TeamValidationError:
    code: str
    message: str


@dataclass
class TeamValidation:
    errors: list[TeamValidationError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def add(self, code: str, message: str) -> None:
        self.errors.append(TeamValidationError(code=code, message=message))


def _eligible(rider: Any, team_type: str) -> bool:
    return rider.category in ("both", team_type)


def validate_team(
    team_type: str,
    starters: list[tuple[str, int]],
    bench_uci_id: str | None,
    riders_by_uci_id: Mapping[str, Any],
    budget_cap: int,
    settings: Settings,
) -> TeamValidation:
    """Check a roster against team size, gender slots, eligibility and budget.

    ``starters`` is a list of ``(uci_id, starter_index)`` pairs.
    """
    validation = TeamValidation()
    team_size = settings.team_size

    if len(starters) != team_size:
        validation.add("STARTER_COUNT", f"Expected {team_size} starters, got {len(starters)}.")

    seen_indexes: set[int] = set()
    seen_riders: set[str] = set()
    gender_counts = {gender: 0 for gender in settings.gender_slots}
    total_cost = 0

    for uci_id, starter_index in starters:
        if starter_index is None or not 0 <= starter_index < team_size:
            validation.add(
                "STARTER_INDEX_INVALID",
                f"Starter index {starter_index} is invalid; expected 0-{team_size - 1}.",
            )
        elif starter_index in seen_indexes:
            validation.add("STARTER_INDEX_DUPLICATE", f"Duplicate starter index {starter_index}.")
        else:
            seen_indexes.add(starter_index)

        if uci_id in seen_riders:
            validation.add("DUPLICATE_RIDER", f"Duplicate rider {uci_id} in starters.")
            continue
        seen_riders.add(uci_id)

        rider = riders_by_uci_id.get(uci_id)
        if rider is None:
            validation.add("RIDER_NOT_FOUND", f"Rider {uci_id} not found.")
            continue

        gender_counts[rider.gender] = gender_counts.get(rider.gender, 0) + 1
        total_cost += rider.cost
        if not _eligible(rider, team_type):
            validation.add("CATEGORY_INELIGIBLE", f"Rider {uci_id} is not eligible for {team_type}.")

    missing_indexes = [index for index in range(team_size) if index not in seen_indexes]
    if missing_indexes:
        validation.add(
            "STARTER_INDEX_MISSING",
            f"Missing starter slots: {', '.join(str(i) for i in missing_indexes)}.",
        )

    if gender_counts != dict(settings.gender_slots):
        slots = " and ".join(f"{count} {gender}" for gender, count in settings.gender_slots.items())
        validation.add("GENDER_SLOTS_INVALID", f"Starters must be {slots} riders.")

    if bench_uci_id:
        if bench_uci_id in seen_riders:
            validation.add(
                "DUPLICATE_RIDER", f"Duplicate rider {bench_uci_id} across starters and bench."
            )
        bench_rider = riders_by_uci_id.get(bench_uci_id)
        if bench_rider is None:
            validation.add("RIDER_NOT_FOUND", f"Bench rider {bench_uci_id} not found.")
        else:
            total_cost += bench_rider.cost
            if not _eligible(bench_rider, team_type):
                validation.add(
                    "CATEGORY_INELIGIBLE", f"Rider {bench_uci_id} is not eligible for {team_type}."
                )

    if total_cost > budget_cap:
        validation.add("BUDGET_EXCEEDED", f"Team cost {total_cost} exceeds budget cap {budget_cap}.")

    return validation
