"""Team scoring from a frozen snapshot and race results."""

from collections.abc import Mapping
from dataclasses import asdict, dataclass, field
from typing import Any

from mtb_fantasy.config import Settings

FINISHED = "FIN"


@dataclass(frozen=True)
class Finished:
    """Rider crossed the line."""

    position: int
    qualification_position: int | None = None

    @property
    def status(self) -> str:
        return FINISHED


@dataclass(frozen=True)
class NotFinished:
    """Rider has no classified finish (DNS, DNF, DNQ or DSQ)."""

    status: str
    qualification_position: int | None = None


RiderOutcome = Finished | NotFinished


def outcome_from_result(result: Any | None) -> RiderOutcome:
    """Build an outcome from a result row or mapping.

    A rider without a result row is treated as a non-starter.
    """
    if result is None:
        return NotFinished(status="DNS")

    if isinstance(result, Mapping):
        status = result.get("status")
        position = result.get("position")
        qualification_position = result.get("qualification_position")
    else:
        status = result.status
        position = result.position
        qualification_position = getattr(result, "qualification_position", None)

    status = str(status or "DNS").upper()
    if status == FINISHED and position:
        return Finished(position=int(position), qualification_position=qualification_position)
    if status == FINISHED:
        # Finished without a classified position cannot be scored
        return NotFinished(status="DNS", qualification_position=qualification_position)
    return NotFinished(status=status, qualification_position=qualification_position)


@dataclass
class RiderScore:
    """Points for one rider slot."""

    slot_index: int | None
    uci_id: str
    gender: str
    status: str
    position: int | None
    has_result: bool
    base_points: int = 0
    qual_bonus: int = 0
    penalties: int = 0
    final_points: int = 0
    substituted_by: str | None = None


@dataclass
class Substitution:
    """Outcome of the bench auto-substitution rule."""

    applied: bool
    bench_uci_id: str | None
    replaced_starter_index: int | None
    reason: str


@dataclass
class TeamScore:
    """Scored snapshot."""

    total_points: int
    starters: list[RiderScore]
    bench: RiderScore | None
    substitution: Substitution
    breakdown: dict = field(init=False)

    def __post_init__(self) -> None:
        self.breakdown = {
            "starters": [asdict(starter) for starter in self.starters],
            "bench": asdict(self.bench) if self.bench else None,
            "substitution": asdict(self.substitution),
        }


def score_rider_result(outcome: RiderOutcome, settings: Settings) -> dict[str, int]:
    """Return base points, qualification bonus, penalties and final points."""
    base_points = 0
    qual_bonus = 0
    penalties = 0

    if isinstance(outcome, Finished):
        base_points = settings.points_by_position.get(outcome.position, 0)
        if settings.qualification_bonus_enabled and outcome.qualification_position:
            qual_bonus = settings.qualification_bonus_by_position.get(
                outcome.qualification_position, 0
            )
    elif outcome.status == "DSQ":
        penalties = settings.dsq_penalty

    return {
        "base_points": base_points,
        "qual_bonus": qual_bonus,
        "penalties": penalties,
        "final_points": base_points + qual_bonus + penalties,
    }


def _score_rider(
    rider: Mapping[str, Any],
    slot_index: int | None,
    results_by_uci_id: Mapping[str, Any],
    settings: Settings,
) -> tuple[RiderScore, RiderOutcome]:
    result = results_by_uci_id.get(rider["uci_id"])
    outcome = outcome_from_result(result)
    points = score_rider_result(outcome, settings)
    return (
        RiderScore(
            slot_index=slot_index,
            uci_id=rider["uci_id"],
            gender=rider["gender"],
            status=outcome.status,
            position=outcome.position if isinstance(outcome, Finished) else None,
            has_result=result is not None,
            **points,
        ),
        outcome,
    )


def score_team_snapshot(
    starters: list[Mapping[str, Any]],
    bench: Mapping[str, Any] | None,
    results_by_uci_id: Mapping[str, Any],
    settings: Settings,
) -> TeamScore:
    """
    Score a frozen roster.

    Args:
        starters: Snapshot starters in slot order (``uci_id``, ``gender``)
        bench: Snapshot bench rider or None
        results_by_uci_id: Result rows or mappings keyed by UCI id
        settings: Scoring tables and substitution policy

    Returns:
        TeamScore with the total and a per-slot breakdown
    """
    starter_scores = [
        _score_rider(starter, index, results_by_uci_id, settings)[0]
        for index, starter in enumerate(starters)
    ]

    bench_score = None
    bench_outcome: RiderOutcome | None = None
    if bench:
        bench_score, bench_outcome = _score_rider(bench, None, results_by_uci_id, settings)

    substitution = Substitution(
        applied=False,
        bench_uci_id=bench["uci_id"] if bench else None,
        replaced_starter_index=None,
        reason="NO_BENCH",
    )

    if not settings.auto_sub_enabled:
        substitution.reason = "AUTO_SUB_DISABLED"
    elif bench_score is not None:
        eligible_statuses = {status.upper() for status in settings.substitution_statuses}
        counted = starter_scores[: settings.team_size]
        missing = [s for s in counted if s.status in eligible_statuses]
        same_gender = [s for s in missing if s.gender == bench_score.gender]

        if not missing:
            substitution.reason = "NO_ELIGIBLE_STARTER"
        elif not same_gender:
            substitution.reason = "NO_VALID_SUB"
        elif not isinstance(bench_outcome, Finished):
            substitution.reason = "BENCH_DID_NOT_FINISH"
        else:
            # Earliest slot wins
            replaced = min(same_gender, key=lambda s: s.slot_index)
            replaced.final_points = bench_score.final_points
            replaced.substituted_by = bench_score.uci_id
            substitution.applied = True
            substitution.replaced_starter_index = replaced.slot_index
            substitution.reason = "AUTO_SUB_SAME_GENDER"

    total_points = sum(s.final_points for s in starter_scores[: settings.team_size])

    return TeamScore(
        total_points=total_points,
        starters=starter_scores,
        bench=bench_score,
        substitution=substitution,
    )
