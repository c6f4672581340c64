"""Rider repricing after a race."""

from dataclasses import dataclass

from mtb_fantasy.config import Settings


@dataclass
class CostChange:
    updated_cost: int
    delta: int


def _round_up(value: int, step: int) -> int:
    return -(-value // step) * step


def calculate_updated_cost(
    current_cost: int,
    status: str,
    position: int | None,
    settings: Settings,
) -> CostChange:
    """
    Derive a rider's next cost from one race outcome.

    A finish inside the top ``cost_bonus_positions`` raises the price by
    ``cost_bonus_positions + 1 - position`` percent; any other finish keeps
    it; a non-finish lowers it by ``cost_penalty_percent``. Prices are
    rounded half-up to whole units, then up to ``cost_rounding``.
    """
    if status == "FIN" and position is not None and 0 < position <= settings.cost_bonus_positions:
        percent = 100 + settings.cost_bonus_positions + 1 - position
    elif status == "FIN":
        return CostChange(updated_cost=current_cost, delta=0)
    else:
        percent = 100 - settings.cost_penalty_percent

    scaled = (current_cost * percent + 50) // 100
    updated = _round_up(scaled, settings.cost_rounding)
    return CostChange(updated_cost=updated, delta=updated - current_cost)
