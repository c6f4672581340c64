"""Result-set completeness rules."""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

DISCIPLINE_ALIASES = {
    "DOWNHILL": "DHI",
    "DH": "DHI",
    "CROSS-COUNTRY": "XCO",
    "XC": "XCO",
}

GENDER_LABELS = {"male": "Men", "female": "Women"}


@dataclass(frozen=True)
class ResultSetDefinition:
    """One (gender, category) result set."""

    gender: str
    category: str

    @property
    def key(self) -> str:
        return f"{self.gender}:{self.category}"

    @property
    def label(self) -> str:
        return f"{GENDER_LABELS.get(self.gender, self.gender.title())} {self.category.title()}"


def parse_result_sets(values: Iterable[str]) -> list[ResultSetDefinition]:
    """Parse ``"gender:category"`` strings from configuration."""
    definitions = []
    for value in values:
        gender, _, category = value.strip().lower().partition(":")
        if not gender or not category:
            raise ValueError(f"Invalid result set '{value}', expected 'gender:category'")
        definitions.append(ResultSetDefinition(gender=gender, category=category))
    return definitions


def normalize_discipline(value: str | None, fallback: str = "DHI") -> str:
    """Canonical discipline code (``downhill`` -> ``DHI``)."""
    normalized = "-".join(str(value or "").strip().upper().replace("_", " ").split())
    if not normalized:
        return fallback
    return DISCIPLINE_ALIASES.get(normalized, normalized)


def missing_final_result_sets(
    imports: Iterable[Any],
    required: Iterable[ResultSetDefinition],
    discipline: str | None = None,
) -> list[ResultSetDefinition]:
    """Return the required sets that have no final import.

    When ``discipline`` is given, imports for other disciplines do not count.
    """
    final_keys = set()
    for row in imports:
        if not row.is_final:
            continue
        if discipline and normalize_discipline(row.discipline) != normalize_discipline(discipline):
            continue
        final_keys.add(f"{row.gender}:{row.category}")

    return [definition for definition in required if definition.key not in final_keys]
