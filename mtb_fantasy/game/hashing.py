"""Content fingerprints for idempotent settlement."""

import hashlib
import json
from datetime import date, datetime
from enum import Enum
from typing import Any


def _default(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    raise TypeError(f"Cannot fingerprint {type(value).__name__}")


def stable_stringify(value: Any) -> str:
    """Serialize to canonical JSON (sorted keys, compact separators)."""
    return json.dumps(
        value,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        default=_default,
    )


def hash_payload(value: Any) -> str:
    """SHA-256 hex digest of the canonical JSON form of ``value``."""
    return hashlib.sha256(stable_stringify(value).encode("utf-8")).hexdigest()


def results_fingerprint(race_id: int, results: list[Any], scoring: dict, game_version: str) -> str:
    """Fingerprint every result row of a race plus the scoring rules applied to them."""
    rows = sorted(
        (
            {
                "uci_id": row.uci_id,
                "status": row.status,
                "position": row.position,
                "qualification_position": row.qualification_position,
            }
            for row in results
        ),
        key=lambda row: row["uci_id"],
    )
    return hash_payload(
        {
            "game_version": game_version,
            "race_id": race_id,
            "results": rows,
            "scoring": scoring,
        }
    )
