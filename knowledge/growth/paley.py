"""
Paley multiplier tables for adult height prediction.

The tables live in paley_multipliers.yaml as [age_years, multiplier] rows per
sex. They are parsed once per file and handed out as immutable tuples.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

import yaml

logger = logging.getLogger(__name__)

MultiplierRow = tuple[float, float]
MultiplierTable = tuple[MultiplierRow, ...]
HeightMultiplierTable = Mapping[str, MultiplierTable]

BUNDLED_TABLE_PATH = Path(__file__).parent / "paley_multipliers.yaml"

# YAML section -> binary sex key
SECTION_KEYS = {
    "boys": "male",
    "girls": "female",
}


def _parse_rows(section: str, rows: Any) -> MultiplierTable:
    if not isinstance(rows, list) or not rows:
        raise ValueError(f"Paley table section '{section}' must be a non-empty list")

    parsed: list[MultiplierRow] = []
    for row in rows:
        if not isinstance(row, (list, tuple)) or len(row) != 2:
            raise ValueError(f"Paley table row {row!r} in '{section}' must be [age_years, multiplier]")
        age, multiplier = float(row[0]), float(row[1])
        if parsed and age <= parsed[-1][0]:
            raise ValueError(
                f"Paley table '{section}' ages must be strictly increasing "
                f"({age} follows {parsed[-1][0]})"
            )
        parsed.append((age, multiplier))
    return tuple(parsed)


def parse_multiplier_table(raw: Mapping[str, Any]) -> HeightMultiplierTable:
    """
    Build a HeightMultiplierTable from the decoded YAML document.

    Raises:
        ValueError: If a sex section is missing or its rows are malformed
            or not sorted by age.
    """
    if not isinstance(raw, Mapping):
        raise ValueError("Paley table document must be a mapping of sections")

    missing = sorted(set(SECTION_KEYS) - set(raw))
    if missing:
        raise ValueError(f"Paley table missing sections: {missing}")

    return MappingProxyType({
        sex_key: _parse_rows(section, raw[section])
        for section, sex_key in SECTION_KEYS.items()
    })


@lru_cache(maxsize=None)
def _load_cached(path: str) -> HeightMultiplierTable:
    with open(path, encoding="utf-8") as f:
        raw = yaml.safe_load(f)
    table = parse_multiplier_table(raw)
    logger.info(
        "Loaded Paley multiplier table from %s (%d boys rows, %d girls rows)",
        path, len(table["male"]), len(table["female"]),
    )
    return table


def load_multiplier_table(path: Path | str | None = None) -> HeightMultiplierTable:
    """Load (once) the multiplier table at `path`, or the bundled one."""
    resolved = Path(path) if path else BUNDLED_TABLE_PATH
    return _load_cached(str(resolved.resolve()))
