"""
emission_factors.py – Emission factor table used by the trip calculator.

All factors are in kg CO₂ per passenger-km (per vehicle-km for truck).
The default values are the fixed figures of the calculator; regional tables
can be loaded from JSON and passed to every engine function via ``table=``.
"""
from __future__ import annotations

import json
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterator, Mapping

from co2_calculator.constants import (
    BASELINE_MODE,
    MODE_BICYCLE,
    MODE_BUS,
    MODE_CAR,
    MODE_TRUCK,
)
from co2_calculator.exceptions import InvalidInputError, UnknownModeError

# ─────────────────────────────────────────────────────────────
# Default factors (kg CO₂ / km)
# Insertion order is the ranking tie-break order.
# ─────────────────────────────────────────────────────────────
DEFAULT_EMISSION_FACTORS: dict[str, float] = {
    MODE_BICYCLE: 0.0,     # human powered
    MODE_CAR:     0.12,    # average passenger car
    MODE_BUS:     0.089,   # per passenger, intercity coach
    MODE_TRUCK:   0.96,    # heavy-duty truck
}


def normalise_mode(mode: Any) -> str:
    """Lower-case and strip a mode name; non-strings are returned untouched."""
    if isinstance(mode, str):
        return mode.strip().lower()
    return mode


@dataclass(frozen=True)
class EmissionFactorTable:
    """
    Ordered, immutable mapping of transport mode → kg CO₂ per km.

    ``entries`` keeps the modes in an explicit order so that anything
    iterating the table (e.g. the all-modes comparison) is reproducible.
    ``baseline_mode`` is the mode every other mode is compared against.
    """

    entries: tuple[tuple[str, float], ...]
    baseline_mode: str = BASELINE_MODE
    _lookup: dict[str, float] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.entries:
            raise InvalidInputError("Emission factor table must contain at least one mode")

        lookup: dict[str, float] = {}
        for mode, factor in self.entries:
            if not isinstance(mode, str) or not mode.strip():
                raise InvalidInputError(f"Mode names must be non-empty strings, got {mode!r}")
            key = normalise_mode(mode)
            if key in lookup:
                raise InvalidInputError(f"Duplicate mode in emission factor table: {mode!r}")
            if (
                isinstance(factor, bool)
                or not isinstance(factor, (int, float))
                or not math.isfinite(factor)
                or factor < 0
            ):
                raise InvalidInputError(
                    f"Emission factor for {mode!r} must be a finite number ≥ 0, got {factor!r}"
                )
            lookup[key] = float(factor)

        baseline = normalise_mode(self.baseline_mode)
        if baseline not in lookup:
            raise InvalidInputError(
                f"Baseline mode {self.baseline_mode!r} is not in the emission factor table"
            )

        object.__setattr__(self, "entries", tuple(lookup.items()))
        object.__setattr__(self, "baseline_mode", baseline)
        object.__setattr__(self, "_lookup", lookup)

    # ── Constructors ────────────────────────────────────────────

    @classmethod
    def from_mapping(
        cls,
        factors: Mapping[str, float],
        baseline_mode: str = BASELINE_MODE,
    ) -> "EmissionFactorTable":
        """Build a table from an (ordered) mapping of mode → factor."""
        return cls(entries=tuple(factors.items()), baseline_mode=baseline_mode)

    @classmethod
    def from_json_file(cls, path: str | Path) -> "EmissionFactorTable":
        """
        Load a table from a JSON file shaped like::

            {"baseline_mode": "car", "factors": {"bicycle": 0, "car": 0.12}}

        ``baseline_mode`` is optional.  Raises ``InvalidInputError`` when the
        document does not have that shape; ``OSError`` propagates.
        """
        path = Path(path)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise InvalidInputError(f"{path}: not valid JSON ({exc})") from exc

        if not isinstance(data, dict) or not isinstance(data.get("factors"), dict):
            raise InvalidInputError(f"{path}: expected an object with a 'factors' mapping")
        return cls.from_mapping(
            data["factors"],
            baseline_mode=data.get("baseline_mode", BASELINE_MODE),
        )

    # ── Lookups ─────────────────────────────────────────────────

    def factor_for(self, mode: str) -> float:
        """Return kg CO₂ per km for *mode*; unknown modes raise ``UnknownModeError``."""
        key = normalise_mode(mode)
        try:
            return self._lookup[key]
        except (KeyError, TypeError):
            raise UnknownModeError(mode, self.all_modes()) from None

    def all_modes(self) -> tuple[str, ...]:
        """Return every mode in table order."""
        return tuple(mode for mode, _ in self.entries)

    def as_dict(self) -> dict[str, float]:
        return dict(self.entries)

    def __contains__(self, mode: object) -> bool:
        try:
            return normalise_mode(mode) in self._lookup
        except TypeError:
            return False

    def __iter__(self) -> Iterator[str]:
        return iter(self.all_modes())

    def __len__(self) -> int:
        return len(self.entries)


DEFAULT_FACTOR_TABLE = EmissionFactorTable.from_mapping(DEFAULT_EMISSION_FACTORS)
