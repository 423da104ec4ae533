"""
constants.py – Shared labels, display metadata, and thresholds.
"""
from __future__ import annotations

from dataclasses import dataclass

from co2_calculator.exceptions import UnknownModeError

# ── Transport modes ───────────────────────────────────────────
MODE_BICYCLE = "bicycle"
MODE_CAR = "car"
MODE_BUS = "bus"
MODE_TRUCK = "truck"

BASELINE_MODE = MODE_CAR


@dataclass(frozen=True)
class ModeInfo:
    """Display metadata for one transport mode."""

    mode: str
    label: str
    icon: str
    color: str


TRANSPORT_MODES: dict[str, ModeInfo] = {
    MODE_BICYCLE: ModeInfo(MODE_BICYCLE, "Bicicleta", "🚲", "#10b981"),
    MODE_CAR:     ModeInfo(MODE_CAR,     "Carro",     "🚗", "#059669"),
    MODE_BUS:     ModeInfo(MODE_BUS,     "Ônibus",    "🚌", "#34d399"),
    MODE_TRUCK:   ModeInfo(MODE_TRUCK,   "Caminhão",  "🚚", "#047857"),
}

# ── Severity bands (percentage of the baseline emission) ──────
# Upper bounds are inclusive: exactly 25 % is still "low".
SEVERITY_LOW = "low"
SEVERITY_MEDIUM = "medium"
SEVERITY_HIGH = "high"
SEVERITY_EXCESSIVE = "excessive"

SEVERITY_THRESHOLDS: tuple[tuple[float, str], ...] = (
    (25.0, SEVERITY_LOW),
    (75.0, SEVERITY_MEDIUM),
    (100.0, SEVERITY_HIGH),
)

SEVERITY_COLORS: dict[str, str] = {
    SEVERITY_LOW: "green",
    SEVERITY_MEDIUM: "yellow",
    SEVERITY_HIGH: "orange",
    SEVERITY_EXCESSIVE: "red",
}

# ── Carbon credits ────────────────────────────────────────────
KG_PER_CREDIT = 1000
CREDIT_PRICE_MIN = 50
CREDIT_PRICE_MAX = 150
DEFAULT_CURRENCY = "BRL"

# ── Rounding ──────────────────────────────────────────────────
EMISSION_DECIMALS = 2
PERCENTAGE_DECIMALS = 2
CREDIT_DECIMALS = 4
PRICE_DECIMALS = 2

# ── Distance provenance ───────────────────────────────────────
DISTANCE_SOURCE_ROUTE_TABLE = "route_table"
DISTANCE_SOURCE_MANUAL = "manual"


def mode_info(mode: str) -> ModeInfo:
    """Return display metadata for *mode*; unknown modes raise ``UnknownModeError``."""
    key = mode.strip().lower() if isinstance(mode, str) else mode
    try:
        return TRANSPORT_MODES[key]
    except (KeyError, TypeError):
        raise UnknownModeError(mode, tuple(TRANSPORT_MODES)) from None
