"""
calculations.py – Trip emission, comparison, savings & carbon-credit engine.

Every public function is pure: it reads only its arguments and the (immutable)
emission factor table it is given, and returns freshly built value objects.

Formula references
────────────────────
 Quantity                  Formula                                  Rounding
 ─────────────────────────────────────────────────────────────────────────────
 Emission (kg CO₂)         distance_km × factor(mode)               2 dp
 % vs baseline             emission ÷ baseline_emission × 100       2 dp
 Savings (kg CO₂)          baseline_emission − emission             2 dp
 Savings %                 savings ÷ baseline_emission × 100        2 dp
 Carbon credits            emission_kg ÷ kg_per_credit              4 dp
 Price min / max           credits × price_min / price_max          2 dp
 Price average             (min + max) ÷ 2  (unrounded bounds)      2 dp

All rounding is half-up (see ``co2_calculator.rounding``) and happens at the
point of computation, so downstream consumers always receive rounded values.

Usage
──────
    from co2_calculator.calculations import calculate_emission, calculate_all_modes

    calculate_emission(430, "car")        # 51.6
    calculate_all_modes(430)[0].mode      # "bicycle"
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from decimal import Decimal, localcontext

from co2_calculator.constants import (
    CREDIT_DECIMALS,
    CREDIT_PRICE_MAX,
    CREDIT_PRICE_MIN,
    DEFAULT_CURRENCY,
    EMISSION_DECIMALS,
    KG_PER_CREDIT,
    PERCENTAGE_DECIMALS,
    PRICE_DECIMALS,
    SEVERITY_EXCESSIVE,
    SEVERITY_THRESHOLDS,
)
from co2_calculator.emission_factors import DEFAULT_FACTOR_TABLE, EmissionFactorTable
from co2_calculator.exceptions import (
    DivisionByZeroError,
    InvalidDistanceError,
    InvalidInputError,
)
from co2_calculator.rounding import ENGINE_CONTEXT, round_decimal, to_decimal

logger = logging.getLogger(__name__)

_HUNDRED = Decimal(100)


# ─────────────────────────────────────────────────────────────────────────────
# Result dataclasses (immutable, one set per calculation)
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class ModeComparisonEntry:
    """Emission of one mode for the compared distance."""
    mode: str
    emission: float                  # kg CO₂, 2 dp
    percentage_vs_baseline: float    # 2 dp

    @property
    def severity(self) -> str:
        return severity_band(self.percentage_vs_baseline)


@dataclass(frozen=True)
class SavingsResult:
    """Savings against the baseline; negative when the alternative emits more."""
    saved_kg: float
    percentage: float


@dataclass(frozen=True)
class CreditEstimate:
    credits: float                   # 4 dp


@dataclass(frozen=True)
class PriceEstimate:
    min: float
    max: float
    average: float


@dataclass(frozen=True)
class CreditPricing:
    """How many kg one credit offsets and what a credit costs."""
    kg_per_credit: float = KG_PER_CREDIT
    price_min: float = CREDIT_PRICE_MIN
    price_max: float = CREDIT_PRICE_MAX
    currency: str = DEFAULT_CURRENCY

    def __post_init__(self) -> None:
        for name in ("kg_per_credit", "price_min", "price_max"):
            value = getattr(self, name)
            if (
                isinstance(value, bool)
                or not isinstance(value, (int, float))
                or not math.isfinite(value)
            ):
                raise InvalidInputError(f"{name} must be a finite number, got {value!r}")
        if self.kg_per_credit <= 0:
            raise InvalidInputError(f"kg_per_credit must be > 0, got {self.kg_per_credit!r}")
        if self.price_min < 0 or self.price_max < 0:
            raise InvalidInputError("Credit prices must be ≥ 0")
        if self.price_min > self.price_max:
            raise InvalidInputError(
                f"price_min ({self.price_min}) must not exceed price_max ({self.price_max})"
            )


DEFAULT_PRICING = CreditPricing()


# ─────────────────────────────────────────────────────────────────────────────
# Internal helpers
# ─────────────────────────────────────────────────────────────────────────────

def resolve_table(table: EmissionFactorTable | None) -> EmissionFactorTable:
    return table if table is not None else DEFAULT_FACTOR_TABLE


def resolve_pricing(pricing: CreditPricing | None) -> CreditPricing:
    return pricing if pricing is not None else DEFAULT_PRICING


def _distance_to_decimal(distance_km: float) -> Decimal:
    """Validate a distance and return it as ``Decimal``."""
    if isinstance(distance_km, bool) or not isinstance(distance_km, (int, float)):
        raise InvalidDistanceError(
            f"Distance must be a number, got {type(distance_km).__name__}"
        )
    if not math.isfinite(distance_km):
        raise InvalidDistanceError(f"Distance must be finite, got {distance_km!r}")
    if distance_km < 0:
        raise InvalidDistanceError(f"Distance must be ≥ 0, got {distance_km!r}")
    return to_decimal(distance_km)


def _non_negative(value: float, name: str) -> Decimal:
    """Validate a finite, non-negative number and return it as ``Decimal``."""
    d = to_decimal(value)
    if d < 0:
        raise InvalidInputError(f"{name} must be ≥ 0, got {value!r}")
    return d


def _emission(distance: Decimal, mode: str, table: EmissionFactorTable) -> Decimal:
    factor = to_decimal(table.factor_for(mode))
    with localcontext(ENGINE_CONTEXT):
        return round_decimal(distance * factor, EMISSION_DECIMALS)


def _percentage(part: Decimal, whole: Decimal) -> Decimal:
    with localcontext(ENGINE_CONTEXT):
        return round_decimal(part / whole * _HUNDRED, PERCENTAGE_DECIMALS)


def _to_float(value: Decimal, name: str) -> float:
    """Convert an engine result to ``float``; results beyond float range raise."""
    result = float(value)
    if not math.isfinite(result):
        raise InvalidInputError(f"{name} is too large to represent: {value}")
    return result


# ─────────────────────────────────────────────────────────────────────────────
# 1. Emission for one mode
# Formula: distance_km × factor(mode)
# ─────────────────────────────────────────────────────────────────────────────

def calculate_emission(
    distance_km: float,
    mode: str,
    *,
    table: EmissionFactorTable | None = None,
) -> float:
    """
    Return the kg CO₂ emitted travelling *distance_km* by *mode*.

    Raises
    ------
    UnknownModeError
        *mode* is not in the factor table.
    InvalidDistanceError
        *distance_km* is negative, NaN, infinite or not a number.
    """
    table = resolve_table(table)
    distance = _distance_to_decimal(distance_km)
    emission = _emission(distance, mode, table)
    logger.debug("Emission %s km × %s = %s kg", distance_km, mode, emission)
    return _to_float(emission, "emission")


# ─────────────────────────────────────────────────────────────────────────────
# 2. All modes, ranked against the baseline
# Formula: emission ÷ baseline_emission × 100
# ─────────────────────────────────────────────────────────────────────────────

def calculate_all_modes(
    distance_km: float,
    *,
    table: EmissionFactorTable | None = None,
) -> list[ModeComparisonEntry]:
    """
    Compute the emission of every mode in *table* for *distance_km*.

    Returns one ``ModeComparisonEntry`` per mode, sorted ascending by
    emission.  Ties keep the table order.

    When the (rounded) baseline emission is zero, a mode that also emits
    zero gets 0 %.

    Raises
    ------
    DivisionByZeroError
        The baseline emission is zero but some mode's emission is not.
    """
    table = resolve_table(table)
    distance = _distance_to_decimal(distance_km)
    baseline = _emission(distance, table.baseline_mode, table)

    entries: list[ModeComparisonEntry] = []
    for mode in table.all_modes():
        emission = _emission(distance, mode, table)
        if baseline:
            pct = _percentage(emission, baseline)
        elif emission:
            raise DivisionByZeroError(
                f"Cannot compare {mode} ({float(emission)} kg) against a zero "
                f"{table.baseline_mode} baseline at {distance_km} km"
            )
        else:
            pct = Decimal(0)
        entries.append(
            ModeComparisonEntry(
                mode=mode,
                emission=_to_float(emission, "emission"),
                percentage_vs_baseline=_to_float(pct, "percentage_vs_baseline"),
            )
        )

    # sorted() is stable, so equal emissions stay in table order
    ranked = sorted(entries, key=lambda e: e.emission)
    logger.debug(
        "Compared %d modes for %s km (baseline %s = %s kg)",
        len(ranked), distance_km, table.baseline_mode, baseline,
    )
    return ranked


def severity_band(percentage: float) -> str:
    """
    Classify a percentage-of-baseline into a severity band.

    ≤ 25 → low, ≤ 75 → medium, ≤ 100 → high, > 100 → excessive.
    """
    if (
        isinstance(percentage, bool)
        or not isinstance(percentage, (int, float))
        or not math.isfinite(percentage)
    ):
        raise InvalidInputError(f"Percentage must be a finite number, got {percentage!r}")
    for upper, band in SEVERITY_THRESHOLDS:
        if percentage <= upper:
            return band
    return SEVERITY_EXCESSIVE


def bar_width(emission: float, max_emission: float) -> float:
    """Relative bar length (0–100) of *emission* against the largest emission shown."""
    value = _non_negative(emission, "emission")
    largest = _non_negative(max_emission, "max_emission")
    if not largest:
        return 0.0
    return _to_float(_percentage(value, largest), "bar_width")


# ─────────────────────────────────────────────────────────────────────────────
# 3. Savings against a baseline
# Formula: saved = baseline − emission ; pct = saved ÷ baseline × 100
# ─────────────────────────────────────────────────────────────────────────────

def calculate_savings(emission: float, baseline_emission: float) -> SavingsResult:
    """
    Compare *emission* with *baseline_emission* (both kg CO₂).

    Raises
    ------
    DivisionByZeroError
        The baseline is 0 but the emission is not.
    InvalidInputError
        Either value is not a finite number.
    """
    value = to_decimal(emission)
    baseline = to_decimal(baseline_emission)
    with localcontext(ENGINE_CONTEXT):
        saved = baseline - value

    if baseline:
        pct = _percentage(saved, baseline)
    elif saved:
        raise DivisionByZeroError(
            f"Cannot express savings of {float(saved)} kg against a zero baseline"
        )
    else:
        pct = Decimal(0)

    result = SavingsResult(
        saved_kg=_to_float(round_decimal(saved, EMISSION_DECIMALS), "saved_kg"),
        percentage=_to_float(pct, "percentage"),
    )
    logger.debug("Savings %s vs %s → %s", emission, baseline_emission, result)
    return result


# ─────────────────────────────────────────────────────────────────────────────
# 4. Carbon credits & price range
# Formula: credits = kg ÷ kg_per_credit ; price = credits × price_min/max
# ─────────────────────────────────────────────────────────────────────────────

def calculate_credits(
    emission_kg: float,
    *,
    pricing: CreditPricing | None = None,
) -> CreditEstimate:
    """Return the number of credits needed to offset *emission_kg*."""
    pricing = resolve_pricing(pricing)
    emission = _non_negative(emission_kg, "emission_kg")
    with localcontext(ENGINE_CONTEXT):
        credits = emission / to_decimal(pricing.kg_per_credit)
    return CreditEstimate(credits=_to_float(round_decimal(credits, CREDIT_DECIMALS), "credits"))


def estimate_price(
    credits: float | CreditEstimate,
    *,
    pricing: CreditPricing | None = None,
) -> PriceEstimate:
    """
    Return the min / max / average price of *credits*.

    The average is the mid-point of the unrounded bounds, so
    ``min ≤ average ≤ max`` always holds after rounding.
    """
    pricing = resolve_pricing(pricing)
    if isinstance(credits, CreditEstimate):
        credits = credits.credits
    amount = _non_negative(credits, "credits")

    with localcontext(ENGINE_CONTEXT):
        low = amount * to_decimal(pricing.price_min)
        high = amount * to_decimal(pricing.price_max)
        average = (low + high) / 2

    return PriceEstimate(
        min=_to_float(round_decimal(low, PRICE_DECIMALS), "price min"),
        max=_to_float(round_decimal(high, PRICE_DECIMALS), "price max"),
        average=_to_float(round_decimal(average, PRICE_DECIMALS), "price average"),
    )
