"""
service.py – Callable trip-estimate logic shared by the CLI and the HTTP API.

``estimate_trip`` runs the whole calculation for one request:

    distance (given, or looked up in the route table)
      → emission of the selected mode and of the baseline mode
      → savings against the baseline
      → all-modes comparison
      → carbon credits and price range of the selected emission

The helpers below turn results into plain JSON-ready dicts; the engine
itself never formats numbers.
"""
from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any, Mapping

from co2_calculator.calculations import (
    CreditEstimate,
    CreditPricing,
    ModeComparisonEntry,
    PriceEstimate,
    SavingsResult,
    bar_width,
    calculate_all_modes,
    calculate_credits,
    calculate_emission,
    calculate_savings,
    estimate_price,
    resolve_pricing,
    resolve_table,
)
from co2_calculator.constants import (
    DISTANCE_SOURCE_MANUAL,
    DISTANCE_SOURCE_ROUTE_TABLE,
    SEVERITY_COLORS,
    ModeInfo,
    mode_info,
)
from co2_calculator.emission_factors import EmissionFactorTable
from co2_calculator.exceptions import RouteNotFoundError, UnknownModeError
from co2_calculator.routes_data import DEFAULT_ROUTE_TABLE, RouteTable
from co2_calculator.schemas import TripRequest

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class TripEstimate:
    """Everything computed for one trip request."""
    origin: str
    destination: str
    distance_km: float
    distance_source: str
    mode: str
    emission: float
    baseline_mode: str
    baseline_emission: float
    savings: SavingsResult | None
    comparison: tuple[ModeComparisonEntry, ...]
    credits: CreditEstimate
    price: PriceEstimate
    currency: str


# ─────────────────────────────────────────────────────────────────────────────
# Estimate
# ─────────────────────────────────────────────────────────────────────────────

def resolve_distance(
    request: TripRequest,
    routes: RouteTable | None = None,
) -> tuple[float, str]:
    """
    Return ``(distance_km, source)`` for *request*.

    A distance given in the request always wins; otherwise the route table is
    consulted.  Raises ``RouteNotFoundError`` when neither is available.
    """
    if request.distance_km is not None:
        return request.distance_km, DISTANCE_SOURCE_MANUAL

    routes = routes if routes is not None else DEFAULT_ROUTE_TABLE
    distance = routes.find_distance(request.origin, request.destination)
    if distance is None:
        log.warning("Route not found: %s → %s", request.origin, request.destination)
        raise RouteNotFoundError(request.origin, request.destination)
    return distance, DISTANCE_SOURCE_ROUTE_TABLE


def estimate_trip(
    request: TripRequest | Mapping[str, Any],
    *,
    table: EmissionFactorTable | None = None,
    routes: RouteTable | None = None,
    pricing: CreditPricing | None = None,
) -> TripEstimate:
    """
    Run the full calculation for one trip.

    *request* may be a ``TripRequest`` or a plain mapping (validated with
    pydantic).  Calculator errors propagate unchanged.
    """
    if not isinstance(request, TripRequest):
        request = TripRequest.model_validate(request)
    table = resolve_table(table)
    pricing = resolve_pricing(pricing)

    distance_km, source = resolve_distance(request, routes)
    log.debug("Distance %s → %s: %s km (%s)", request.origin, request.destination, distance_km, source)

    emission = calculate_emission(distance_km, request.mode, table=table)
    baseline_emission = calculate_emission(distance_km, table.baseline_mode, table=table)

    savings: SavingsResult | None = None
    if request.mode != table.baseline_mode:
        result = calculate_savings(emission, baseline_emission)
        # Only surfaced when the chosen mode actually saves something
        if result.saved_kg > 0:
            savings = result

    comparison = tuple(calculate_all_modes(distance_km, table=table))
    credits = calculate_credits(emission, pricing=pricing)
    price = estimate_price(credits, pricing=pricing)

    log.info(
        "Estimated %s → %s (%s km, %s): %.2f kg CO₂, %.4f credits",
        request.origin, request.destination, distance_km, request.mode,
        emission, credits.credits,
    )
    return TripEstimate(
        origin=request.origin,
        destination=request.destination,
        distance_km=float(distance_km),
        distance_source=source,
        mode=request.mode,
        emission=emission,
        baseline_mode=table.baseline_mode,
        baseline_emission=baseline_emission,
        savings=savings,
        comparison=comparison,
        credits=credits,
        price=price,
        currency=pricing.currency,
    )


# ─────────────────────────────────────────────────────────────────────────────
# Serialisation helpers
# ─────────────────────────────────────────────────────────────────────────────

def describe_mode(mode: str) -> ModeInfo:
    """Display metadata for *mode*; modes without metadata get a plain label."""
    try:
        return mode_info(mode)
    except UnknownModeError:
        return ModeInfo(mode=mode, label=mode.title(), icon="", color="#6b7280")


def comparison_to_dicts(
    entries: list[ModeComparisonEntry] | tuple[ModeComparisonEntry, ...],
    selected_mode: str | None = None,
) -> list[dict[str, Any]]:
    """Comparison rows with severity, colour and relative bar width added."""
    largest = max((e.emission for e in entries), default=0.0)
    rows: list[dict[str, Any]] = []
    for entry in entries:
        info = describe_mode(entry.mode)
        severity = entry.severity
        rows.append({
            "mode": entry.mode,
            "label": info.label,
            "icon": info.icon,
            "emission": entry.emission,
            "percentage_vs_baseline": entry.percentage_vs_baseline,
            "severity": severity,
            "severity_color": SEVERITY_COLORS[severity],
            "bar_width": bar_width(entry.emission, largest),
            "selected": entry.mode == selected_mode,
        })
    return rows


def trip_estimate_to_dict(estimate: TripEstimate) -> dict[str, Any]:
    """Return a JSON-serialisable dict for *estimate*."""
    info = describe_mode(estimate.mode)
    return {
        "origin": estimate.origin,
        "destination": estimate.destination,
        "distance_km": estimate.distance_km,
        "distance_source": estimate.distance_source,
        "mode": estimate.mode,
        "mode_label": info.label,
        "mode_icon": info.icon,
        "emission": estimate.emission,
        "baseline_mode": estimate.baseline_mode,
        "baseline_emission": estimate.baseline_emission,
        "savings": asdict(estimate.savings) if estimate.savings is not None else None,
        "comparison": comparison_to_dicts(estimate.comparison, estimate.mode),
        "credits": estimate.credits.credits,
        "price": asdict(estimate.price),
        "currency": estimate.currency,
    }


def list_modes(table: EmissionFactorTable | None = None) -> list[dict[str, Any]]:
    """Every mode of *table* with its factor and display metadata, in table order."""
    table = resolve_table(table)
    return [
        {
            **asdict(describe_mode(mode)),
            "factor_kg_per_km": factor,
            "baseline": mode == table.baseline_mode,
        }
        for mode, factor in table.entries
    ]
