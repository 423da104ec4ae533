"""
main.py – FastAPI JSON API for the CO2 trip calculator.

Start:
    cd /path/to/repo
    uvicorn calculator_api.main:app --reload --port 8000

Every endpoint is a thin wrapper around co2_calculator; no state is kept
between requests.
"""
from __future__ import annotations

import logging
from dataclasses import asdict

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from co2_calculator import __version__
from co2_calculator.calculations import calculate_all_modes, calculate_credits, estimate_price
from co2_calculator.config import get_config, setup_logging
from co2_calculator.exceptions import CalculatorError, RouteNotFoundError
from co2_calculator.routes_data import all_cities, find_distance
from co2_calculator.schemas import CreditRequest, TripRequest
from co2_calculator.service import (
    comparison_to_dicts,
    estimate_trip,
    list_modes,
    trip_estimate_to_dict,
)

config = get_config()
setup_logging(config.log_level)
log = logging.getLogger(__name__)

app = FastAPI(
    title="CO2 Trip Calculator API",
    version=__version__,
    description="Trip emissions, transport mode comparison and carbon-credit estimates.",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _http_error(exc: CalculatorError) -> HTTPException:
    """Map a calculator error onto an HTTP status."""
    status = 404 if isinstance(exc, RouteNotFoundError) else 422
    return HTTPException(status_code=status, detail=str(exc))


@app.get("/api/modes", summary="Transport modes with emission factors")
def modes():
    """Returns {baseline_mode, modes: [{mode, label, icon, color, factor_kg_per_km, baseline}]}."""
    return {
        "baseline_mode": config.factor_table.baseline_mode,
        "modes": list_modes(config.factor_table),
    }


@app.get("/api/cities", summary="Cities known to the route table")
def cities():
    return all_cities()


@app.get("/api/distance", summary="Route distance between two cities")
def distance(origin: str, destination: str):
    """404 when the pair is not in the route table; the client should ask for a manual distance."""
    km = find_distance(origin, destination)
    if km is None:
        raise _http_error(RouteNotFoundError(origin, destination))
    return {"origin": origin, "destination": destination, "distance_km": km}


@app.get("/api/compare", summary="All-modes comparison for a distance")
def compare(distance_km: float):
    """Returns [{mode, emission, percentage_vs_baseline, severity, ...}] sorted by emission."""
    try:
        entries = calculate_all_modes(distance_km, table=config.factor_table)
    except CalculatorError as exc:
        raise _http_error(exc) from exc
    return comparison_to_dicts(entries)


@app.post("/api/estimate", summary="Full estimate for one trip")
def trip_estimate(body: TripRequest):
    """
    Resolve the distance (body value or route table), compute the emission,
    savings vs the baseline, the all-modes comparison and the carbon credits.
    """
    try:
        result = estimate_trip(body, table=config.factor_table, pricing=config.pricing)
    except CalculatorError as exc:
        raise _http_error(exc) from exc
    return trip_estimate_to_dict(result)


@app.post("/api/credits", summary="Carbon credits and price range for an emission")
def credit_estimate(body: CreditRequest):
    try:
        credit = calculate_credits(body.emission_kg, pricing=config.pricing)
        price = estimate_price(credit, pricing=config.pricing)
    except CalculatorError as exc:
        raise _http_error(exc) from exc
    return {
        "credits": credit.credits,
        "price": asdict(price),
        "currency": config.pricing.currency,
    }


@app.get("/health")
def health():
    return {"status": "ok"}
