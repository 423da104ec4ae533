"""
main.py – CLI entry point for the CO2 trip calculator.

Usage
-----
Estimate a trip (distance looked up from the route table):
    python -m co2_calculator.main estimate --origin "São Paulo, SP" --destination "Rio de Janeiro, RJ" --mode bus

Estimate with a manual distance:
    python -m co2_calculator.main estimate --origin A --destination B --distance 120 --mode car

Other commands:
    python -m co2_calculator.main compare --distance 430
    python -m co2_calculator.main route --origin "Curitiba, PR" --destination "Florianópolis, SC"
    python -m co2_calculator.main cities
    python -m co2_calculator.main modes

Common options:
    --json      (estimate / compare) print the raw JSON payload
    --verbose   debug logging
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any

from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from co2_calculator.calculations import calculate_all_modes
from co2_calculator.config import Config, get_config, setup_logging
from co2_calculator.exceptions import CalculatorError
from co2_calculator.routes_data import all_cities, find_distance
from co2_calculator.service import (
    TripEstimate,
    comparison_to_dicts,
    estimate_trip,
    list_modes,
    trip_estimate_to_dict,
)

console = Console()
log = logging.getLogger(__name__)

_SEVERITY_STYLE = {
    "green": "green",
    "yellow": "yellow",
    "orange": "dark_orange",
    "red": "red",
}


# ─────────────────────────────────────────────────────────────
# Rendering helpers
# ─────────────────────────────────────────────────────────────

def _fmt(value: float, decimals: int = 2) -> str:
    return f"{value:,.{decimals}f}"


def _print_comparison_table(rows: list[dict[str, Any]], title: str) -> None:
    table = Table(title=title)
    table.add_column("Mode", style="bold")
    table.add_column("kg CO₂", justify="right")
    table.add_column("% vs baseline", justify="right")
    table.add_column("Severity")
    for row in rows:
        label = f"{row['icon']} {row['label']}".strip()
        if row["selected"]:
            label += " [cyan](selected)[/]"
        style = _SEVERITY_STYLE.get(row["severity_color"], "white")
        table.add_row(
            label,
            _fmt(row["emission"]),
            _fmt(row["percentage_vs_baseline"], 1),
            f"[{style}]{row['severity']}[/]",
        )
    console.print(table)


def _print_estimate(estimate: TripEstimate) -> None:
    payload = trip_estimate_to_dict(estimate)

    results = Table(title="Trip Result", show_header=False)
    results.add_column("Field", style="bold")
    results.add_column("Value")
    results.add_row("Route", f"{estimate.origin} → {estimate.destination}")
    source = "route table" if estimate.distance_source == "route_table" else "manual"
    results.add_row("Distance", f"{_fmt(estimate.distance_km, 0)} km ({source})")
    results.add_row("Mode", f"{payload['mode_icon']} {payload['mode_label']}".strip())
    results.add_row("CO₂ emission", f"{_fmt(estimate.emission)} kg")
    if estimate.savings is not None:
        results.add_row(
            f"Savings vs {estimate.baseline_mode}",
            f"{_fmt(estimate.savings.saved_kg)} kg ({_fmt(estimate.savings.percentage, 1)}%)",
        )
    console.print(results)

    _print_comparison_table(payload["comparison"], "Mode Comparison")

    price = estimate.price
    console.print(
        Panel(
            f"Credits needed: [bold]{_fmt(estimate.credits.credits, 4)}[/]\n"
            f"Estimated price: [bold]{estimate.currency} {_fmt(price.average)}[/] "
            f"(range {_fmt(price.min)} – {_fmt(price.max)})",
            title="Carbon Credits",
        )
    )


# ─────────────────────────────────────────────────────────────
# Sub-commands
# ─────────────────────────────────────────────────────────────

def cmd_estimate(args: argparse.Namespace, cfg: Config) -> int:
    """Handle: estimate --origin O --destination D --mode M [--distance KM]."""
    estimate = estimate_trip(
        {
            "origin": args.origin,
            "destination": args.destination,
            "mode": args.mode,
            "distance_km": args.distance,
        },
        table=cfg.factor_table,
        pricing=cfg.pricing,
    )
    if args.json:
        print(json.dumps(trip_estimate_to_dict(estimate), ensure_ascii=False, indent=2))
    else:
        _print_estimate(estimate)
    return 0


def cmd_compare(args: argparse.Namespace, cfg: Config) -> int:
    """Handle: compare --distance KM."""
    rows = comparison_to_dicts(calculate_all_modes(args.distance, table=cfg.factor_table))
    if args.json:
        print(json.dumps(rows, ensure_ascii=False, indent=2))
    else:
        _print_comparison_table(rows, f"Mode Comparison – {_fmt(args.distance, 0)} km")
    return 0


def cmd_route(args: argparse.Namespace, _cfg: Config) -> int:
    """Handle: route --origin O --destination D."""
    distance = find_distance(args.origin, args.destination)
    if distance is None:
        console.print(
            f"[yellow]Route not found:[/] {args.origin} → {args.destination}. "
            "Enter the distance manually with --distance."
        )
        return 1
    console.print(f"{args.origin} → {args.destination}: [bold]{_fmt(distance, 0)} km[/]")
    return 0


def cmd_cities(_args: argparse.Namespace, _cfg: Config) -> int:
    """Handle: cities."""
    for city in all_cities():
        console.print(city)
    return 0


def cmd_modes(_args: argparse.Namespace, cfg: Config) -> int:
    """Handle: modes."""
    table = Table(title="Emission Factors")
    table.add_column("Mode", style="bold")
    table.add_column("Label")
    table.add_column("kg CO₂ / km", justify="right")
    table.add_column("Baseline", justify="center")
    for row in list_modes(cfg.factor_table):
        table.add_row(
            row["mode"],
            f"{row['icon']} {row['label']}".strip(),
            f"{row['factor_kg_per_km']:.3f}",
            "✓" if row["baseline"] else "",
        )
    console.print(table)
    return 0


# ─────────────────────────────────────────────────────────────
# Argument parsing
# ─────────────────────────────────────────────────────────────

def _build_shared_args(parser: argparse.ArgumentParser) -> None:
    """Add arguments shared by every sub-command."""
    parser.add_argument(
        "--verbose",
        action="store_true",
        default=False,
        help="Enable debug logging",
    )


def build_parser() -> argparse.ArgumentParser:
    """Construct and return the top-level argument parser."""
    root = argparse.ArgumentParser(
        prog="co2-calc",
        description="CO2 trip calculator – emissions, mode comparison and carbon credits.",
    )
    sub = root.add_subparsers(dest="command", required=True)

    # ── estimate ───────────────────────────────────────────────
    p_estimate = sub.add_parser("estimate", help="Estimate the emission of one trip.")
    p_estimate.add_argument("--origin", required=True, help='Origin city, e.g. "São Paulo, SP"')
    p_estimate.add_argument("--destination", required=True, help='Destination city, e.g. "Rio de Janeiro, RJ"')
    p_estimate.add_argument("--mode", required=True, help="Transport mode (bicycle, car, bus, truck)")
    p_estimate.add_argument(
        "--distance",
        type=float,
        default=None,
        help="Distance in km (default: look up the route table)",
    )
    p_estimate.add_argument("--json", action="store_true", help="Print the raw JSON payload")
    _build_shared_args(p_estimate)

    # ── compare ────────────────────────────────────────────────
    p_compare = sub.add_parser("compare", help="Compare every mode for a distance.")
    p_compare.add_argument("--distance", type=float, required=True, help="Distance in km")
    p_compare.add_argument("--json", action="store_true", help="Print the raw JSON payload")
    _build_shared_args(p_compare)

    # ── route ──────────────────────────────────────────────────
    p_route = sub.add_parser("route", help="Look up the distance between two cities.")
    p_route.add_argument("--origin", required=True)
    p_route.add_argument("--destination", required=True)
    _build_shared_args(p_route)

    # ── cities / modes ─────────────────────────────────────────
    _build_shared_args(sub.add_parser("cities", help="List the cities in the route table."))
    _build_shared_args(sub.add_parser("modes", help="List transport modes and their factors."))

    return root


# ─────────────────────────────────────────────────────────────
# Entry point
# ─────────────────────────────────────────────────────────────

_DISPATCH = {
    "estimate": cmd_estimate,
    "compare": cmd_compare,
    "route": cmd_route,
    "cities": cmd_cities,
    "modes": cmd_modes,
}


def run(argv: list[str] | None = None) -> int:
    """Parse *argv*, dispatch to the sub-command and return the exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        cfg = get_config(log_level="DEBUG" if args.verbose else None)
    except EnvironmentError as exc:
        console.print(f"[red]Configuration error:[/] {escape(str(exc))}")
        return 1
    setup_logging(cfg.log_level)

    handler = _DISPATCH[args.command]
    try:
        return handler(args, cfg)
    except ValidationError as exc:
        for err in exc.errors():
            field = ".".join(str(p) for p in err["loc"]) or "input"
            console.print(f"[red]Invalid {field}:[/] {escape(err['msg'])}")
        return 1
    except CalculatorError as exc:
        log.debug("Calculation failed", exc_info=True)
        console.print(f"[red]Error:[/] {escape(str(exc))}")
        return 1


def main() -> None:
    """Console-script entry point."""
    sys.exit(run())


if __name__ == "__main__":
    main()
