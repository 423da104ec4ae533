"""
routes_data.py – Static route-distance provider.

A small table of popular Brazilian intercity routes with road distances in
km.  Lookups are case-insensitive, ignore surrounding whitespace and work in
either direction.  The engine never computes distances itself; callers
resolve a distance here (or take one from the user) and pass the number on.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field

from co2_calculator.exceptions import InvalidInputError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Route:
    """One undirected route."""
    origin: str
    destination: str
    distance_km: float


def _city_key(name: str) -> str:
    return name.strip().lower()


@dataclass(frozen=True)
class RouteTable:
    """Immutable collection of routes with a symmetric lookup index."""

    routes: tuple[Route, ...]
    _index: dict[tuple[str, str], float] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        index: dict[tuple[str, str], float] = {}
        for route in self.routes:
            if not route.origin.strip() or not route.destination.strip():
                raise InvalidInputError(f"Route endpoints must be non-empty: {route!r}")
            if not math.isfinite(route.distance_km) or route.distance_km < 0:
                raise InvalidInputError(f"Route distance must be a finite number ≥ 0: {route!r}")
            a, b = _city_key(route.origin), _city_key(route.destination)
            # First entry wins when a pair is listed twice
            index.setdefault((a, b), float(route.distance_km))
            index.setdefault((b, a), float(route.distance_km))
        object.__setattr__(self, "routes", tuple(self.routes))
        object.__setattr__(self, "_index", index)

    def find_distance(self, origin: str, destination: str) -> float | None:
        """
        Return the distance in km between *origin* and *destination*.

        Returns None when either name is blank or the pair is not in the table.
        """
        if not origin or not destination:
            return None
        a, b = _city_key(origin), _city_key(destination)
        if not a or not b:
            return None
        distance = self._index.get((a, b))
        if distance is None:
            logger.debug("No route between %r and %r", origin, destination)
        return distance

    def all_cities(self) -> list[str]:
        """Return every city appearing in the table, unique and sorted."""
        cities = {r.origin for r in self.routes} | {r.destination for r in self.routes}
        return sorted(cities)

    def __len__(self) -> int:
        return len(self.routes)


# ─────────────────────────────────────────────────────────────
# Built-in routes (approximate road distance, km)
# ─────────────────────────────────────────────────────────────
DEFAULT_ROUTES: tuple[Route, ...] = (
    Route("São Paulo, SP", "Rio de Janeiro, RJ", 430),
    Route("São Paulo, SP", "Brasília, DF", 1015),
    Route("Rio de Janeiro, RJ", "Brasília, DF", 1148),
    Route("São Paulo, SP", "Campinas, SP", 95),
    Route("Rio de Janeiro, RJ", "Niterói, RJ", 13),
    Route("Belo Horizonte, MG", "Ouro Preto, MG", 100),
    Route("São Paulo, SP", "Belo Horizonte, MG", 586),
    Route("Rio de Janeiro, RJ", "Belo Horizonte, MG", 434),
    Route("Brasília, DF", "Belo Horizonte, MG", 716),
    Route("São Paulo, SP", "Salvador, BA", 1962),
    Route("Rio de Janeiro, RJ", "Salvador, BA", 1649),
    Route("Brasília, DF", "Salvador, BA", 1446),
    Route("Belo Horizonte, MG", "Salvador, BA", 1372),
    Route("São Paulo, SP", "Recife, PE", 2653),
    Route("Rio de Janeiro, RJ", "Recife, PE", 2340),
    Route("Brasília, DF", "Recife, PE", 2208),
    Route("Salvador, BA", "Recife, PE", 827),
    Route("São Paulo, SP", "Fortaleza, CE", 3120),
    Route("Rio de Janeiro, RJ", "Fortaleza, CE", 2807),
    Route("Brasília, DF", "Fortaleza, CE", 2200),
    Route("Recife, PE", "Fortaleza, CE", 800),
    Route("São Paulo, SP", "Manaus, AM", 3953),
    Route("Rio de Janeiro, RJ", "Manaus, AM", 3640),
    Route("Brasília, DF", "Manaus, AM", 1933),
    Route("São Paulo, SP", "Porto Alegre, RS", 1111),
    Route("Rio de Janeiro, RJ", "Porto Alegre, RS", 1554),
    Route("Brasília, DF", "Porto Alegre, RS", 2020),
    Route("Porto Alegre, RS", "Curitiba, PR", 540),
    Route("São Paulo, SP", "Curitiba, PR", 408),
    Route("Rio de Janeiro, RJ", "Curitiba, PR", 851),
    Route("Belo Horizonte, MG", "Curitiba, PR", 1004),
    Route("Brasília, DF", "Curitiba, PR", 1367),
    Route("São Paulo, SP", "Florianópolis, SC", 704),
    Route("Rio de Janeiro, RJ", "Florianópolis, SC", 1147),
    Route("Porto Alegre, RS", "Florianópolis, SC", 476),
    Route("Curitiba, PR", "Florianópolis, SC", 300),
    Route("São Paulo, SP", "Goiânia, GO", 926),
    Route("Rio de Janeiro, RJ", "Goiânia, GO", 1339),
    Route("Brasília, DF", "Goiânia, GO", 209),
    Route("Belo Horizonte, MG", "Goiânia, GO", 906),
)

DEFAULT_ROUTE_TABLE = RouteTable(DEFAULT_ROUTES)


def find_distance(
    origin: str,
    destination: str,
    routes: RouteTable | None = None,
) -> float | None:
    """Look up a distance in *routes* (built-in table when omitted)."""
    table = routes if routes is not None else DEFAULT_ROUTE_TABLE
    return table.find_distance(origin, destination)


def all_cities(routes: RouteTable | None = None) -> list[str]:
    """List every known city in *routes* (built-in table when omitted)."""
    table = routes if routes is not None else DEFAULT_ROUTE_TABLE
    return table.all_cities()
