"""
Unit tests for co2_calculator/routes_data.py
"""
import pytest

from co2_calculator.exceptions import InvalidInputError
from co2_calculator.routes_data import (
    DEFAULT_ROUTE_TABLE,
    DEFAULT_ROUTES,
    Route,
    RouteTable,
    all_cities,
    find_distance,
)


class TestFindDistance:

    def test_known_route(self):
        assert find_distance("São Paulo, SP", "Rio de Janeiro, RJ") == 430

    def test_reverse_direction(self):
        assert find_distance("Rio de Janeiro, RJ", "São Paulo, SP") == 430

    def test_case_and_whitespace_insensitive(self):
        assert find_distance("  são paulo, sp ", "RIO DE JANEIRO, RJ") == 430

    def test_unknown_route_returns_none(self):
        assert find_distance("Campinas, SP", "Manaus, AM") is None

    @pytest.mark.parametrize("origin, destination", [("", "Recife, PE"), ("Recife, PE", "   ")])
    def test_blank_input_returns_none(self, origin, destination):
        assert find_distance(origin, destination) is None

    def test_returns_float(self):
        assert isinstance(find_distance("Curitiba, PR", "Florianópolis, SC"), float)

    def test_injected_table(self):
        routes = RouteTable((Route("Lisboa", "Porto", 313),))
        assert find_distance("porto", "lisboa", routes) == 313
        assert find_distance("São Paulo, SP", "Rio de Janeiro, RJ", routes) is None


class TestAllCities:

    def test_unique_and_sorted(self):
        cities = all_cities()
        assert cities == sorted(set(cities))

    def test_contains_both_endpoints(self):
        cities = all_cities()
        assert "São Paulo, SP" in cities
        assert "Goiânia, GO" in cities
        assert "Niterói, RJ" in cities

    def test_city_count(self):
        assert len(all_cities()) == 15


class TestRouteTable:

    def test_default_table_size(self):
        assert len(DEFAULT_ROUTE_TABLE) == len(DEFAULT_ROUTES) == 40

    def test_first_duplicate_wins(self):
        routes = RouteTable((Route("A", "B", 10), Route("B", "A", 99)))
        assert routes.find_distance("a", "b") == 10

    @pytest.mark.parametrize("route", [Route("", "B", 10), Route("A", "B", -1), Route("A", "B", float("nan"))])
    def test_invalid_route_rejected(self, route):
        with pytest.raises(InvalidInputError):
            RouteTable((route,))
