"""
exceptions.py – Typed errors raised by the calculation engine.

Every failure surfaces as a subclass of ``CalculatorError`` so callers can
catch the whole family at once.  Each class also derives from the closest
builtin so ``except ValueError`` style handlers keep working.
"""
from __future__ import annotations


class CalculatorError(Exception):
    """Base class for every error raised by co2_calculator."""


class UnknownModeError(CalculatorError, KeyError):
    """Transport mode is not present in the emission factor table."""

    def __init__(self, mode: object, known_modes: tuple[str, ...] = ()) -> None:
        self.mode = mode
        self.known_modes = tuple(known_modes)
        msg = f"Invalid transport mode: {mode!r}"
        if self.known_modes:
            msg += f" (expected one of: {', '.join(self.known_modes)})"
        super().__init__(msg)

    # KeyError.__str__ wraps the message in quotes
    def __str__(self) -> str:
        return str(self.args[0])


class InvalidDistanceError(CalculatorError, ValueError):
    """Distance is negative, NaN, infinite or not a number."""


class DivisionByZeroError(CalculatorError, ZeroDivisionError):
    """Percentage requested against a zero baseline with a non-zero numerator."""


class InvalidInputError(CalculatorError, ValueError):
    """A value that must be finite and non-negative is not."""


class RouteNotFoundError(CalculatorError, LookupError):
    """No distance was supplied and the route table has no entry for the pair."""

    def __init__(self, origin: str, destination: str) -> None:
        self.origin = origin
        self.destination = destination
        super().__init__(
            f"Route not found: {origin!r} → {destination!r}. "
            "Supply the distance manually."
        )
