"""
co2_calculator – CO2 emission estimator for a single trip.

Computes the emission of a trip for a transport mode, compares it against
every other known mode, estimates the savings against the baseline mode
(car) and prices the carbon credits needed to offset it.
"""
from __future__ import annotations

__version__ = "1.0.0"
