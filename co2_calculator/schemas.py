"""
schemas.py – Pydantic models for the inputs accepted by the front ends.

These models only validate the *shape* of a request (non-blank places,
positive distance).  Whether a mode exists is decided by the emission factor
table, so an unknown mode still surfaces as ``UnknownModeError``.
"""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, field_validator


class TripRequest(BaseModel):
    """One trip to estimate, as submitted by the user."""

    origin: str = Field(..., description="Origin city, e.g. 'São Paulo, SP'")
    destination: str = Field(..., description="Destination city, e.g. 'Rio de Janeiro, RJ'")
    mode: str = Field(..., description="Transport mode, e.g. 'car' or 'bus'")
    distance_km: Optional[float] = Field(
        None,
        gt=0,
        allow_inf_nan=False,
        description="Distance in km; looked up from the route table when omitted",
    )

    @field_validator("origin", "destination")
    @classmethod
    def _strip_place(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @field_validator("mode")
    @classmethod
    def _normalise_mode(cls, value: str) -> str:
        value = value.strip().lower()
        if not value:
            raise ValueError("must not be blank")
        return value


class CreditRequest(BaseModel):
    """Emission to offset with carbon credits."""

    emission_kg: float = Field(..., ge=0, allow_inf_nan=False, description="Emission in kg CO₂")
