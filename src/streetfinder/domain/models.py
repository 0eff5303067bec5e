"""
Domain models (Pydantic).

These types represent the stable "contract" between layers:
- API/CLI inputs (`StreetQuery`)
- per-street output (`StreetResult`)
- the full response envelope (`StreetSearchResult`)

Geometry internals (`ProjectedPoint`, `PolylineFragment`) stay plain dataclasses;
only what crosses the CLI/API boundary is modeled here.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from streetfinder.ingestion.fragments import StreetIdentity


class GeoPoint(BaseModel):
    """A geographic point in decimal degrees."""

    lat: float = Field(..., ge=-90, le=90)
    lon: float = Field(..., ge=-180, le=180)


class StreetQuery(BaseModel):
    """End-user request: where to look and how far."""

    origin: GeoPoint
    radius_m: int = Field(..., ge=1)


class StreetResult(BaseModel):
    """One street with its nearest point to the query origin."""

    street_name: str
    place_name: str
    municipality_name: str
    location: GeoPoint
    distance_m: int = Field(..., ge=0)

    @property
    def identity(self) -> StreetIdentity:
        return StreetIdentity(self.street_name, self.place_name, self.municipality_name)


class StreetSearchResult(BaseModel):
    """Streets ordered by distance plus the original query."""

    generated_at: datetime
    query: StreetQuery
    results: list[StreetResult]
    meta: dict[str, Any] = Field(default_factory=dict)
