from __future__ import annotations

from dataclasses import dataclass

"""
Geographic point type.

Lat/lon degrees are not Euclidean, so this type carries no distance operations;
convert to `ProjectedPoint` first (see `streetfinder.core.transform`).
"""


@dataclass(frozen=True)
class GeoPoint:
    """A latitude/longitude pair in decimal degrees (WGS84)."""

    lat: float
    lon: float
