"""
Geographic <-> projected coordinate transform.

`GeoTransform` is the seam the street search depends on; `ProjTransform` is the
pyproj-backed implementation configured from `settings.projection`.
"""

from __future__ import annotations

from typing import Protocol

from pyproj import Transformer

from streetfinder.config.settings import ProjectionSettings
from streetfinder.core.geo import GeoPoint
from streetfinder.core.geometry import ProjectedPoint


class GeoTransform(Protocol):
    def to_projected(self, point: GeoPoint) -> ProjectedPoint: ...

    def to_geographic(self, point: ProjectedPoint) -> GeoPoint: ...


class ProjTransform:
    """Bidirectional transform between a geographic CRS and a projected CRS."""

    def __init__(self, geographic_crs: str = "EPSG:4326", projected_crs: str = "EPSG:28992"):
        # always_xy keeps (lon, lat) / (x, y) axis order regardless of CRS definitions.
        self._forward = Transformer.from_crs(geographic_crs, projected_crs, always_xy=True)
        self._inverse = Transformer.from_crs(projected_crs, geographic_crs, always_xy=True)

    @classmethod
    def from_settings(cls, settings: ProjectionSettings) -> ProjTransform:
        return cls(settings.geographic_crs, settings.projected_crs)

    def to_projected(self, point: GeoPoint) -> ProjectedPoint:
        x, y = self._forward.transform(point.lon, point.lat)
        return ProjectedPoint(float(x), float(y))

    def to_geographic(self, point: ProjectedPoint) -> GeoPoint:
        lon, lat = self._inverse.transform(point.x, point.y)
        return GeoPoint(lat=float(lat), lon=float(lon))
