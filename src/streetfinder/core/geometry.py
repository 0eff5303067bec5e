"""
Planar geometry primitives.

All distance math happens in a projected, meter-based frame (RD New by default).
Geographic lat/lon is converted in and out via `streetfinder.core.transform`.
"""

from __future__ import annotations

from dataclasses import dataclass
from math import sqrt

from streetfinder.core.errors import ContractViolation


@dataclass(frozen=True)
class ProjectedPoint:
    """A point (or vector) in projected coordinates, in meters."""

    x: float
    y: float

    def __add__(self, other: ProjectedPoint) -> ProjectedPoint:
        return ProjectedPoint(self.x + other.x, self.y + other.y)

    def __sub__(self, other: ProjectedPoint) -> ProjectedPoint:
        return ProjectedPoint(self.x - other.x, self.y - other.y)

    def scale(self, factor: float) -> ProjectedPoint:
        return ProjectedPoint(self.x * factor, self.y * factor)

    def dot(self, other: ProjectedPoint) -> float:
        return self.x * other.x + self.y * other.y

    def distance_sq(self, other: ProjectedPoint) -> float:
        dx = self.x - other.x
        dy = self.y - other.y
        return dx * dx + dy * dy

    def distance(self, other: ProjectedPoint) -> float:
        return sqrt(self.distance_sq(other))


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned query window in projected coordinates."""

    lower_left: ProjectedPoint
    upper_right: ProjectedPoint

    def __post_init__(self) -> None:
        if self.lower_left.x > self.upper_right.x or self.lower_left.y > self.upper_right.y:
            raise ContractViolation("bounding box lower_left must not exceed upper_right")

    def as_bbox_param(self) -> str:
        """Return `minx,miny,maxx,maxy` as used by OGC `bbox` query parameters."""
        return ",".join(
            repr(float(v))
            for v in (self.lower_left.x, self.lower_left.y, self.upper_right.x, self.upper_right.y)
        )


def build_bounding_box(center: ProjectedPoint, radius_m: float) -> BoundingBox:
    """Return the square of side `2 * radius_m` centered on `center`."""
    if radius_m <= 0:
        raise ContractViolation(f"radius must be positive, got {radius_m!r}")
    return BoundingBox(
        lower_left=ProjectedPoint(center.x - radius_m, center.y - radius_m),
        upper_right=ProjectedPoint(center.x + radius_m, center.y + radius_m),
    )
