"""
Street aggregation: fragments -> one result per street.

A street usually arrives as several fragments (one per road segment record). For each
street we find the single point on any of its fragments that lies closest to the query
location, convert that point back to lat/lon and report its planar distance.

Nearest point on a segment uses the clamped scalar projection:

    t = dot(b - a, here - a) / |b - a|^2,  clamped to [0, 1]
    nearest = a + t * (b - a)

All math happens in projected coordinates (meters).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from math import floor, inf
from typing import Iterable, Sequence

from streetfinder.core.errors import ContractViolation
from streetfinder.core.geometry import ProjectedPoint
from streetfinder.core.transform import GeoTransform
from streetfinder.domain.models import GeoPoint, StreetResult
from streetfinder.ingestion.fragments import PolylineFragment, StreetIdentity

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Candidate:
    """A nearest-point candidate and its distance to the query location."""

    point: ProjectedPoint
    distance: float


def nearest_point_on_segment(a: ProjectedPoint, b: ProjectedPoint, here: ProjectedPoint) -> ProjectedPoint:
    """Return the point on segment `a`-`b` closest to `here`."""
    segment = b - a
    length_sq = segment.dot(segment)
    if length_sq == 0.0:
        return a

    t = segment.dot(here - a) / length_sq
    t = max(0.0, min(1.0, t))
    return a + segment.scale(t)


def _closest(candidates: Iterable[ProjectedPoint], here: ProjectedPoint) -> Candidate | None:
    # Strict `<` keeps the first candidate on ties.
    best: Candidate | None = None
    best_distance = inf
    for point in candidates:
        distance = point.distance(here)
        if distance < best_distance:
            best = Candidate(point=point, distance=distance)
            best_distance = distance
    return best


def nearest_point_on_polyline(vertices: Sequence[ProjectedPoint], here: ProjectedPoint) -> Candidate:
    """Return the closest point to `here` on the vertex chain `vertices`."""
    if not vertices:
        raise ContractViolation("polyline has no vertices")
    if len(vertices) == 1:
        return Candidate(point=vertices[0], distance=vertices[0].distance(here))

    best = _closest(
        (nearest_point_on_segment(vertices[i - 1], vertices[i], here) for i in range(1, len(vertices))),
        here,
    )
    if best is None:
        raise ContractViolation("polyline produced no nearest-point candidate")
    return best


def nearest_point_on_polylines(fragments: Sequence[PolylineFragment], here: ProjectedPoint) -> Candidate:
    """Return the closest point to `here` across all `fragments`."""
    best = _closest(
        (nearest_point_on_polyline(fragment.vertices, here).point for fragment in fragments),
        here,
    )
    if best is None:
        raise ContractViolation("street has no fragments")
    return best


def group_fragments(fragments: Iterable[PolylineFragment]) -> dict[StreetIdentity, list[PolylineFragment]]:
    """Group fragments by street identity, preserving first-seen order of streets."""
    groups: dict[StreetIdentity, list[PolylineFragment]] = {}
    for fragment in fragments:
        groups.setdefault(fragment.identity, []).append(fragment)
    return groups


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (12.5 -> 13), unlike `round()`."""
    return int(floor(value + 0.5))


def aggregate_streets(
    fragments: Iterable[PolylineFragment],
    here: ProjectedPoint,
    transform: GeoTransform,
) -> list[StreetResult]:
    """Return one `StreetResult` per distinct street, nearest first.

    Ties on the rounded distance are ordered by street, place and municipality name.
    """
    groups = group_fragments(fragments)

    scored: list[tuple[int, StreetIdentity, StreetResult]] = []
    for identity, members in groups.items():
        nearest = nearest_point_on_polylines(members, here)
        geo = transform.to_geographic(nearest.point)
        distance_m = round_half_up(nearest.distance)
        result = StreetResult(
            street_name=identity.street_name,
            place_name=identity.place_name,
            municipality_name=identity.municipality_name,
            location=GeoPoint(lat=geo.lat, lon=geo.lon),
            distance_m=distance_m,
        )
        scored.append((distance_m, identity, result))

    scored.sort(key=lambda item: (item[0], item[1]))
    logger.info("%s unique streets found.", len(scored))
    return [result for _, _, result in scored]
