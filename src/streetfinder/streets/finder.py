"""
Street search orchestration.

Flow:
1) Convert the origin to projected coordinates and build the square search window.
2) Fetch every road segment fragment in that window (all result pages).
3) Aggregate fragments per street and rank by distance.

Clients are injectable so tests and the API can run offline.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Protocol

from streetfinder.config.settings import Settings, get_settings
from streetfinder.core.errors import ContractViolation
from streetfinder.core.geo import GeoPoint as CoreGeoPoint
from streetfinder.core.geometry import BoundingBox, build_bounding_box
from streetfinder.core.transform import GeoTransform, ProjTransform
from streetfinder.domain.models import GeoPoint, StreetQuery, StreetResult, StreetSearchResult
from streetfinder.ingestion.fragments import PolylineFragment
from streetfinder.ingestion.wfs_client import WfsClient
from streetfinder.streets.aggregate import aggregate_streets

logger = logging.getLogger(__name__)


class FragmentSource(Protocol):
    def get_fragments(self, bbox: BoundingBox) -> list[PolylineFragment]: ...


def _check_radius(radius_m: int, settings: Settings) -> None:
    if radius_m <= 0:
        raise ContractViolation(f"radius_m must be positive, got {radius_m}")
    if radius_m > settings.search.max_radius_m:
        raise ContractViolation(
            f"radius_m must not exceed {settings.search.max_radius_m}, got {radius_m}"
        )


def find_nearby_streets(
    origin: GeoPoint | CoreGeoPoint,
    radius_m: int,
    *,
    settings: Settings | None = None,
    wfs_client: FragmentSource | None = None,
    transform: GeoTransform | None = None,
) -> list[StreetResult]:
    """Return the streets within `radius_m` (square window) of `origin`, nearest first.

    Raises:
        ContractViolation: If `radius_m` is not positive or exceeds `search.max_radius_m`.
        ValidationError: If any fetched road segment is malformed.
        TransportError, ParseError: If any result page cannot be fetched or read.
    """
    settings = settings or get_settings()
    _check_radius(radius_m, settings)
    wfs_client = wfs_client or WfsClient(settings)
    transform = transform or ProjTransform.from_settings(settings.projection)

    here = transform.to_projected(CoreGeoPoint(lat=origin.lat, lon=origin.lon))
    bbox = build_bounding_box(here, radius_m)
    logger.debug("Searching streets around (%.2f, %.2f) within %sm.", here.x, here.y, radius_m)

    fragments = wfs_client.get_fragments(bbox)
    return aggregate_streets(fragments, here, transform)


def find_streets(
    query: StreetQuery,
    *,
    settings: Settings | None = None,
    wfs_client: FragmentSource | None = None,
    transform: GeoTransform | None = None,
) -> StreetSearchResult:
    """Run `find_nearby_streets` for a validated query and wrap the response envelope."""
    settings = settings or get_settings()
    results = find_nearby_streets(
        query.origin,
        query.radius_m,
        settings=settings,
        wfs_client=wfs_client,
        transform=transform,
    )
    return StreetSearchResult(
        generated_at=datetime.now(timezone.utc),
        query=query,
        results=results,
        meta={"street_count": len(results), "source": settings.wfs.type_name},
    )
