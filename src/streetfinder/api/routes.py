"""
API routes.

Endpoints:
- GET `/api/streets`: nearby streets for a coordinate, nearest first.
- GET `/api/settings`: public settings (endpoint, projection, search limits).
"""

from __future__ import annotations

from functools import lru_cache

from fastapi import APIRouter, HTTPException, Query

from streetfinder.config.settings import get_settings
from streetfinder.core.errors import (
    ContractViolation,
    ParseError,
    TransportError,
    ValidationError,
)
from streetfinder.core.transform import ProjTransform
from streetfinder.domain.models import GeoPoint, StreetQuery, StreetSearchResult
from streetfinder.ingestion.wfs_client import WfsClient
from streetfinder.streets.finder import find_streets

router = APIRouter()


@lru_cache
def _clients() -> tuple[WfsClient, ProjTransform]:
    settings = get_settings()
    return WfsClient(settings), ProjTransform.from_settings(settings.projection)


@router.get("/api/streets", response_model=StreetSearchResult)
def get_streets(
    lat: float = Query(..., ge=-90, le=90),
    lon: float = Query(..., ge=-180, le=180),
    radius_m: int | None = Query(default=None, ge=1),
) -> StreetSearchResult:
    """Return named streets within `radius_m` of (`lat`, `lon`)."""
    settings = get_settings()
    wfs_client, transform = _clients()
    query = StreetQuery(
        origin=GeoPoint(lat=lat, lon=lon),
        radius_m=radius_m if radius_m is not None else settings.search.default_radius_m,
    )
    try:
        return find_streets(query, settings=settings, wfs_client=wfs_client, transform=transform)
    except ContractViolation as e:
        raise HTTPException(
            status_code=400,
            detail={"code": "INVALID_QUERY", "message": str(e)},
        ) from e
    except ValidationError as e:
        raise HTTPException(
            status_code=502,
            detail={"code": "UPSTREAM_INVALID_FEATURE", "message": str(e)},
        ) from e
    except (TransportError, ParseError) as e:
        raise HTTPException(
            status_code=502,
            detail={"code": "UPSTREAM_ERROR", "message": str(e)},
        ) from e


@router.get("/api/settings")
def get_public_settings() -> dict:
    """Return settings that are safe to expose to clients."""
    settings = get_settings()
    return {
        "app": {"name": settings.app.name},
        "wfs": {"base_url": settings.wfs.base_url, "type_name": settings.wfs.type_name},
        "projection": settings.projection.model_dump(mode="json"),
        "search": settings.search.model_dump(mode="json"),
    }
