"""
API routes.

Endpoints:
- GET  `/health`: liveness probe.
- GET  `/api/facilities`: the configured facility list.
- POST `/api/nearby`: location outcome -> ranked (or catalog-order) facility list.
- GET  `/api/map.png`: schematic map rendered server-side.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from fastapi import APIRouter, HTTPException, Query
from fastapi.responses import Response
from pydantic import BaseModel

from carelocator.catalog.loader import load_catalog
from carelocator.config.settings import get_settings
from carelocator.domain.location import LocationErrorReason, LocationFix, LocationOutcome, LocationUnavailable
from carelocator.domain.models import Coordinate, Facility
from carelocator.ranking.nearby import NearbyResult, find_nearby
from carelocator.ranking.rank import rank_facilities
from carelocator.render.map_renderer import render_map
from carelocator.render.surface import Surface

logger = logging.getLogger(__name__)

router = APIRouter()


class NearbyRequest(BaseModel):
    """Either a user coordinate, or the reason the client could not get one."""

    user: Coordinate | None = None
    reason: LocationErrorReason | None = None


@lru_cache
def _facilities() -> tuple[Facility, ...]:
    return tuple(load_catalog(get_settings()))


def _validation_error(e: ValueError) -> HTTPException:
    return HTTPException(status_code=400, detail={"code": "VALIDATION_ERROR", "message": str(e)})


@router.get("/health")
def health() -> dict:
    return {"status": "ok"}


@router.get("/api/facilities")
def get_facilities() -> dict:
    """Return the facility list in catalog order."""
    try:
        facilities = _facilities()
    except ValueError as e:
        raise _validation_error(e) from e
    return {"facilities": [f.model_dump(mode="json") for f in facilities]}


@router.post("/api/nearby", response_model=NearbyResult)
def post_nearby(request: NearbyRequest) -> NearbyResult:
    """Rank facilities for the user's coordinate, or fall back to catalog order."""
    if request.user is not None:
        outcome: LocationOutcome = LocationFix(coordinate=request.user)
    else:
        outcome = LocationUnavailable(reason=request.reason or LocationErrorReason.POSITION_UNAVAILABLE)
    try:
        return find_nearby(outcome, _facilities())
    except ValueError as e:
        raise _validation_error(e) from e


@router.get("/api/map.png", response_class=Response)
def get_map_png(
    lat: float | None = Query(default=None, ge=-90, le=90),
    lon: float | None = Query(default=None, ge=-180, le=180),
    width: float | None = Query(default=None, gt=0, le=4096),
    height: float | None = Query(default=None, gt=0, le=4096),
    dpr: float | None = Query(default=None, gt=0, le=4),
) -> Response:
    """Render the map PNG; omit lat/lon for the no-location state."""
    if (lat is None) != (lon is None):
        raise HTTPException(
            status_code=400,
            detail={"code": "VALIDATION_ERROR", "message": "lat and lon must be given together"},
        )

    map_settings = get_settings().map
    try:
        user = Coordinate(latitude=lat, longitude=lon) if lat is not None and lon is not None else None
        ranked = rank_facilities(user, _facilities()) if user is not None else []
        surface = Surface(
            width or map_settings.width,
            height or map_settings.height,
            device_pixel_ratio=dpr or map_settings.device_pixel_ratio,
        )
        render_map(
            surface,
            user,
            ranked,
            grid_spacing=map_settings.grid_spacing,
            padding_deg=map_settings.bounds_padding_deg,
        )
    except ValueError as e:
        raise _validation_error(e) from e

    return Response(content=surface.to_png_bytes(), media_type="image/png")
