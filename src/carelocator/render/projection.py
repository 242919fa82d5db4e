"""Bounds-fitting projection: lat/lng -> surface units (x right, y down)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from carelocator.domain.models import Coordinate

BOUNDS_PADDING_DEG = 0.01


@dataclass(frozen=True)
class GeoBounds:
    """Padded lat/lng box around every point plotted in one render."""

    min_lat: float
    max_lat: float
    min_lng: float
    max_lng: float

    def contains(self, coordinate: Coordinate) -> bool:
        return (
            self.min_lat <= coordinate.latitude <= self.max_lat
            and self.min_lng <= coordinate.longitude <= self.max_lng
        )


def compute_bounds(
    user: Coordinate | None,
    facilities: Iterable[Coordinate],
    *,
    padding_deg: float = BOUNDS_PADDING_DEG,
) -> GeoBounds:
    """Tightest box around the user (if any) and all facilities, grown by `padding_deg`.

    The padding must be positive: it is what keeps a single-point (or collinear)
    set from producing a zero-width box.
    """
    if padding_deg <= 0:
        raise ValueError("padding_deg must be > 0")

    points = [user] if user is not None else []
    points.extend(facilities)
    if not points:
        raise ValueError("compute_bounds needs at least one coordinate")

    lats = [p.latitude for p in points]
    lngs = [p.longitude for p in points]
    return GeoBounds(
        min_lat=min(lats) - padding_deg,
        max_lat=max(lats) + padding_deg,
        min_lng=min(lngs) - padding_deg,
        max_lng=max(lngs) + padding_deg,
    )


@dataclass(frozen=True)
class Projection:
    """Affine map from a `GeoBounds` onto a `width` x `height` surface.

    North is up, so y decreases as latitude increases. Nothing is clamped:
    coordinates outside the bounds land outside the surface.
    """

    bounds: GeoBounds
    width: float
    height: float

    def x(self, lng: float) -> float:
        b = self.bounds
        return (lng - b.min_lng) / (b.max_lng - b.min_lng) * self.width

    def y(self, lat: float) -> float:
        b = self.bounds
        return self.height - (lat - b.min_lat) / (b.max_lat - b.min_lat) * self.height

    def project(self, coordinate: Coordinate) -> tuple[float, float]:
        """Return (x, y) in surface units."""
        return (self.x(coordinate.longitude), self.y(coordinate.latitude))


def make_projection(bounds: GeoBounds, width: float, height: float) -> Projection:
    if bounds.max_lat <= bounds.min_lat or bounds.max_lng <= bounds.min_lng:
        raise ValueError("bounds must have a non-zero extent on both axes")
    return Projection(bounds=bounds, width=float(width), height=float(height))
