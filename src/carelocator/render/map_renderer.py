"""
Schematic facility map.

`render_map` redraws the whole surface on every call; nothing is cached between
calls. Two modes:

- no user coordinate: backdrop + a centered "enable location" message. Facilities
  are not drawn because there is no anchor to frame them around.
- located: backdrop, user marker, one connector + marker + distance label per
  facility (in ranked order), then the legend on top.
"""

from __future__ import annotations

import logging
from typing import Sequence

from carelocator.domain.models import Coordinate, RankedFacility
from carelocator.render import styles
from carelocator.render.projection import BOUNDS_PADDING_DEG, Projection, compute_bounds, make_projection
from carelocator.render.surface import Surface

logger = logging.getLogger(__name__)

GRID_SPACING = 20

USER_RADIUS = 8
USER_PULSE_RADIUS = 15
USER_LABEL_OFFSET = 20
FACILITY_RADIUS = 6
DISTANCE_LABEL_OFFSET = 20
CONNECTOR_DASH = (5.0, 5.0)

LEGEND_X = 10
LEGEND_Y = 20
LEGEND_ROW = 20
LEGEND_SWATCH_X = 20
LEGEND_SWATCH_RADIUS = 4
LEGEND_TEXT_X = 30

NO_LOCATION_MESSAGE = "Enable location to see map"

# Layer tags recorded in Surface.operations.
LAYER_BACKGROUND = "background"
LAYER_GRID = "grid"
LAYER_PLACEHOLDER = "placeholder"
LAYER_USER = "user_marker"
LAYER_CONNECTOR = "connector"
LAYER_FACILITY = "facility_marker"
LAYER_GLYPH = "facility_glyph"
LAYER_DISTANCE = "distance_label"
LAYER_LEGEND = "legend"


def render_map(
    surface: Surface,
    user: Coordinate | None,
    facilities: Sequence[RankedFacility],
    *,
    grid_spacing: float = GRID_SPACING,
    padding_deg: float = BOUNDS_PADDING_DEG,
) -> None:
    """Draw the map for `user` and `facilities` onto `surface`."""
    surface.reset()
    _draw_backdrop(surface, grid_spacing)

    if user is None:
        logger.debug("Rendering no-location state (%d facilities suppressed)", len(facilities))
        surface.text(
            surface.width / 2,
            surface.height / 2,
            NO_LOCATION_MESSAGE,
            styles.PLACEHOLDER_TEXT,
            layer=LAYER_PLACEHOLDER,
            size=16,
        )
        return

    bounds = compute_bounds(user, [f.coordinate for f in facilities], padding_deg=padding_deg)
    projection = make_projection(bounds, surface.width, surface.height)
    logger.debug("Rendering %d facilities within %s", len(facilities), bounds)

    user_xy = projection.project(user)
    _draw_user(surface, user_xy)
    for facility in facilities:
        _draw_facility(surface, projection, user_xy, facility)
    _draw_legend(surface)


def _draw_backdrop(surface: Surface, spacing: float) -> None:
    if spacing <= 0:
        raise ValueError("grid_spacing must be > 0")
    w, h = surface.width, surface.height
    surface.fill_rect(0, 0, w, h, styles.BACKGROUND, layer=LAYER_BACKGROUND)

    x = 0.0
    while x < w:
        surface.line(x, 0, x, h, styles.GRID, layer=LAYER_GRID)
        x += spacing
    y = 0.0
    while y < h:
        surface.line(0, y, w, y, styles.GRID, layer=LAYER_GRID)
        y += spacing


def _draw_user(surface: Surface, xy: tuple[float, float]) -> None:
    x, y = xy
    surface.fill_circle(x, y, USER_RADIUS, styles.USER_MARKER, layer=LAYER_USER)
    surface.stroke_circle(x, y, USER_PULSE_RADIUS, styles.USER_MARKER, layer=LAYER_USER, width=2)
    surface.text(x, y - USER_LABEL_OFFSET, "You", styles.TEXT, layer=LAYER_USER, size=12, bold=True)


def _draw_facility(
    surface: Surface,
    projection: Projection,
    user_xy: tuple[float, float],
    facility: RankedFacility,
) -> None:
    style = styles.get_style(facility.category)
    x, y = projection.project(facility.coordinate)

    surface.line(
        user_xy[0],
        user_xy[1],
        x,
        y,
        style.color,
        layer=LAYER_CONNECTOR,
        width=2,
        alpha=styles.CONNECTOR_ALPHA,
        dash=CONNECTOR_DASH,
    )
    surface.fill_circle(x, y, FACILITY_RADIUS, style.color, layer=LAYER_FACILITY)
    surface.text(x, y + 3, style.glyph, styles.GLYPH, layer=LAYER_GLYPH, size=8, bold=True)
    surface.text(
        x,
        y + DISTANCE_LABEL_OFFSET,
        f"{facility.distance:.1f}mi",
        styles.TEXT,
        layer=LAYER_DISTANCE,
        size=10,
    )


def _draw_legend(surface: Surface) -> None:
    surface.text(LEGEND_X, LEGEND_Y, "Legend:", styles.TEXT, layer=LAYER_LEGEND, size=12, align="left")
    for row, style in enumerate(styles.CATEGORY_STYLES.values(), start=1):
        row_y = LEGEND_Y + row * LEGEND_ROW
        surface.fill_circle(LEGEND_SWATCH_X, row_y, LEGEND_SWATCH_RADIUS, style.color, layer=LAYER_LEGEND)
        surface.text(LEGEND_TEXT_X, row_y + 4, style.label, styles.TEXT, layer=LAYER_LEGEND, size=12, align="left")
