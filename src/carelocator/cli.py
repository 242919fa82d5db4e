"""
CareLocator CLI entrypoint.

Quick local demos without any frontend:
- `nearby`: print the facility list ranked by distance from a coordinate
- `render`: write the schematic map as a PNG
"""

from __future__ import annotations

import argparse
import json
import logging
from typing import Any

from carelocator.catalog.loader import load_catalog
from carelocator.config.settings import get_settings
from carelocator.core.logging import configure_logging
from carelocator.domain.location import LocationErrorReason, LocationFix, LocationOutcome, LocationUnavailable
from carelocator.domain.models import Coordinate
from carelocator.ranking.nearby import find_nearby
from carelocator.ranking.rank import rank_facilities
from carelocator.render.map_renderer import render_map
from carelocator.render.surface import Surface

logger = logging.getLogger(__name__)


def _user_from_args(args: argparse.Namespace) -> Coordinate | None:
    if args.lat is None and args.lon is None:
        return None
    if args.lat is None or args.lon is None:
        raise ValueError("--lat and --lon must be given together")
    return Coordinate(latitude=float(args.lat), longitude=float(args.lon))


def _cmd_nearby(args: argparse.Namespace) -> int:
    """Handle the `nearby` subcommand."""
    settings = get_settings()
    facilities = load_catalog(settings, path=args.catalog)

    user = _user_from_args(args)
    if user is not None:
        outcome: LocationOutcome = LocationFix(coordinate=user)
    else:
        outcome = LocationUnavailable(reason=LocationErrorReason(args.reason))

    result = find_nearby(outcome, facilities)

    if args.json:
        print(json.dumps(result.model_dump(mode="json"), ensure_ascii=False, indent=2))
        return 0

    if not result.located:
        print(result.message)
        print("Facilities (not sorted by distance):")
        for i, f in enumerate(result.facilities, start=1):
            print(f"{i:>2}. {f.name} ({f.category_label})  {f.phone}")
            print(f"    {f.address}")
        return 0

    if user is not None:
        print(f"Location: {user.latitude:.6f}, {user.longitude:.6f}")
    if not result.facilities:
        print("No emergency facilities found. Please try again or contact 911.")
        return 0
    print("Nearby facilities:")
    for i, f in enumerate(result.facilities, start=1):
        print(f"{i:>2}. {f.name} ({f.category_label})  {f.distance_label}  ~{f.eta_minutes} min  {f.phone}")
        print(f"    {f.address}")
    return 0


def _cmd_render(args: argparse.Namespace) -> int:
    """Handle the `render` subcommand."""
    settings = get_settings()
    map_settings = settings.map
    facilities = load_catalog(settings, path=args.catalog)
    user = _user_from_args(args)

    ranked = rank_facilities(user, facilities) if user is not None else []
    surface = Surface(
        args.width if args.width is not None else map_settings.width,
        args.height if args.height is not None else map_settings.height,
        device_pixel_ratio=args.dpr if args.dpr is not None else map_settings.device_pixel_ratio,
    )
    render_map(
        surface,
        user,
        ranked,
        grid_spacing=map_settings.grid_spacing,
        padding_deg=map_settings.bounds_padding_deg,
    )
    out = surface.save(args.out)
    logger.info("Wrote %dx%d map to %s", *surface.raster_size, out)
    print(str(out))
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CareLocator CLI."""
    parser = argparse.ArgumentParser(prog="carelocator")
    sub = parser.add_subparsers(dest="command", required=True)

    near = sub.add_parser("nearby", help="List facilities ranked by distance from a coordinate.")
    near.add_argument("--lat", type=float, default=None)
    near.add_argument("--lon", type=float, default=None)
    near.add_argument(
        "--reason",
        choices=[r.value for r in LocationErrorReason],
        default=LocationErrorReason.POSITION_UNAVAILABLE.value,
        help="Why no location is available (used when --lat/--lon are omitted).",
    )
    near.add_argument("--catalog", type=str, default=None, help="Facilities JSON (defaults to config/sample).")
    near.add_argument("--json", action="store_true", help="Output machine-readable JSON")
    near.set_defaults(func=_cmd_nearby)

    ren = sub.add_parser("render", help="Render the facility map to a PNG file.")
    ren.add_argument("--out", required=True, help="Output PNG path")
    ren.add_argument("--lat", type=float, default=None, help="Omit with --lon to render the no-location state")
    ren.add_argument("--lon", type=float, default=None)
    ren.add_argument("--width", type=float, default=None, help="Logical width")
    ren.add_argument("--height", type=float, default=None, help="Logical height")
    ren.add_argument("--dpr", type=float, default=None, help="Device pixel ratio")
    ren.add_argument("--catalog", type=str, default=None)
    ren.set_defaults(func=_cmd_render)
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint callable used by `python -m carelocator.cli`."""
    configure_logging()
    parser = build_parser()
    args = parser.parse_args(argv)
    func: Any = getattr(args, "func")
    try:
        return int(func(args))
    except (ValueError, OSError) as e:
        logger.error("%s failed: %s", args.command, e)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
