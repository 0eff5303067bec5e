"""
StreetFinder CLI entrypoint.

This CLI is intended for quick local lookups and debugging without the HTTP API.
It delegates all search logic to `streetfinder.streets.finder.find_streets`.
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any

from streetfinder.config.settings import get_settings
from streetfinder.core.errors import StreetFinderError
from streetfinder.core.logging import configure_logging
from streetfinder.domain.models import GeoPoint, StreetQuery
from streetfinder.streets.finder import find_streets


def _cmd_find(args: argparse.Namespace) -> int:
    """Handle the `find` subcommand."""
    settings = get_settings()
    radius_m = int(args.radius) if args.radius is not None else settings.search.default_radius_m
    try:
        query = StreetQuery(origin=GeoPoint(lat=float(args.lat), lon=float(args.lon)), radius_m=radius_m)
        result = find_streets(query, settings=settings)
    except (StreetFinderError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(result.model_dump(mode="json"), ensure_ascii=False, indent=2))
        return 0

    if not result.results:
        print(f"No streets found within {radius_m}m.")
        return 0

    for i, street in enumerate(result.results, start=1):
        print(
            f"{i:>2}. {street.street_name}, {street.place_name} ({street.municipality_name})"
            f"  {street.distance_m}m  @ {street.location.lat:.6f},{street.location.lon:.6f}"
        )
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the StreetFinder CLI."""
    parser = argparse.ArgumentParser(prog="streetfinder")
    sub = parser.add_subparsers(dest="command", required=True)

    find = sub.add_parser("find", help="List named streets near a coordinate, nearest first.")
    find.add_argument("--lat", required=True, type=float)
    find.add_argument("--lon", required=True, type=float)
    find.add_argument(
        "--radius",
        type=int,
        default=None,
        help="Half the side of the square search window in meters (default from config).",
    )
    find.add_argument("--json", action="store_true", help="Output machine-readable JSON")
    find.set_defaults(func=_cmd_find)
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint callable used by `python -m streetfinder.cli`."""
    configure_logging()
    parser = build_parser()
    args = parser.parse_args(argv)
    func: Any = getattr(args, "func")
    return int(func(args))


if __name__ == "__main__":
    raise SystemExit(main())
