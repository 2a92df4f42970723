#!/usr/bin/env python3
# global_mercator/cli.py
"""
Command line entry point for Global Mercator.

Every subcommand maps onto one conversion and prints its result as JSON
(one document per line) or plain text. The interactive shell reuses the
same parser, so `global-mercator tile -75 45 13` and typing `tile -75 45 13`
at the shell prompt behave identically.
"""

from __future__ import annotations

import argparse
import itertools
import json
import logging
import sys
from typing import Any, Iterator, Optional, Sequence

from global_mercator import mercator
from global_mercator.config import Config
from global_mercator.errors import MercatorRangeError
from global_mercator.logging_conf import setup_logging
from global_mercator.version import version_info

log = logging.getLogger(__name__)

SCHEMES = ("tile", "google", "quadkey")

COMMANDS = (
    "meters",
    "lnglat",
    "pixels",
    "tile",
    "convert",
    "bbox",
    "center",
    "hash",
    "grid",
    "shell",
    "config",
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="global-mercator",
        description="Convert between LngLat, Mercator meters, pixels, TMS/Google tiles and quadkeys.",
    )
    parser.add_argument("--version", action="version", version=version_info())
    parser.add_argument("--config", default=None, help="Path to a JSON config file")
    parser.add_argument(
        "--format",
        choices=("json", "text"),
        default=None,
        help="Output format (default: output.format from config)",
    )
    parser.add_argument("--log-level", default=None, help="Override logging.level from config")

    sub = parser.add_subparsers(dest="command", metavar="COMMAND")
    sub.required = True

    p = sub.add_parser("meters", help="LngLat -> Mercator meters")
    p.add_argument("lng", type=float)
    p.add_argument("lat", type=float)

    p = sub.add_parser("lnglat", help="Mercator meters -> LngLat")
    p.add_argument("x", type=float)
    p.add_argument("y", type=float)

    p = sub.add_parser("pixels", help="Mercator meters -> pixels at a zoom")
    p.add_argument("x", type=float)
    p.add_argument("y", type=float)
    p.add_argument("zoom", type=int)

    p = sub.add_parser("tile", help="LngLat -> tile at a zoom")
    p.add_argument("lng", type=float)
    p.add_argument("lat", type=float)
    p.add_argument("zoom", type=int)
    p.add_argument("--scheme", choices=SCHEMES, default="google", help="Tile scheme (default: google)")

    p = sub.add_parser("convert", help="Convert a tile between tile, google and quadkey")
    p.add_argument("source", choices=SCHEMES)
    p.add_argument("values", nargs="+", help="X Y ZOOM, or a quadkey")
    p.add_argument("--to", choices=SCHEMES, required=True, dest="target")

    p = sub.add_parser("bbox", help="Tile -> bounding box")
    p.add_argument("source", choices=SCHEMES)
    p.add_argument("values", nargs="+", help="X Y ZOOM, or a quadkey")
    p.add_argument("--meters", action="store_true", help="Return the bbox in Mercator meters")

    p = sub.add_parser("center", help="Center of a WEST SOUTH EAST NORTH bbox")
    for name in ("west", "south", "east", "north"):
        p.add_argument(name, type=float)

    p = sub.add_parser("hash", help="Unique integer key of a tile")
    p.add_argument("x", type=int)
    p.add_argument("y", type=int)
    p.add_argument("zoom", type=int)

    p = sub.add_parser("grid", help="Enumerate TMS tiles covering a bbox over a zoom range")
    for name in ("west", "south", "east", "north"):
        p.add_argument(name, type=float)
    p.add_argument("min_zoom", type=int)
    p.add_argument("max_zoom", type=int)
    p.add_argument("--count", action="store_true", help="Only print the number of tiles")
    p.add_argument(
        "--bulk",
        type=int,
        nargs="?",
        const=0,
        default=None,
        help="Print tiles in batches (default size: grid.bulk_size from config)",
    )
    p.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Stop after this many tiles (default: grid.limit from config, 0 = no limit)",
    )

    sub.add_parser("shell", help="Interactive conversion shell")

    p = sub.add_parser("config", help="Show or write the config file")
    p.add_argument("action", choices=("show", "init"))
    p.add_argument("--changed", action="store_true", help="With show: only keys that differ from the defaults")

    return parser


# ----------------------------
# Helpers
# ----------------------------

def _tile_ref(parser: argparse.ArgumentParser, source: str, values: Sequence[str]) -> mercator.Tile:
    """Parse SCHEME VALUES into a TMS tile."""
    if source == "quadkey":
        if len(values) != 1:
            parser.error("quadkey takes exactly one value")
        return mercator.quadkey_to_tile(values[0])
    if len(values) != 3:
        parser.error(f"{source} takes X Y ZOOM")
    try:
        x, y, zoom = (int(v) for v in values)
    except ValueError:
        parser.error(f"{source} values must be integers")
    if source == "google":
        return mercator.google_to_tile((x, y, zoom))
    return mercator.validate_tile((x, y, zoom))


def _from_tile(tile: mercator.Tile, target: str) -> Any:
    if target == "google":
        return mercator.tile_to_google(tile)
    if target == "quadkey":
        return mercator.tile_to_quadkey(tile)
    return tile


def _format(value: Any, fmt: str, precision: int) -> str:
    if fmt == "json":
        return json.dumps(value)
    if isinstance(value, (list, tuple)):
        return " ".join(_format(v, fmt, precision) for v in value)
    if isinstance(value, float):
        return f"{value:.{precision}f}"
    return str(value)


def _grid_output(args: argparse.Namespace, cfg: Config) -> Iterator[Any]:
    bbox = (args.west, args.south, args.east, args.north)
    if args.count:
        yield mercator.grid_count(bbox, args.min_zoom, args.max_zoom)
        return

    limit = cfg["grid"]["limit"] if args.limit is None else args.limit
    tiles = mercator.grid(bbox, args.min_zoom, args.max_zoom)
    if limit:
        tiles = itertools.islice(tiles, limit)

    if args.bulk is None:
        yield from tiles
        return

    size = args.bulk or cfg.bulk_size
    if size < 1:
        raise MercatorRangeError("<size> must be at least 1")
    while True:
        batch = list(itertools.islice(tiles, size))
        if not batch:
            return
        yield batch


def _results(args: argparse.Namespace, cfg: Config, parser: argparse.ArgumentParser) -> Iterator[Any]:
    command = args.command
    if command == "meters":
        yield mercator.lng_lat_to_meters((args.lng, args.lat))
    elif command == "lnglat":
        yield mercator.meters_to_lng_lat((args.x, args.y))
    elif command == "pixels":
        yield mercator.meters_to_pixels((args.x, args.y), mercator.validate_zoom(args.zoom))
    elif command == "tile":
        zoom = mercator.validate_zoom(args.zoom)
        if args.scheme == "google":
            yield mercator.lng_lat_to_google((args.lng, args.lat), zoom)
        else:
            yield _from_tile(mercator.lng_lat_to_tile((args.lng, args.lat), zoom), args.scheme)
    elif command == "convert":
        yield _from_tile(_tile_ref(parser, args.source, args.values), args.target)
    elif command == "bbox":
        tile = _tile_ref(parser, args.source, args.values)
        yield mercator.tile_to_bbox_meters(tile) if args.meters else mercator.tile_to_bbox(tile)
    elif command == "center":
        yield mercator.bbox_to_center((args.west, args.south, args.east, args.north))
    elif command == "hash":
        yield mercator.tile_hash((args.x, args.y, args.zoom))
    elif command == "grid":
        yield from _grid_output(args, cfg)
    elif command == "config":
        if args.action == "init":
            cfg.save()
            log.info("Wrote config to %s", cfg.path)
            yield cfg.path
        elif args.changed:
            yield cfg.diff()
        else:
            yield cfg.data
    else:
        parser.error(f"{command} is not available here")


def run_command(args: argparse.Namespace, cfg: Config, parser: argparse.ArgumentParser) -> Iterator[str]:
    """Execute a parsed command and yield formatted output lines."""
    fmt = args.format or cfg.output_format
    precision = cfg["output"]["precision"]
    for value in _results(args, cfg, parser):
        yield _format(value, fmt, precision)


# ----------------------------
# Entry point
# ----------------------------

def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    cfg = Config.load(args.config)
    setup_logging(cfg, args.log_level)

    if args.command == "shell":
        from global_mercator.ui.shell import MercatorShell

        MercatorShell(cfg).run()
        return 0

    try:
        for line in run_command(args, cfg, parser):
            print(line)
    except MercatorRangeError as exc:
        log.debug("%s failed: %s", args.command, exc)
        print(f"error: {exc}", file=sys.stderr)
        return 2
    return 0


__all__ = ["main", "build_parser", "run_command", "COMMANDS"]

if __name__ == "__main__":
    raise SystemExit(main())
