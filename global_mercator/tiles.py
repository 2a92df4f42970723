#!/usr/bin/env python3
# global_mercator/tiles.py
"""
Tile scheme conversions for Global Mercator.

Handles TMS (south origin) <-> Google/XYZ (north origin) <-> Bing quadkey,
plus the composite conversions from coordinates to tiles and from tiles to
bounding boxes.
"""

from __future__ import annotations

from global_mercator.errors import MercatorRangeError
from global_mercator.geodesy import (
    TILE_SIZE,
    WORLD_BBOX,
    BBox,
    Google,
    LngLat,
    Meters,
    Quadkey,
    Tile,
)
from global_mercator.projection import (
    lng_lat_to_meters,
    meters_to_lng_lat,
    meters_to_pixels,
    pixels_to_meters,
    pixels_to_tile,
)
from global_mercator.validation import (
    validate_lng_lat,
    validate_meters,
    validate_tile,
    validate_zoom,
)

__all__ = [
    "tile_to_google",
    "google_to_tile",
    "tile_to_quadkey",
    "quadkey_to_tile",
    "google_to_quadkey",
    "quadkey_to_google",
    "lng_lat_to_tile",
    "lng_lat_to_google",
    "meters_to_tile",
    "tile_to_bbox_meters",
    "tile_to_bbox",
    "google_to_bbox_meters",
    "google_to_bbox",
]

# quadkey digit -> (x bit, y bit)
_QUADKEY_BITS = {
    "0": (0, 0),
    "1": (1, 0),
    "2": (0, 1),
    "3": (1, 1),
}


def _flip_y(x: int, y: int, zoom: int) -> Tile:
    if zoom == 0:
        return 0, 0, 0
    return x, (2 ** zoom - 1) - y, zoom


def tile_to_google(tile: Tile) -> Google:
    """
    Convert a TMS tile to a Google (XYZ) tile.

    >>> tile_to_google((2389, 5245, 13))
    (2389, 2946, 13)
    """
    return _flip_y(*validate_tile(tile))


def google_to_tile(google: Google) -> Tile:
    """Convert a Google (XYZ) tile to a TMS tile. Inverse of tile_to_google()."""
    return _flip_y(*validate_tile(google))


def tile_to_quadkey(tile: Tile) -> Quadkey:
    """
    Encode a TMS tile as a Bing quadkey.
    Zoom 0 has no quadtree path and yields an empty string.

    >>> tile_to_quadkey((2389, 5245, 13))
    '0302321010121'
    """
    tx, ty, zoom = validate_tile(tile)
    if zoom == 0:
        return ""

    ty = (2 ** zoom - 1) - ty
    digits = []
    for i in range(zoom, 0, -1):
        mask = 1 << (i - 1)
        digit = 0
        if tx & mask:
            digit += 1
        if ty & mask:
            digit += 2
        digits.append(str(digit))
    return "".join(digits)


def quadkey_to_google(quadkey: Quadkey) -> Google:
    """
    Decode a Bing quadkey to a Google (XYZ) tile. Zoom is the key length.

    Raises MercatorRangeError on any digit outside 0-3.
    """
    zoom = validate_zoom(len(quadkey))
    x = y = 0
    for i, char in enumerate(quadkey):
        bits = _QUADKEY_BITS.get(char)
        if bits is None:
            raise MercatorRangeError("Invalid Quadkey digit sequence")
        mask = 1 << (zoom - i - 1)
        if bits[0]:
            x += mask
        if bits[1]:
            y += mask
    return x, y, zoom


def quadkey_to_tile(quadkey: Quadkey) -> Tile:
    return google_to_tile(quadkey_to_google(quadkey))


def google_to_quadkey(google: Google) -> Quadkey:
    return tile_to_quadkey(google_to_tile(google))


def lng_lat_to_tile(lnglat: LngLat, zoom: int) -> Tile:
    zoom = validate_zoom(zoom)
    meters = lng_lat_to_meters(validate_lng_lat(lnglat))
    pixels = meters_to_pixels(meters, zoom)
    return pixels_to_tile(pixels)


def lng_lat_to_google(lnglat: LngLat, zoom: int) -> Google:
    # Zoom 0 is a single world tile; skip the projection entirely.
    if validate_zoom(zoom) == 0:
        return 0, 0, 0
    tile = lng_lat_to_tile(validate_lng_lat(lnglat), zoom)
    return tile_to_google(tile)


def meters_to_tile(meters: Meters, zoom: int) -> Tile:
    if validate_zoom(zoom) == 0:
        return 0, 0, 0
    pixels = meters_to_pixels(validate_meters(meters), zoom)
    return pixels_to_tile(pixels)


def tile_to_bbox_meters(tile: Tile) -> BBox:
    """Meter extent (west, south, east, north) of a TMS tile."""
    tx, ty, zoom = validate_tile(tile)
    mx1, my1 = pixels_to_meters((tx * TILE_SIZE, ty * TILE_SIZE, zoom))
    mx2, my2 = pixels_to_meters(((tx + 1) * TILE_SIZE, (ty + 1) * TILE_SIZE, zoom))
    return mx1, my1, mx2, my2


def tile_to_bbox(tile: Tile) -> BBox:
    """
    Degree extent (west, south, east, north) of a TMS tile.
    Zoom 0 is the whole projected world.
    """
    tx, ty, zoom = validate_tile(tile)
    if zoom == 0:
        return WORLD_BBOX

    mx1, my1, mx2, my2 = tile_to_bbox_meters((tx, ty, zoom))
    west, south = meters_to_lng_lat((mx1, my1))
    east, north = meters_to_lng_lat((mx2, my2))
    return west, south, east, north


def google_to_bbox_meters(google: Google) -> BBox:
    return tile_to_bbox_meters(google_to_tile(google))


def google_to_bbox(google: Google) -> BBox:
    return tile_to_bbox(google_to_tile(google))
