#!/usr/bin/env python3
# global_mercator/validation.py
"""
Input validation for Global Mercator.

Strict policy: validate_* functions raise MercatorRangeError and never remap.
valid_tile() and wrap_tile() are the explicitly-invoked lenient variants;
they never raise for out-of-range x/y.
"""

from __future__ import annotations

from global_mercator.errors import MercatorRangeError
from global_mercator.geodesy import MAX_ZOOM, LngLat, Meters, Pixels, Tile

__all__ = [
    "validate_zoom",
    "validate_tile",
    "validate_lng_lat",
    "validate_pixels",
    "validate_meters",
    "valid_tile",
    "wrap_tile",
]


def validate_zoom(zoom: int) -> int:
    if zoom is None:
        raise MercatorRangeError("<zoom> is required")
    if zoom < 0:
        raise MercatorRangeError("<zoom> cannot be less than 0")
    if zoom > MAX_ZOOM:
        raise MercatorRangeError(f"<zoom> cannot be greater than {MAX_ZOOM}")
    return zoom


def validate_tile(tile: Tile) -> Tile:
    """
    Validate a TMS or Google tile.
    Zoom is checked first, then x/y against [0, 2**zoom).
    """
    tx, ty, zoom = tile
    validate_zoom(zoom)
    if tx is None:
        raise MercatorRangeError("<x> is required")
    if ty is None:
        raise MercatorRangeError("<y> is required")
    if tx < 0:
        raise MercatorRangeError("<x> must not be less than 0")
    if ty < 0:
        raise MercatorRangeError("<y> must not be less than 0")
    max_count = 2 ** zoom
    if tx >= max_count or ty >= max_count:
        raise MercatorRangeError("Illegal parameters for tile")
    return tx, ty, zoom


def validate_lng_lat(lnglat: LngLat) -> LngLat:
    lng, lat = lnglat
    if lat is None:
        raise MercatorRangeError("<lat> is required")
    if lng is None:
        raise MercatorRangeError("<lng> is required")
    if lat < -90 or lat > 90:
        raise MercatorRangeError("LngLat <lat> must be within -90 to 90 degrees")
    if lng < -180 or lng > 180:
        raise MercatorRangeError("LngLat <lng> must be within -180 to 180 degrees")
    return lng, lat


def validate_pixels(pixels: Pixels) -> Pixels:
    # Permissive: pixel bounds are not enforced.
    px, py, zoom = pixels
    return px, py, zoom


def validate_meters(meters: Meters) -> Meters:
    # Permissive: values past +/-ORIGIN_SHIFT are passed through.
    mx, my = meters[0], meters[1]
    return mx, my


def valid_tile(tile: Tile) -> bool:
    """Boolean form of validate_tile()."""
    try:
        validate_tile(tile)
    except MercatorRangeError:
        return False
    return True


def wrap_tile(tile: Tile, wrap_y: bool = False) -> Tile:
    """
    Wrap a tile that crossed the antimeridian back onto the grid.
    x is taken modulo 2**zoom; y only when wrap_y is set.
    """
    tx, ty, zoom = tile
    n = 2 ** validate_zoom(zoom)
    tx %= n
    if wrap_y:
        ty %= n
    return tx, ty, zoom
