#!/usr/bin/env python3
# global_mercator/projection.py
"""
Forward/inverse spherical Mercator projection and raster-space conversions.

LngLat <-> Meters <-> Pixels -> TMS Tile.
Meters are rounded to 0.1 m, degrees to 6 decimals.
"""

from __future__ import annotations

import math

from global_mercator.geodesy import (
    ORIGIN_SHIFT,
    TILE_SIZE,
    BBox,
    LngLat,
    Meters,
    Pixels,
    Tile,
    resolution,
)
from global_mercator.validation import (
    validate_lng_lat,
    validate_meters,
    validate_pixels,
)

__all__ = [
    "lng_lat_to_meters",
    "meters_to_lng_lat",
    "meters_to_pixels",
    "pixels_to_meters",
    "pixels_to_tile",
    "bbox_to_meters",
]


def lng_lat_to_meters(lnglat: LngLat) -> Meters:
    """
    Project geographic degrees to spherical Mercator meters.

    >>> lng_lat_to_meters((126, 37))
    (14026255.8, 4439106.7)
    """
    lng, lat = validate_lng_lat(lnglat)
    x = lng * ORIGIN_SHIFT / 180.0
    t = math.tan((90 + lat) * math.pi / 360.0)
    # South pole: the projection diverges to -inf.
    y = math.log(t) / (math.pi / 180.0) if t > 0 else -math.inf
    y = y * ORIGIN_SHIFT / 180.0
    return round(x, 1), round(y, 1)


def meters_to_lng_lat(meters: Meters) -> LngLat:
    """Inverse projection from meters to geographic degrees."""
    x, y = validate_meters(meters)
    lng = (x / ORIGIN_SHIFT) * 180.0
    lat = (y / ORIGIN_SHIFT) * 180.0
    try:
        e = math.exp(lat * math.pi / 180.0)
    except OverflowError:
        # Far north of the grid: saturate at the pole.
        e = math.inf
    lat = 180 / math.pi * (2 * math.atan(e) - math.pi / 2.0)
    return round(lng, 6), round(lat, 6)


def meters_to_pixels(meters: Meters, zoom: int, tile_size: int = TILE_SIZE) -> Pixels:
    x, y = validate_meters(meters)
    res = resolution(zoom, tile_size)
    px = (x + ORIGIN_SHIFT) / res
    py = (y + ORIGIN_SHIFT) / res
    return px, py, zoom


def pixels_to_meters(pixels: Pixels, tile_size: int = TILE_SIZE) -> Meters:
    px, py, zoom = validate_pixels(pixels)
    res = resolution(zoom, tile_size)
    mx = px * res - ORIGIN_SHIFT
    my = py * res - ORIGIN_SHIFT
    return round(mx, 1), round(my, 1)


def _pixel_to_index(p: float, tile_size: int) -> int:
    if not p > 0:
        return 0
    return max(math.ceil(p / tile_size) - 1, 0)


def pixels_to_tile(pixels: Pixels, tile_size: int = TILE_SIZE) -> Tile:
    """
    TMS tile containing a pixel.
    Zoom 0 always maps to the single world tile.
    """
    px, py, zoom = validate_pixels(pixels)
    if zoom == 0:
        return 0, 0, 0
    return _pixel_to_index(px, tile_size), _pixel_to_index(py, tile_size), zoom


def bbox_to_meters(bbox: BBox) -> BBox:
    """Project the SW and NE corners of a degree bbox."""
    west, south = lng_lat_to_meters((bbox[0], bbox[1]))
    east, north = lng_lat_to_meters((bbox[2], bbox[3]))
    return west, south, east, north
