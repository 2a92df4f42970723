#!/usr/bin/env python3
# global_mercator/geodesy.py
"""
Geodesy primitives for Global Mercator.
Holds the spherical Mercator constants and the small helpers every other
conversion builds on.
"""

from __future__ import annotations

import math
from typing import List, Optional, Sequence, Tuple, Union

from global_mercator.errors import MercatorRangeError

__all__ = [
    "TILE_SIZE",
    "EARTH_RADIUS",
    "INITIAL_RESOLUTION",
    "ORIGIN_SHIFT",
    "MAX_LATITUDE",
    "MAX_ZOOM",
    "WORLD_BBOX",
    "LngLat",
    "Meters",
    "Pixels",
    "BBox",
    "Tile",
    "Google",
    "Quadkey",
    "tile_hash",
    "int_range",
    "resolution",
    "bbox_to_center",
    "max_bbox",
    "longitude",
    "latitude",
    "normalize_lng_lat",
]

LngLat = Tuple[float, float]
Meters = Tuple[float, float]
Pixels = Tuple[float, float, int]
BBox = Tuple[float, float, float, float]
Tile = Tuple[int, int, int]
Google = Tuple[int, int, int]
Quadkey = str

# Spherical Mercator (EPSG:3857)
TILE_SIZE = 256
EARTH_RADIUS = 6378137
INITIAL_RESOLUTION = 2 * math.pi * EARTH_RADIUS / TILE_SIZE
ORIGIN_SHIFT = 2 * math.pi * EARTH_RADIUS / 2.0

# 2 * atan(e^pi) * 180 / pi - 90
MAX_LATITUDE = 85.05112877980659
MAX_ZOOM = 30
WORLD_BBOX: BBox = (-180, -MAX_LATITUDE, 180, MAX_LATITUDE)

# Usable latitude band for the normalizing helpers
CLAMP_LATITUDE = 85


def tile_hash(tile: Tile) -> int:
    """
    Unique integer key for a tile.

    >>> tile_hash((312, 480, 4))
    5728
    """
    x, y, z = tile
    return (1 << z) * ((1 << z) + x) + y


def int_range(start: int, stop: Optional[int] = None, step: Optional[int] = None) -> List[int]:
    """
    Integer arithmetic progression.
    With a single argument counts from 0; the step defaults to -1 when
    stop is below start.
    """
    if stop is None:
        stop = start or 0
        start = 0
    if not step:
        step = -1 if stop < start else 1
    return list(range(start, stop, step))


def resolution(zoom: int, tile_size: int = TILE_SIZE) -> float:
    """Meters per pixel at a zoom level."""
    return 2 * math.pi * EARTH_RADIUS / tile_size / math.pow(2, zoom)


def bbox_to_center(bbox: BBox) -> LngLat:
    west, south, east, north = bbox
    lng = (west - east) / 2 + east
    lat = (south - north) / 2 + north
    return round(lng, 6), round(lat, 6)


def _is_bbox(value) -> bool:
    return (
        isinstance(value, (list, tuple))
        and len(value) == 4
        and all(isinstance(v, (int, float)) and not isinstance(v, bool) for v in value)
    )


def max_bbox(bboxes: Union[BBox, Sequence[BBox]]) -> BBox:
    """
    Maximum extent of one or many bboxes.
    A single bbox is returned unchanged.
    """
    if _is_bbox(bboxes):
        return tuple(bboxes)
    if not bboxes or not all(_is_bbox(b) for b in bboxes):
        raise MercatorRangeError("<bbox> must be a bbox or a list of bboxes")

    west, south, east, north = bboxes[0]
    for w, s, e, n in bboxes[1:]:
        west = min(west, w)
        south = min(south, s)
        east = max(east, e)
        north = max(north, n)
    return west, south, east, north


def longitude(lng: float) -> float:
    """Wrap longitude into [-180, 180]. Never fails."""
    if lng > 180 or lng < -180:
        lng = math.fmod(lng, 360)
        if lng > 180:
            lng -= 360
        if lng < -180:
            lng += 360
    # -0.0 -> 0.0
    return lng + 0.0 if lng == 0 else lng


def latitude(lat: float) -> float:
    """Clamp latitude to the usable Mercator band."""
    return max(min(lat, CLAMP_LATITUDE), -CLAMP_LATITUDE)


def normalize_lng_lat(lnglat: LngLat) -> LngLat:
    lng, lat = lnglat
    return longitude(lng), latitude(lat)
