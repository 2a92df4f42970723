#!/usr/bin/env python3
# global_mercator/mercator.py
"""
Global Mercator public API in one namespace.

Usage:
    from global_mercator import mercator
    mercator.lng_lat_to_google((-75.000057, 44.999888), 13)   # (2389, 2946, 13)
    mercator.tile_to_quadkey((2389, 5245, 13))                # '0302321010121'
    mercator.grid_count((-180, -90, 180, 90), 3, 8)           # 563136
"""

from __future__ import annotations

from global_mercator.errors import MercatorRangeError
from global_mercator.geodesy import (
    EARTH_RADIUS,
    INITIAL_RESOLUTION,
    MAX_LATITUDE,
    MAX_ZOOM,
    ORIGIN_SHIFT,
    TILE_SIZE,
    WORLD_BBOX,
    BBox,
    Google,
    LngLat,
    Meters,
    Pixels,
    Quadkey,
    Tile,
    bbox_to_center,
    int_range,
    latitude,
    longitude,
    max_bbox,
    normalize_lng_lat,
    resolution,
    tile_hash,
)
from global_mercator.grid import GridLevel, grid, grid_bulk, grid_count, grid_levels
from global_mercator.projection import (
    bbox_to_meters,
    lng_lat_to_meters,
    meters_to_lng_lat,
    meters_to_pixels,
    pixels_to_meters,
    pixels_to_tile,
)
from global_mercator.tiles import (
    google_to_bbox,
    google_to_bbox_meters,
    google_to_quadkey,
    google_to_tile,
    lng_lat_to_google,
    lng_lat_to_tile,
    meters_to_tile,
    quadkey_to_google,
    quadkey_to_tile,
    tile_to_bbox,
    tile_to_bbox_meters,
    tile_to_google,
    tile_to_quadkey,
)
from global_mercator.validation import (
    valid_tile,
    validate_lng_lat,
    validate_meters,
    validate_pixels,
    validate_tile,
    validate_zoom,
    wrap_tile,
)

__all__ = [
    # constants and types
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
    "GridLevel",
    "MercatorRangeError",
    # primitives
    "tile_hash",
    "int_range",
    "resolution",
    "bbox_to_center",
    "max_bbox",
    "longitude",
    "latitude",
    "normalize_lng_lat",
    # validation
    "validate_lng_lat",
    "validate_zoom",
    "validate_tile",
    "validate_pixels",
    "validate_meters",
    "valid_tile",
    "wrap_tile",
    # projection / raster
    "lng_lat_to_meters",
    "meters_to_lng_lat",
    "meters_to_pixels",
    "pixels_to_meters",
    "pixels_to_tile",
    "bbox_to_meters",
    # tile schemes
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
    # grid
    "grid_levels",
    "grid",
    "grid_bulk",
    "grid_count",
]
