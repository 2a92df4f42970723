#!/usr/bin/env python3
# global_mercator/grid.py
"""
Bounding-box tile enumerator.

grid() and grid_bulk() are single-pass generators: callers can stop early
without paying for the full enumeration, which reaches 2**60 tiles at high
zoom. grid_count() gives the cardinality without iterating.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, List

from global_mercator.errors import MercatorRangeError
from global_mercator.geodesy import BBox, Tile
from global_mercator.tiles import lng_lat_to_tile
from global_mercator.validation import validate_zoom

__all__ = ["GridLevel", "grid_levels", "grid", "grid_bulk", "grid_count"]

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class GridLevel:
    """Tile columns and rows covering a bbox at one zoom."""
    columns: range
    rows: range
    zoom: int

    @property
    def count(self) -> int:
        return len(self.columns) * len(self.rows)


def grid_levels(bbox: BBox, min_zoom: int, max_zoom: int) -> List[GridLevel]:
    """One GridLevel per zoom in [min_zoom, max_zoom]."""
    min_zoom = validate_zoom(min_zoom)
    max_zoom = validate_zoom(max_zoom)
    west, south, east, north = bbox
    levels: List[GridLevel] = []
    for zoom in range(min_zoom, max_zoom + 1):
        t1 = lng_lat_to_tile((west, south), zoom)
        t2 = lng_lat_to_tile((east, north), zoom)
        # Corner order is not trusted.
        columns = range(min(t1[0], t2[0]), max(t1[0], t2[0]) + 1)
        rows = range(min(t1[1], t2[1]), max(t1[1], t2[1]) + 1)
        log.debug("grid level z=%d columns=%r rows=%r", zoom, columns, rows)
        levels.append(GridLevel(columns, rows, zoom))
    return levels


def grid(bbox: BBox, min_zoom: int, max_zoom: int) -> Iterator[Tile]:
    """Yield every TMS tile covering bbox, row-major within each zoom."""
    for level in grid_levels(bbox, min_zoom, max_zoom):
        for row in level.rows:
            for column in level.columns:
                yield column, row, level.zoom


def grid_bulk(bbox: BBox, min_zoom: int, max_zoom: int, size: int) -> Iterator[List[Tile]]:
    """
    Batch grid() into lists of at most `size` tiles.
    Only the last batch may be shorter; no empty batch is yielded.
    """
    if size < 1:
        raise MercatorRangeError("<size> must be at least 1")

    batch: List[Tile] = []
    batches = 0
    for tile in grid(bbox, min_zoom, max_zoom):
        batch.append(tile)
        if len(batch) == size:
            batches += 1
            yield batch
            batch = []
    if batch:
        batches += 1
        yield batch
    log.debug("grid_bulk emitted %d batches of up to %d tiles", batches, size)


def grid_count(bbox: BBox, min_zoom: int, max_zoom: int) -> int:
    return sum(level.count for level in grid_levels(bbox, min_zoom, max_zoom))
