#!/usr/bin/env python3
# global_mercator/errors.py
"""Error types raised by Global Mercator."""

from __future__ import annotations


class MercatorRangeError(ValueError):
    """Raised when a coordinate, zoom, tile or quadkey is out of range."""
