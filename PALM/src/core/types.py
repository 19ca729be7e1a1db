"""Shared core data structures used across extraction and the entry point."""

from __future__ import annotations

from typing import NamedTuple


class Point(NamedTuple):
    """Pair of coordinates. Units depend on which fields populated it."""

    x: float
    y: float
