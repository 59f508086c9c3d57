"""Grid container, bitmap stream parser and distance transform."""

from __future__ import annotations

from bitdist.grid.distance import (
    Point,
    distance_transform,
    get_metric,
    make_distance_transformer,
    manhattan_distance,
)
from bitdist.grid.grid import CoordinateError, Grid
from bitdist.grid.parser import (
    GridContentError,
    GridParseError,
    GridParser,
    StreamTruncatedError,
)

__all__ = [
    "CoordinateError",
    "Grid",
    "GridContentError",
    "GridParseError",
    "GridParser",
    "Point",
    "StreamTruncatedError",
    "distance_transform",
    "get_metric",
    "make_distance_transformer",
    "manhattan_distance",
]
