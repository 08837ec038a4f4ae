"""Grid search engine: raster map, BFS searches and distance fields."""

from .distance_field import UNREACHED, DistanceField
from .errors import GridError, NoRoute, OutOfBounds, RouteError, ShapeError, Unreachable
from .grid_map import GridMap

__all__ = [
    "GridMap",
    "DistanceField",
    "UNREACHED",
    "GridError",
    "ShapeError",
    "OutOfBounds",
    "RouteError",
    "NoRoute",
    "Unreachable",
]
