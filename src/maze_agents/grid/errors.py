"""
Error taxonomy for grid queries.

ShapeError and OutOfBounds are caller mistakes and fail fast.
NoRoute and Unreachable are ordinary search outcomes; most callers see them
as ``None`` results and only ``strict`` queries raise them.
"""

from __future__ import annotations


class GridError(Exception):
    """Base class for grid errors."""


class ShapeError(GridError, ValueError):
    """Matrix or dimensions cannot form a rectangular grid."""


class OutOfBounds(GridError, IndexError):
    """A coordinate lies outside the grid."""

    def __init__(self, position: object, width: int, height: int):
        self.position = position
        self.width = width
        self.height = height
        super().__init__(f"position {position!r} is outside a {width}x{height} grid")


class RouteError(GridError, LookupError):
    """A search finished without producing a route."""


class NoRoute(RouteError):
    """The search was exhausted without reaching the goal."""


class Unreachable(RouteError):
    """The start or goal cell is itself an obstacle."""
