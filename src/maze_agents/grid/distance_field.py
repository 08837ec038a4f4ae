"""
DistanceField: immutable BFS distance snapshot over a grid.

Values follow the board convention: -1 for cells no source reached, 0 at a
source, the obstacle code at obstacle cells, otherwise the hop count to the
nearest source.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from .errors import OutOfBounds

UNREACHED = -1


class DistanceField:
    """Read-only distances from a set of sources, indexed as ``[x, y]``."""

    def __init__(
        self,
        values: np.ndarray,
        blocked: np.ndarray,
        obstacle_value: int,
        sources: tuple[tuple[int, int], ...] = (),
    ):
        self._values = np.array(values, dtype=np.int64, copy=True)
        self._blocked = np.array(blocked, dtype=bool, copy=True)
        if self._values.shape != self._blocked.shape:
            raise ValueError("values and blocked mask must share a shape")
        self._values.setflags(write=False)
        self._blocked.setflags(write=False)
        self._obstacle_value = obstacle_value
        self._sources = tuple(sources)

    @property
    def width(self) -> int:
        return self._values.shape[0]

    @property
    def height(self) -> int:
        return self._values.shape[1]

    @property
    def obstacle_value(self) -> int:
        return self._obstacle_value

    @property
    def sources(self) -> tuple[tuple[int, int], ...]:
        """Sources that were seeded at distance 0 (obstacle sources excluded)."""
        return self._sources

    @property
    def has_source(self) -> bool:
        return bool(self._sources)

    def value_at(self, pos: tuple[int, int]) -> int:
        """Raw stored value: -1, the obstacle code, or a distance."""
        x, y = self._check(pos)
        return int(self._values[x, y])

    def distance(self, pos: tuple[int, int]) -> Optional[int]:
        """Hop count to the nearest source, or None if blocked or unreached."""
        x, y = self._check(pos)
        if self._blocked[x, y]:
            return None
        value = int(self._values[x, y])
        if value == UNREACHED:
            return None
        return value

    def is_obstacle(self, pos: tuple[int, int]) -> bool:
        x, y = self._check(pos)
        return bool(self._blocked[x, y])

    def is_reachable(self, pos: tuple[int, int]) -> bool:
        return self.distance(pos) is not None

    def to_array(self) -> np.ndarray:
        """Writable copy of the stored values."""
        return self._values.copy()

    def _check(self, pos: tuple[int, int]) -> tuple[int, int]:
        x, y = pos
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise OutOfBounds(pos, self.width, self.height)
        return x, y

    def __repr__(self) -> str:
        return f"DistanceField({self.width}x{self.height}, sources={list(self._sources)})"
