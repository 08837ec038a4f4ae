"""
GridMap: a W x H integer raster with optional toroidal wraparound.

Cells are addressed as (x, y) and stored as ``matrix[x][y]``, the layout of
the host's board arrays. All searches are iterative BFS with 4-neighbor
expansion in ``DIRECTIONS`` order; in cyclic mode each axis wraps modulo its
size, otherwise out-of-range neighbors are dropped.
"""

from __future__ import annotations

import operator
from collections import deque
from typing import Iterable, Mapping, Optional, Sequence

import numpy as np

from maze_agents.common.geometry import DIRECTIONS, MOVE_DELTAS

from .distance_field import UNREACHED, DistanceField
from .errors import NoRoute, OutOfBounds, ShapeError, Unreachable


class GridMap:
    """Owns the cell matrix and the cyclic topology flag."""

    def __init__(self, width: int, height: int, fill_value: int = 0, *, cyclic: bool = True):
        if width <= 0 or height <= 0:
            raise ShapeError(f"grid dimensions must be positive, got {width}x{height}")
        self._cells = np.full((width, height), fill_value, dtype=np.int64)
        self._cyclic = cyclic

    # === Construction ===

    @classmethod
    def from_matrix(cls, matrix: Sequence[Sequence[int]] | np.ndarray, *, cyclic: bool = True) -> GridMap:
        """Build from a column-major matrix (``matrix[x][y]``), copying it."""
        cells = _as_rectangular(matrix)
        grid = cls(cells.shape[0], cells.shape[1], cyclic=cyclic)
        grid._cells[...] = cells
        return grid

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]] | np.ndarray, *, cyclic: bool = True) -> GridMap:
        """Build from row-major data (``rows[y][x]``), as literals read on screen."""
        return cls.from_matrix(_as_rectangular(rows).T, cyclic=cyclic)

    @classmethod
    def from_layout(cls, lines: Iterable[str], legend: Mapping[str, int], *, cyclic: bool = True) -> GridMap:
        """Decode text rows into cell codes using a character legend.

        Each character maps through ``legend``; an unknown character or a
        ragged row raises ShapeError.
        """
        rows: list[list[int]] = []
        for y, line in enumerate(lines):
            row = []
            for x, char in enumerate(line):
                if char not in legend:
                    raise ShapeError(f"unknown layout character {char!r} at ({x}, {y})")
                row.append(legend[char])
            rows.append(row)
        return cls.from_rows(rows, cyclic=cyclic)

    # === Shape & topology ===

    @property
    def width(self) -> int:
        return self._cells.shape[0]

    @property
    def height(self) -> int:
        return self._cells.shape[1]

    @property
    def shape(self) -> tuple[int, int]:
        return self.width, self.height

    @property
    def cyclic(self) -> bool:
        return self._cyclic

    def set_cyclic(self, cyclic: bool) -> None:
        self._cyclic = bool(cyclic)

    def is_inside(self, pos: tuple[int, int]) -> bool:
        x, y = pos
        return 0 <= x < self.width and 0 <= y < self.height

    # === Cell access ===

    def get_cell(self, pos: tuple[int, int]) -> int:
        x, y = self._require_inside(pos)
        return int(self._cells[x, y])

    def set_cell(self, pos: tuple[int, int], value: int) -> None:
        x, y = self._require_inside(pos)
        self._cells[x, y] = value

    def snapshot(self) -> np.ndarray:
        """Deep copy of the matrix, indexed ``[x, y]``."""
        return self._cells.copy()

    def passable_mask(self, obstacle_value: int) -> np.ndarray:
        return self._cells != obstacle_value

    # === Adjacency ===

    def step(self, pos: tuple[int, int], direction: str) -> Optional[tuple[int, int]]:
        """Cell reached by moving one step, or None when it falls off the grid."""
        dx, dy = MOVE_DELTAS[direction]
        return self._wrap(pos[0] + dx, pos[1] + dy)

    def neighbors(self, pos: tuple[int, int]) -> list[tuple[int, int]]:
        """4-neighbors of ``pos`` in direction order under the active topology."""
        result = []
        for direction in DIRECTIONS:
            nxt = self.step(pos, direction)
            if nxt is not None:
                result.append(nxt)
        return result

    def direction_between(self, origin: tuple[int, int], target: tuple[int, int]) -> Optional[str]:
        """Direction leading from ``origin`` to the adjacent ``target``."""
        for direction in DIRECTIONS:
            if self.step(origin, direction) == tuple(target):
                return direction
        return None

    # === Searches ===

    def flood_fill(self, start: tuple[int, int], new_value: int) -> int:
        """Recolor the 4-connected region sharing ``start``'s value.

        Returns the number of cells changed; 0 if ``start`` is outside the
        grid or already holds ``new_value``.
        """
        if not self.is_inside(start):
            return 0
        sx, sy = start
        old_value = int(self._cells[sx, sy])
        if old_value == new_value:
            return 0

        cells = self._cells.tolist()
        visited = [[False] * self.height for _ in range(self.width)]
        visited[sx][sy] = True
        queue: deque[tuple[int, int]] = deque([(sx, sy)])
        changed = 0

        while queue:
            x, y = queue.popleft()
            cells[x][y] = new_value
            changed += 1
            for nx, ny in self.neighbors((x, y)):
                if visited[nx][ny] or cells[nx][ny] != old_value:
                    continue
                visited[nx][ny] = True
                queue.append((nx, ny))

        self._cells[...] = np.asarray(cells, dtype=np.int64)
        return changed

    def shortest_path(
        self,
        start: tuple[int, int],
        goal: tuple[int, int],
        obstacle_value: int,
        *,
        strict: bool = False,
    ) -> Optional[list[tuple[int, int]]]:
        """BFS path from ``start`` to ``goal`` (both inclusive) avoiding obstacles.

        Returns None when either endpoint is an obstacle or the goal cannot be
        reached. With ``strict=True`` those cases raise Unreachable and
        NoRoute instead.
        """
        start = self._require_inside(start)
        goal = self._require_inside(goal)
        blocked = (self._cells == obstacle_value).tolist()

        if blocked[start[0]][start[1]] or blocked[goal[0]][goal[1]]:
            if strict:
                raise Unreachable(f"endpoint of {start} -> {goal} is an obstacle")
            return None
        if start == goal:
            return [start]

        parents: dict[tuple[int, int], Optional[tuple[int, int]]] = {start: None}
        queue: deque[tuple[int, int]] = deque([start])

        while queue:
            current = queue.popleft()
            for nxt in self.neighbors(current):
                if nxt in parents or blocked[nxt[0]][nxt[1]]:
                    continue
                parents[nxt] = current
                if nxt == goal:
                    return _reconstruct_path(parents, goal)
                queue.append(nxt)

        if strict:
            raise NoRoute(f"no route from {start} to {goal}")
        return None

    def all_distances(self, source: tuple[int, int], obstacle_value: int) -> DistanceField:
        """Distance from ``source`` to every cell.

        An obstacle source yields a field with no zero-distance cell.
        """
        return self.distance_field([source], obstacle_value)

    def distance_field(self, sources: Iterable[tuple[int, int]], obstacle_value: int) -> DistanceField:
        """Multi-source BFS: each cell gets the distance to its nearest source.

        All sources are seeded at distance 0 before expansion, so the cost is
        one pass regardless of how many sources there are. Obstacle sources
        are skipped.
        """
        blocked_mask = self._cells == obstacle_value
        blocked = blocked_mask.tolist()
        dist = [[obstacle_value if blocked[x][y] else UNREACHED for y in range(self.height)] for x in range(self.width)]
        seen = [[False] * self.height for _ in range(self.width)]

        seeded: list[tuple[int, int]] = []
        queue: deque[tuple[int, int]] = deque()
        for source in sources:
            x, y = self._require_inside(source)
            if blocked[x][y] or seen[x][y]:
                continue
            seen[x][y] = True
            dist[x][y] = 0
            seeded.append((x, y))
            queue.append((x, y))

        while queue:
            x, y = queue.popleft()
            next_dist = dist[x][y] + 1
            for nx, ny in self.neighbors((x, y)):
                if seen[nx][ny] or blocked[nx][ny]:
                    continue
                seen[nx][ny] = True
                dist[nx][ny] = next_dist
                queue.append((nx, ny))

        return DistanceField(np.asarray(dist, dtype=np.int64), blocked_mask, obstacle_value, tuple(seeded))

    # === Internals ===

    def _wrap(self, x: int, y: int) -> Optional[tuple[int, int]]:
        if self._cyclic:
            return x % self.width, y % self.height
        if 0 <= x < self.width and 0 <= y < self.height:
            return x, y
        return None

    def _require_inside(self, pos: tuple[int, int]) -> tuple[int, int]:
        x, y = operator.index(pos[0]), operator.index(pos[1])
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise OutOfBounds(pos, self.width, self.height)
        return x, y

    def __repr__(self) -> str:
        return f"GridMap({self.width}x{self.height}, cyclic={self._cyclic})"


def _as_rectangular(matrix: Sequence[Sequence[int]] | np.ndarray) -> np.ndarray:
    """Validate a 2D matrix and return it as an int64 array."""
    if isinstance(matrix, np.ndarray):
        if matrix.ndim != 2 or 0 in matrix.shape:
            raise ShapeError(f"expected a non-empty 2D matrix, got shape {matrix.shape}")
        return matrix.astype(np.int64, copy=True)

    if matrix is None or len(matrix) == 0:
        raise ShapeError("matrix is empty")
    first = matrix[0]
    if first is None or len(first) == 0:
        raise ShapeError("matrix has an empty first row")
    length = len(first)
    for index, row in enumerate(matrix):
        if row is None or len(row) != length:
            raise ShapeError(f"jagged or missing row at index {index}")
    try:
        cells = np.array([list(row) for row in matrix], dtype=np.int64)
    except (TypeError, ValueError) as exc:
        raise ShapeError(f"matrix cells must be integers: {exc}") from exc
    if cells.ndim != 2:
        raise ShapeError(f"expected a 2D matrix, got shape {cells.shape}")
    return cells


def _reconstruct_path(
    parents: dict[tuple[int, int], Optional[tuple[int, int]]], goal: tuple[int, int]
) -> list[tuple[int, int]]:
    path = [goal]
    current = parents[goal]
    while current is not None:
        path.append(current)
        current = parents[current]
    path.reverse()
    return path
