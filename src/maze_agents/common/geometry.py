from __future__ import annotations

# Positions are (x, y); "north" decreases y.
MOVE_DELTAS: dict[str, tuple[int, int]] = {
    "north": (0, -1),
    "west": (-1, 0),
    "south": (0, 1),
    "east": (1, 0),
}

# Neighbor expansion order. BFS tie-breaking depends on it.
DIRECTIONS = ["north", "west", "south", "east"]


def manhattan(a: tuple[int, int], b: tuple[int, int]) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def is_adjacent(pos1: tuple[int, int], pos2: tuple[int, int]) -> bool:
    dx = abs(pos1[0] - pos2[0])
    dy = abs(pos1[1] - pos2[1])
    return (dx == 1 and dy == 0) or (dx == 0 and dy == 1)
