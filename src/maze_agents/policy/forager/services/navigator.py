"""
Navigator service for the Forager policy.

Guarded BFS toward any cell matching a target predicate, next-step
reconstruction and a per-mode cached path.
"""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING, Callable, Iterable, Optional

from maze_agents.policy.forager.types import DEBUG, Mode, PolicyConfig

if TYPE_CHECKING:
    from maze_agents.grid import GridMap
    from maze_agents.policy.forager.services.safety import SafetyManager
    from maze_agents.policy.forager.state import AgentState

CellPredicate = Callable[[tuple[int, int]], bool]


def cell_is(grid: GridMap, code: int) -> CellPredicate:
    """Target predicate matching cells that hold ``code``."""
    cells = grid.snapshot().tolist()
    return lambda pos: cells[pos[0]][pos[1]] == code


def position_in(positions: Iterable[tuple[int, int]]) -> CellPredicate:
    """Target predicate matching any of ``positions``."""
    targets = frozenset(tuple(p) for p in positions)
    return lambda pos: pos in targets


class Navigator:
    """Handles pathfinding toward predicate targets and path caching."""

    def __init__(self, config: PolicyConfig, safety: SafetyManager):
        self._config = config
        self._safety = safety

    def route(
        self,
        grid: GridMap,
        start: tuple[int, int],
        is_target: CellPredicate,
        passable: list[list[bool]],
        avoid: Optional[CellPredicate] = None,
    ) -> Optional[list[tuple[int, int]]]:
        """Full route from ``start`` to the nearest target, both inclusive.

        Returns ``[start]`` if the start already matches, None if no target is
        reachable through passable, non-avoided cells.
        """
        if is_target(start):
            return [start]
        found = self._search(grid, start, is_target, passable, avoid)
        if found is None:
            return None
        goal, parents = found
        path = [goal]
        while parents[path[-1]] is not None:
            path.append(parents[path[-1]])  # type: ignore[arg-type]
        path.reverse()
        return path

    def next_step(
        self,
        grid: GridMap,
        start: tuple[int, int],
        is_target: CellPredicate,
        passable: list[list[bool]],
        avoid: Optional[CellPredicate] = None,
    ) -> Optional[tuple[int, int]]:
        """First cell on the way to the nearest target (``start`` if already there)."""
        if is_target(start):
            return start
        found = self._search(grid, start, is_target, passable, avoid)
        if found is None:
            return None
        cell, parents = found
        parent = parents[cell]
        while parent is not None and parent != start:
            cell = parent
            parent = parents[cell]
        return cell

    def move_to(self, state: AgentState, mode: Mode, is_target: CellPredicate) -> Optional[str]:
        """Direction of a danger-avoiding step toward the nearest target.

        Reuses the cached path when it is still valid for this mode.
        Returns None when no route exists or the agent already stands on a
        target, so the caller can fall through to the next behavior.
        """
        assert state.grid is not None and state.passable is not None

        def avoid(pos: tuple[int, int]) -> bool:
            return self._safety.is_dangerous(state, pos)

        path = self._get_cached_path(state, mode, is_target, avoid) if self._config.use_path_cache else None

        if path is None:
            path = self.route(state.grid, state.pos, is_target, state.passable, avoid)
            if path is None or len(path) < 2:
                if state.nav.cached_path_mode == mode:
                    state.nav.clear_cache()
                if DEBUG:
                    print(f"[forager] NAV: no {mode.value} route from {state.pos}")
                return None
            state.nav.cached_path = path
            state.nav.cached_path_mode = mode

        state.debug_info.target_pos = path[-1]
        return state.grid.direction_between(path[0], path[1])

    def sync_cache(self, state: AgentState) -> None:
        """Advance the cached path to the agent's actual position, or drop it.

        The path is kept only if the agent now stands on its expected next
        cell; a move the host rejected leaves the agent behind and clears it.
        """
        path = state.nav.cached_path
        if not path:
            return
        if len(path) >= 2 and path[1] == state.pos:
            remaining = path[1:]
            if len(remaining) >= 2:
                state.nav.cached_path = remaining
                return
        elif DEBUG:
            print(f"[forager] NAV: cached path diverged at {state.pos}, expected {path[1:2]}")
        state.nav.clear_cache()

    def _get_cached_path(
        self,
        state: AgentState,
        mode: Mode,
        is_target: CellPredicate,
        avoid: CellPredicate,
    ) -> Optional[list[tuple[int, int]]]:
        """Get the cached path if still valid.

        Invalidates when the mode changed, the path no longer starts at the
        agent, a remaining cell became blocked or dangerous, or the final
        cell stopped being a target.
        """
        path = state.nav.cached_path
        if not path or state.nav.cached_path_mode != mode or path[0] != state.pos or len(path) < 2:
            return None
        assert state.grid is not None
        for cell in path[1:]:
            if not state.grid.is_inside(cell) or not state.is_passable(cell) or avoid(cell):
                return None
        if not is_target(path[-1]):
            return None
        return path

    def _search(
        self,
        grid: GridMap,
        start: tuple[int, int],
        is_target: CellPredicate,
        passable: list[list[bool]],
        avoid: Optional[CellPredicate],
    ) -> Optional[tuple[tuple[int, int], dict[tuple[int, int], Optional[tuple[int, int]]]]]:
        """Guarded BFS; returns the first target dequeued and the parent links."""
        max_explore = grid.width * grid.height * self._config.explore_cap_factor
        explored = 0
        parents: dict[tuple[int, int], Optional[tuple[int, int]]] = {start: None}
        queue: deque[tuple[int, int]] = deque([start])

        while queue:
            current = queue.popleft()
            explored += 1
            if explored > max_explore:
                return None
            if current != start and is_target(current):
                return current, parents
            for nxt in grid.neighbors(current):
                if nxt in parents or not passable[nxt[0]][nxt[1]]:
                    continue
                if avoid is not None and avoid(nxt):
                    continue
                parents[nxt] = current
                queue.append(nxt)

        return None
