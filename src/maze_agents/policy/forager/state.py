"""
State classes for the Forager policy.

AgentState holds the current tick's snapshot; NavigationState carries the
only cross-tick memory, an optional cached path.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from .types import Adversary, DebugInfo, Mode

if TYPE_CHECKING:
    from maze_agents.grid import DistanceField, GridMap


@dataclass
class NavigationState:
    """Navigation-related state managed by the Navigator service."""

    # Route committed on a previous tick, cached_path[0] is where the agent was
    cached_path: Optional[list[tuple[int, int]]] = None
    cached_path_mode: Optional[Mode] = None

    def clear_cache(self) -> None:
        self.cached_path = None
        self.cached_path_mode = None


@dataclass
class AgentState:
    """Everything a behavior needs to decide one tick."""

    step: int = 0
    pos: tuple[int, int] = (0, 0)

    # Per-tick snapshot supplied by the host
    grid: Optional[GridMap] = None
    adversaries: list[Adversary] = field(default_factory=list)

    # Derived each tick
    passable: Optional[list[list[bool]]] = None  # indexed [x][y]
    threats: Optional[DistanceField] = None  # distance to non-vulnerable adversaries

    nav: NavigationState = field(default_factory=NavigationState)
    debug_info: DebugInfo = field(default_factory=DebugInfo)

    @property
    def x(self) -> int:
        return self.pos[0]

    @property
    def y(self) -> int:
        return self.pos[1]

    def vulnerable_adversaries(self) -> list[Adversary]:
        return [a for a in self.adversaries if a.is_vulnerable()]

    def is_passable(self, pos: tuple[int, int]) -> bool:
        assert self.passable is not None
        return self.passable[pos[0]][pos[1]]
