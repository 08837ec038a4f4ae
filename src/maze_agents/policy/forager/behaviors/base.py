"""
Base behavior protocol and Services dataclass for the Forager policy.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Protocol

from maze_agents.common.geometry import DIRECTIONS
from maze_agents.policy.forager.types import CellCodes, Mode, PolicyConfig

if TYPE_CHECKING:
    from maze_agents.policy.forager.services import Navigator, SafetyManager
    from maze_agents.policy.forager.state import AgentState


@dataclass
class Services:
    """Bundle of shared services passed to behaviors."""

    navigator: Navigator
    safety: SafetyManager
    codes: CellCodes
    config: PolicyConfig
    rng: random.Random


class Behavior(Protocol):
    """Interface for one entry in the priority list."""

    mode: Mode

    def act(self, state: AgentState, services: Services) -> Optional[str]:
        """Return a direction to commit to, or None to fall through."""
        ...


def legal_moves(state: AgentState) -> list[tuple[str, tuple[int, int]]]:
    """(direction, cell) pairs for moves onto passable cells, in direction order."""
    assert state.grid is not None
    moves = []
    for direction in DIRECTIONS:
        nxt = state.grid.step(state.pos, direction)
        if nxt is not None and state.is_passable(nxt):
            moves.append((direction, nxt))
    return moves
