"""
SafetyManager service for the Forager policy.

Builds the threat field and classifies cells as dangerous.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Optional

from maze_agents.policy.forager.types import Adversary, PolicyConfig

if TYPE_CHECKING:
    from maze_agents.grid import DistanceField, GridMap
    from maze_agents.policy.forager.state import AgentState


class SafetyManager:
    """Assesses risk from non-vulnerable adversaries."""

    def __init__(self, config: PolicyConfig):
        self._config = config

    def threat_field(self, grid: GridMap, adversaries: Iterable[Adversary], obstacle_value: int) -> DistanceField:
        """Distance from every cell to the nearest non-vulnerable adversary."""
        sources = [a.position for a in adversaries if not a.is_vulnerable()]
        return grid.distance_field(sources, obstacle_value)

    def is_corridor(self, state: AgentState, pos: tuple[int, int]) -> bool:
        """A corridor cell has at most two passable neighbors."""
        assert state.grid is not None
        open_sides = sum(1 for nb in state.grid.neighbors(pos) if state.is_passable(nb))
        return open_sides <= 2

    def danger_radius(self, state: AgentState, pos: tuple[int, int]) -> int:
        if self.is_corridor(state, pos):
            return self._config.danger_radius_corridor
        return self._config.danger_radius_open

    def is_dangerous(self, state: AgentState, pos: tuple[int, int]) -> bool:
        """Check if a cell is within the danger radius of the nearest threat."""
        dist = self.threat_distance(state, pos)
        if dist is None:
            return False
        return dist <= self.danger_radius(state, pos)

    def threat_distance(self, state: AgentState, pos: Optional[tuple[int, int]] = None) -> Optional[int]:
        """Hop count from ``pos`` (default: the agent) to the nearest threat.

        None when there are no threats or none of them can reach the cell.
        """
        threats = state.threats
        if threats is None or not threats.has_source:
            return None
        return threats.distance(state.pos if pos is None else pos)

    def is_threatened(self, state: AgentState) -> bool:
        dist = self.threat_distance(state)
        return dist is not None and dist <= self._config.threat_trigger_radius
