"""
Random fallback for the Forager policy.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from maze_agents.common.geometry import DIRECTIONS
from maze_agents.policy.forager.behaviors.base import Services
from maze_agents.policy.forager.types import Mode

if TYPE_CHECKING:
    from maze_agents.policy.forager.state import AgentState


class WanderBehavior:
    """Uniform choice among the four directions; never falls through."""

    mode = Mode.RANDOM

    def act(self, state: AgentState, services: Services) -> str:
        state.debug_info.mode = self.mode.value
        state.debug_info.goal = "no_legal_move"
        return services.rng.choice(DIRECTIONS)
