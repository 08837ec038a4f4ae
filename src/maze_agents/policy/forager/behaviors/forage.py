"""
Forage behavior for the Forager policy.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from maze_agents.policy.forager.behaviors.base import Services
from maze_agents.policy.forager.services import cell_is
from maze_agents.policy.forager.types import Mode

if TYPE_CHECKING:
    from maze_agents.policy.forager.state import AgentState


class ForageBehavior:
    """Step toward the nearest ordinary resource along a safe route."""

    mode = Mode.FORAGE

    def act(self, state: AgentState, services: Services) -> Optional[str]:
        assert state.grid is not None
        direction = services.navigator.move_to(state, self.mode, cell_is(state.grid, services.codes.resource))
        if direction is None:
            return None

        state.debug_info.mode = self.mode.value
        state.debug_info.goal = "resource"
        return direction
