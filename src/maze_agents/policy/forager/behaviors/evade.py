"""
Evade behavior for the Forager policy.

When a threat is within the trigger radius, head for the nearest safety
resource.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from maze_agents.policy.forager.behaviors.base import Services
from maze_agents.policy.forager.services import cell_is
from maze_agents.policy.forager.types import Mode

if TYPE_CHECKING:
    from maze_agents.policy.forager.state import AgentState


class EvadeBehavior:
    mode = Mode.EVADE

    def act(self, state: AgentState, services: Services) -> Optional[str]:
        if not services.safety.is_threatened(state):
            return None

        assert state.grid is not None
        direction = services.navigator.move_to(state, self.mode, cell_is(state.grid, services.codes.safety_resource))
        if direction is None:
            return None

        state.debug_info.mode = self.mode.value
        state.debug_info.goal = "safety_resource"
        state.debug_info.signal = f"threat_at_{services.safety.threat_distance(state)}"
        return direction
