"""
Pursue behavior for the Forager policy.

While any adversary is vulnerable, close in on the nearest one without
crossing dangerous cells.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from maze_agents.policy.forager.behaviors.base import Services
from maze_agents.policy.forager.services import position_in
from maze_agents.policy.forager.types import DEBUG, Mode

if TYPE_CHECKING:
    from maze_agents.policy.forager.state import AgentState


class PursueBehavior:
    """Chase the nearest reachable vulnerable adversary."""

    mode = Mode.PURSUE

    def act(self, state: AgentState, services: Services) -> Optional[str]:
        targets = [a.position for a in state.vulnerable_adversaries()]
        if not targets:
            return None

        direction = services.navigator.move_to(state, self.mode, position_in(targets))
        if direction is None:
            if DEBUG:
                print(f"[forager] PURSUE: {len(targets)} vulnerable, none reachable safely")
            return None

        state.debug_info.mode = self.mode.value
        state.debug_info.goal = "vulnerable_adversary"
        return direction
