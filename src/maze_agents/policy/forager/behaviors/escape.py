"""
Escape behavior for the Forager policy.

Pick the legal neighbor farthest from the nearest threat, preferring cells
outside the danger radius.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from maze_agents.policy.forager.behaviors.base import Services, legal_moves
from maze_agents.policy.forager.types import DEBUG, Mode

if TYPE_CHECKING:
    from maze_agents.policy.forager.state import AgentState


class EscapeBehavior:
    """Maximize distance to threats over the immediate moves."""

    mode = Mode.ESCAPE

    def act(self, state: AgentState, services: Services) -> Optional[str]:
        moves = legal_moves(state)
        if not moves:
            return None

        safe_moves = [(d, cell) for d, cell in moves if not services.safety.is_dangerous(state, cell)]
        candidates = safe_moves or moves
        if not safe_moves and DEBUG:
            print(f"[forager] ESCAPE: every move from {state.pos} is dangerous")

        best_direction: Optional[str] = None
        best_score = -1
        best_cell: Optional[tuple[int, int]] = None
        for direction, cell in candidates:
            score = self._score(state, services, cell)
            # Strictly greater keeps the first direction on ties
            if score > best_score:
                best_score = score
                best_direction = direction
                best_cell = cell

        state.debug_info.mode = self.mode.value
        state.debug_info.goal = "away_from_threats"
        state.debug_info.target_pos = best_cell
        if not safe_moves:
            state.debug_info.signal = "all_moves_dangerous"
        return best_direction

    def _score(self, state: AgentState, services: Services, cell: tuple[int, int]) -> int:
        """Threat distance at ``cell``; cells no threat reaches rank as far as possible."""
        assert state.grid is not None
        if state.threats is None or not state.threats.has_source:
            return 0
        dist = services.safety.threat_distance(state, cell)
        if dist is None:
            return state.grid.width * state.grid.height
        return dist
