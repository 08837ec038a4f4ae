"""
Forager Policy - per-tick decision making.

ForagerPolicy rebuilds the threat field from the host snapshot every tick and
walks the behaviors in priority order, returning the first direction one of
them commits to.
"""

from __future__ import annotations

import operator
import random
from typing import Iterable, Optional, Sequence, Union

import numpy as np

from maze_agents.common.geometry import DIRECTIONS
from maze_agents.grid import GridMap, OutOfBounds

from .behaviors import (
    Behavior,
    EscapeBehavior,
    EvadeBehavior,
    ForageBehavior,
    PursueBehavior,
    Services,
    WanderBehavior,
    legal_moves,
)
from .services import Navigator, SafetyManager
from .state import AgentState
from .types import DEBUG, Adversary, CellCodes, DebugInfo, PolicyConfig

GridInput = Union[GridMap, Sequence[Sequence[int]], np.ndarray]


class ForagerPolicy:
    """Single-agent policy: grid snapshot + position + adversaries -> direction."""

    # Tried in this order every tick; WanderBehavior always answers
    BEHAVIORS: tuple[type[Behavior], ...] = (
        PursueBehavior,
        EvadeBehavior,
        ForageBehavior,
        EscapeBehavior,
        WanderBehavior,
    )

    def __init__(
        self,
        codes: Optional[CellCodes] = None,
        config: Optional[PolicyConfig] = None,
        *,
        debug: bool = False,
        rng: Optional[random.Random] = None,
    ):
        self._codes = codes or CellCodes()
        self._config = config or PolicyConfig()
        self._debug = debug

        # Track previous debug output to avoid duplicate prints
        self._prev_debug_output: Optional[str] = None

        safety = SafetyManager(self._config)
        self._navigator = Navigator(self._config, safety)
        self._services = Services(
            navigator=self._navigator,
            safety=safety,
            codes=self._codes,
            config=self._config,
            rng=rng or random.Random(),
        )
        self._behaviors: list[Behavior] = [behavior_class() for behavior_class in self.BEHAVIORS]
        self._state = self.initial_agent_state()

    @property
    def codes(self) -> CellCodes:
        return self._codes

    @property
    def config(self) -> PolicyConfig:
        return self._config

    @property
    def state(self) -> AgentState:
        return self._state

    def initial_agent_state(self) -> AgentState:
        return AgentState()

    def reset(self) -> None:
        """Forget cross-tick state (cached path, step counter)."""
        self._state = self.initial_agent_state()
        self._prev_debug_output = None

    def step(self, grid: GridInput, position: tuple[int, int], adversaries: Iterable[Adversary] = ()) -> str:
        """Decide one tick using the policy's own state."""
        direction, self._state = self.step_with_state(grid, position, adversaries, self._state)
        return direction

    def step_with_state(
        self,
        grid: GridInput,
        position: tuple[int, int],
        adversaries: Iterable[Adversary],
        state: AgentState,
    ) -> tuple[str, AgentState]:
        """Process one tick and return the direction with the updated state.

        Raises OutOfBounds when the agent or an adversary is reported outside
        the grid and TypeError for non-integer coordinates; every other
        outcome yields a direction.
        """
        grid_map = grid if isinstance(grid, GridMap) else GridMap.from_matrix(grid, cyclic=self._config.cyclic)
        adversary_list = list(adversaries)
        if len(position) != 2:
            raise TypeError(f"agent position must be an (x, y) pair, got {position!r}")
        position = (operator.index(position[0]), operator.index(position[1]))

        if not grid_map.is_inside(position):
            raise OutOfBounds(position, grid_map.width, grid_map.height)
        for adversary in adversary_list:
            if not grid_map.is_inside(adversary.position):
                raise OutOfBounds(adversary.position, grid_map.width, grid_map.height)

        state.step += 1
        state.pos = position
        state.grid = grid_map
        state.adversaries = adversary_list
        state.passable = grid_map.passable_mask(self._codes.obstacle).tolist()
        state.threats = self._services.safety.threat_field(grid_map, adversary_list, self._codes.obstacle)
        state.debug_info = DebugInfo()

        self._navigator.sync_cache(state)

        direction = self._decide(state)

        if self._debug:
            self._print_debug_if_changed(state, direction)
        elif DEBUG:
            print(f"[forager] Step {state.step}: pos={state.pos}, mode={state.debug_info.mode}, move={direction}")
        return direction, state

    def _decide(self, state: AgentState) -> str:
        for behavior in self._behaviors:
            direction = behavior.act(state, self._services)
            if direction is None:
                continue
            if state.nav.cached_path_mode is not None and state.nav.cached_path_mode != behavior.mode:
                state.nav.clear_cache()
            return self._ensure_legal(state, direction)
        # WanderBehavior always answers, so this only guards a custom BEHAVIORS tuple
        state.nav.clear_cache()
        return self._services.rng.choice(DIRECTIONS)

    def _ensure_legal(self, state: AgentState, direction: str) -> str:
        """Swap an illegal direction for the first legal one, if any exists."""
        assert state.grid is not None
        target = state.grid.step(state.pos, direction)
        if target is not None and state.is_passable(target):
            return direction
        moves = legal_moves(state)
        if not moves:
            return direction
        state.debug_info.signal = "legalized_move"
        state.nav.clear_cache()
        return moves[0][0]

    def _print_debug_if_changed(self, state: AgentState, direction: str) -> None:
        """Print debug info only if it changed from the previous step."""
        debug_output = state.debug_info.format(direction)
        if debug_output == self._prev_debug_output:
            return
        pos_str = f"[{state.x},{state.y}]"
        dest = state.debug_info.target_pos
        dest_str = f"[{dest[0]},{dest[1]}]" if dest else "[-,-]"
        goal = state.debug_info.goal or "-"
        print(f"[forager][Step {state.step}] [{state.debug_info.mode}] {pos_str}->{dest_str} ({goal}) : {direction}")
        self._prev_debug_output = debug_output
