"""Shared fixtures for maze-agents tests."""

from __future__ import annotations

import random
from typing import Callable, Iterable, Optional

import pytest

from maze_agents.grid import GridMap
from maze_agents.policy.forager.behaviors import Services
from maze_agents.policy.forager.services import Navigator, SafetyManager
from maze_agents.policy.forager.state import AgentState
from maze_agents.policy.forager.types import Adversary, CellCodes, PolicyConfig

CODES = CellCodes(obstacle=1, resource=2, safety_resource=3, empty=0)

# '#' wall, '.' empty, 'o' ordinary resource, 'O' safety resource
LEGEND = {"#": CODES.obstacle, ".": CODES.empty, "o": CODES.resource, "O": CODES.safety_resource}


def build_grid(layout: str, cyclic: bool = False) -> GridMap:
    lines = [line.strip() for line in layout.strip().splitlines()]
    return GridMap.from_layout(lines, LEGEND, cyclic=cyclic)


def build_state(
    grid: GridMap,
    pos: tuple[int, int],
    adversaries: Iterable[Adversary] = (),
    config: Optional[PolicyConfig] = None,
) -> AgentState:
    """AgentState prepared the way ForagerPolicy prepares it each tick."""
    state = AgentState(pos=pos, grid=grid, adversaries=list(adversaries))
    state.passable = grid.passable_mask(CODES.obstacle).tolist()
    state.threats = SafetyManager(config or PolicyConfig()).threat_field(grid, state.adversaries, CODES.obstacle)
    return state


def build_services(config: Optional[PolicyConfig] = None, seed: int = 0) -> Services:
    config = config or PolicyConfig()
    safety = SafetyManager(config)
    return Services(
        navigator=Navigator(config, safety),
        safety=safety,
        codes=CODES,
        config=config,
        rng=random.Random(seed),
    )


@pytest.fixture
def codes() -> CellCodes:
    return CODES


@pytest.fixture
def make_grid() -> Callable[..., GridMap]:
    return build_grid


@pytest.fixture
def make_state() -> Callable[..., AgentState]:
    return build_state


@pytest.fixture
def make_services() -> Callable[..., Services]:
    return build_services
