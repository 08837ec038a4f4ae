"""
Unit tests for the Forager SafetyManager - threat field and danger classification.
"""

from __future__ import annotations

from maze_agents.grid import GridMap
from maze_agents.policy.forager.services import SafetyManager
from maze_agents.policy.forager.types import Adversary, PolicyConfig

CROSSING = """
#####
#...#
##.##
#...#
#####
"""

CORRIDOR = """
#######
.......
#######
"""


class TestThreatField:
    def test_vulnerable_adversaries_are_not_threats(self, make_state) -> None:
        grid = GridMap(5, 1, 0, cyclic=False)
        state = make_state(grid, (0, 0), [Adversary((4, 0), vulnerable=True), Adversary((2, 0), vulnerable_ticks=3)])
        assert state.threats is not None
        assert not state.threats.has_source
        assert SafetyManager(PolicyConfig()).threat_distance(state) is None

    def test_nearest_threat_wins(self, make_state) -> None:
        grid = GridMap(9, 1, 0, cyclic=False)
        state = make_state(grid, (4, 0), [Adversary((0, 0)), Adversary((6, 0))])
        assert SafetyManager(PolicyConfig()).threat_distance(state) == 2

    def test_walled_off_threat_is_unreached(self, make_grid, make_state) -> None:
        grid = make_grid(
            """
            ..#..
            ..#..
            """
        )
        state = make_state(grid, (0, 0), [Adversary((4, 1))])
        safety = SafetyManager(PolicyConfig())
        assert safety.threat_distance(state) is None
        assert not safety.is_dangerous(state, (1, 0))
        assert not safety.is_threatened(state)


class TestDanger:
    def test_corridor_detection(self, make_grid, make_state) -> None:
        grid = make_grid(CROSSING)
        state = make_state(grid, (2, 1))
        safety = SafetyManager(PolicyConfig())
        assert safety.is_corridor(state, (2, 2))
        assert not safety.is_corridor(state, (2, 1))

    def test_open_space_uses_open_radius(self, make_state) -> None:
        grid = GridMap(7, 7, 0, cyclic=False)
        state = make_state(grid, (3, 3), [Adversary((0, 0))])
        safety = SafetyManager(PolicyConfig())
        assert safety.is_dangerous(state, (2, 0))
        assert not safety.is_dangerous(state, (3, 0))

    def test_corridor_uses_corridor_radius(self, make_grid, make_state) -> None:
        grid = make_grid(CORRIDOR)
        state = make_state(grid, (6, 1), [Adversary((0, 1))])
        safety = SafetyManager(PolicyConfig())
        assert safety.is_dangerous(state, (3, 1))
        assert not safety.is_dangerous(state, (4, 1))

    def test_radii_are_configurable(self, make_grid, make_state) -> None:
        config = PolicyConfig(danger_radius_corridor=1)
        grid = make_grid(CORRIDOR)
        state = make_state(grid, (6, 1), [Adversary((0, 1))], config)
        safety = SafetyManager(config)
        assert safety.is_dangerous(state, (1, 1))
        assert not safety.is_dangerous(state, (2, 1))

    def test_nothing_is_dangerous_without_threats(self, make_state) -> None:
        grid = GridMap(4, 4, 0, cyclic=False)
        state = make_state(grid, (0, 0))
        safety = SafetyManager(PolicyConfig())
        assert not any(safety.is_dangerous(state, (x, y)) for x in range(4) for y in range(4))
        assert safety.threat_distance(state) is None


class TestThreatened:
    def test_trigger_radius_is_inclusive(self, make_state) -> None:
        grid = GridMap(9, 1, 0, cyclic=False)
        safety = SafetyManager(PolicyConfig())
        assert safety.is_threatened(make_state(grid, (0, 0), [Adversary((4, 0))]))
        assert not safety.is_threatened(make_state(grid, (0, 0), [Adversary((5, 0))]))
