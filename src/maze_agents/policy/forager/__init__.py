"""Forager policy: BFS-driven pursue/evade/forage/escape decisions on a grid."""

from .policy import ForagerPolicy
from .state import AgentState, NavigationState
from .types import Adversary, CellCodes, DebugInfo, Mode, PolicyConfig

__all__ = [
    "ForagerPolicy",
    "AgentState",
    "NavigationState",
    "Adversary",
    "CellCodes",
    "DebugInfo",
    "Mode",
    "PolicyConfig",
]
