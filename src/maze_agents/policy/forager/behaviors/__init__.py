"""Behaviors for the Forager policy."""

from .base import Behavior, Services, legal_moves
from .escape import EscapeBehavior
from .evade import EvadeBehavior
from .forage import ForageBehavior
from .pursue import PursueBehavior
from .wander import WanderBehavior

__all__ = [
    "Behavior",
    "Services",
    "legal_moves",
    "PursueBehavior",
    "EvadeBehavior",
    "ForageBehavior",
    "EscapeBehavior",
    "WanderBehavior",
]
