"""Services for the Forager policy."""

from .navigator import Navigator, cell_is, position_in
from .safety import SafetyManager

__all__ = ["Navigator", "SafetyManager", "cell_is", "position_in"]
