"""Grid search engine and scripted maze agents."""

from maze_agents.grid import DistanceField, GridMap
from maze_agents.policy.forager import Adversary, CellCodes, ForagerPolicy, PolicyConfig

__all__ = ["GridMap", "DistanceField", "ForagerPolicy", "Adversary", "CellCodes", "PolicyConfig"]
