"""Bot strategies for cribbage."""

from .heuristic import HeuristicBot
from .random_bot import RandomBot

__all__ = ["HeuristicBot", "RandomBot"]
