"""Bot strategies for the Spades arena."""

from .heuristic_bot import HeuristicBot
from .random_bot import RandomBot

__all__ = ["HeuristicBot", "RandomBot"]
