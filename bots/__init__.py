"""Bot strategies for 31."""

from .heuristic import HeuristicBot
from .random_bot import RandomBot
from .turn_driver import BotTurnDriver

__all__ = ["HeuristicBot", "RandomBot", "BotTurnDriver"]
