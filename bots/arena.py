"""Simple bot arena for 31."""

from __future__ import annotations

import argparse
import logging
from typing import Dict, Iterable, Sequence

from engine.config import load_config
from engine.game import GameSession
from engine.logging_utils import setup_logging
from engine.state import RoundState

from .base import BotStrategy
from .heuristic import HeuristicBot
from .random_bot import RandomBot
from .turn_driver import BotTurnDriver, no_pause

logger = logging.getLogger(__name__)

BOT_REGISTRY: Dict[str, type[BotStrategy]] = {
    "heuristic": HeuristicBot,
    "random": RandomBot,
}

DEFAULT_MAX_TURNS = 200


def play_round(state: RoundState, bots: Sequence[BotStrategy], *, max_turns: int = DEFAULT_MAX_TURNS) -> int:
    """Drive a round to its knock and return the number of turns taken."""
    drivers = [BotTurnDriver(bot, seat, pause=no_pause) for seat, bot in enumerate(bots)]
    snapshot = state.snapshot()
    for seat, bot in enumerate(bots):
        bot.on_round_start(snapshot, seat)

    turns = 0
    while not state.is_over():
        if turns >= max_turns:
            logger.info("Turn cap %d reached, player %d knocks.", max_turns, state.active_player)
            state.knock(state.active_player)
            break
        drivers[state.active_player].take_turn(state)
        turns += 1
    return turns


def run_match(
    bot_a: BotStrategy,
    bot_b: BotStrategy,
    *,
    n_rounds: int = 10,
    seed: int | None = None,
    max_turns: int = DEFAULT_MAX_TURNS,
) -> dict:
    session = GameSession(seed=seed, revealed_player=None)
    bots = [bot_a, bot_b]
    history = []
    for idx in range(n_rounds):
        state = session.start_round(starting_player=idx % 2)
        turns = play_round(state, bots, max_turns=max_turns)
        result = session.finish_round()
        history.append(
            {
                "scores": result.scores,
                "winner": result.winner,
                "knocked_player": result.knocked_player,
                "turns": turns,
            }
        )
    return {"wins": list(session.wins), "draws": session.draws, "history": history}


def main(argv: Iterable[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Run a bot match.")
    parser.add_argument("--bot-a", default="heuristic", choices=BOT_REGISTRY.keys())
    parser.add_argument("--bot-b", default="random", choices=BOT_REGISTRY.keys())
    parser.add_argument("--n", type=int, default=10, help="Number of rounds to play.")
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--max-turns", type=int, default=None, help="Turn cap; defaults to the config value.")
    parser.add_argument("--config", default=None, help="Optional JSON table configuration.")
    parser.add_argument("--log-level", default=None)
    args = parser.parse_args(argv)

    config = load_config(args.config)
    setup_logging(args.log_level or config.log_level)
    max_turns = args.max_turns or config.max_turns
    bot_a = BOT_REGISTRY[args.bot_a]()
    bot_b = BOT_REGISTRY[args.bot_b]()
    results = run_match(bot_a, bot_b, n_rounds=args.n, seed=args.seed, max_turns=max_turns)

    print(f"Wins after {args.n} rounds: {results['wins']} (draws: {results['draws']})")
    knocks_won = sum(1 for entry in results["history"] if entry["winner"] == entry["knocked_player"])
    print(f"Knocker won: {knocks_won}/{len(results['history'])}")


if __name__ == "__main__":
    main()
