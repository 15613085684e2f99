#!/usr/bin/env python3
"""Interactive CLI to play rounds of 31 against the heuristic bot."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Tuple

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.append(str(ROOT))

from bots.heuristic import HeuristicBot
from bots.turn_driver import BotTurnDriver, no_pause
from engine.cards import deserialize_card
from engine.config import TableConfig, load_config
from engine.errors import GameError
from engine.events import RoundObserver
from engine.game import GameSession
from engine.logging_utils import setup_logging
from engine.service import RoundService, RoundView

ACTION_LABELS = {
    "draw_deck": "Draw from the deck",
    "draw_discard": "Take the top of the discard pile",
    "discard": "Discard a card",
    "end_turn": "End turn",
    "knock": "Knock",
}


class ConsoleObserver(RoundObserver):
    def __init__(self, human_player: int) -> None:
        self.human_player = human_player

    def on_turn_changed(self, player: int) -> None:
        who = "your" if player == self.human_player else "the bot's"
        print(f"\n--- It is now {who} turn ---")

    def on_knocked(self, player: int) -> None:
        who = "You" if player == self.human_player else "The bot"
        print(f"\n*** {who} knocked! ***")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Play 31 against the heuristic bot.")
    parser.add_argument("--config", default=None, help="Optional JSON table configuration.")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--no-pause", action="store_true", help="Skip the bot's pacing pauses.")
    return parser.parse_args()


def describe(payload: dict) -> str:
    return str(deserialize_card(payload))


def print_view(view: RoundView) -> None:
    print("\n============================")
    top = describe(view.discard_top) if view.discard_top else "empty"
    print(f"Deck: {view.deck_size} cards | Discard pile: {top} ({view.discard_depth})")
    print(f"Opponent holds {view.opponent_card_count} cards")
    print("Your hand:")
    for index, payload in enumerate(view.hand):
        print(f"  [{index}] {describe(payload)}")
    print(f"Points: {view.score_text}")


def choose_action(view: RoundView) -> str:
    options: List[Tuple[int, str]] = list(enumerate(view.legal_actions))
    for option_idx, action in options:
        print(f"[{option_idx}] {ACTION_LABELS[action]}")
    while True:
        choice = input("Select action (q to quit): ").strip()
        if choice.lower() == "q":
            raise KeyboardInterrupt
        if choice.isdigit() and 0 <= int(choice) < len(options):
            return options[int(choice)][1]
        print("Invalid choice. Try again.")


def choose_card(view: RoundView) -> int:
    while True:
        choice = input(f"Card to discard [0-{len(view.hand) - 1}]: ").strip()
        if choice.isdigit():
            return int(choice)
        print("Please enter a number.")


def apply_action(service: RoundService, player: int, action: str, view: RoundView) -> None:
    if action == "draw_deck":
        service.draw_from_deck(player)
    elif action == "draw_discard":
        service.draw_from_discard(player)
    elif action == "discard":
        service.discard(player, choose_card(view))
    elif action == "end_turn":
        service.end_turn(player)
    elif action == "knock":
        service.knock(player)


def play_round(service: RoundService, driver: BotTurnDriver, config: TableConfig, starting_player: int) -> None:
    service.start_new_round(starting_player=starting_player)
    state = service.session.current_round
    assert state is not None
    human = config.human_player
    while not state.is_over():
        if state.active_player == driver.player:
            print("The bot is thinking...")
            driver.take_turn(state)
            continue
        view = service.get_round_view(human)
        print_view(view)
        action = choose_action(view)
        try:
            apply_action(service, human, action, view)
        except GameError as exc:
            print(f"Not allowed: {exc}")

    view = service.get_round_view(human)
    result = view.result or {}
    print("\nRound over.")
    print(f"Your hand:  {' '.join(describe(card) for card in view.hand)} ({view.score_text})")
    print(f"Bot's hand: {' '.join(describe(card) for card in view.opponent_hand or [])}")
    scores = result.get("scores", [0, 0])
    print(f"Scores -> You: {scores[human]}, Bot: {scores[driver.player]}")
    winner = result.get("winner")
    if winner is None:
        print("The round is a draw!")
    elif winner == human:
        print("You win the round!")
    else:
        print("The bot wins the round.")
    service.finish_round()


def main() -> None:
    args = parse_args()
    config = load_config(args.config)
    if args.seed is not None:
        config = config.model_copy(update={"seed": args.seed})
    setup_logging(config.log_level)

    revealed = config.human_player if config.reveal_dealt_hand else None
    service = RoundService(GameSession(seed=config.seed, revealed_player=revealed))
    service.subscribe(ConsoleObserver(config.human_player))
    driver = BotTurnDriver(HeuristicBot(), config.bot_player, pacing=config.pacing)
    if args.no_pause:
        driver.pause = no_pause

    starting_player = config.starting_player
    try:
        while True:
            play_round(service, driver, config, starting_player)
            session = service.session
            print(f"Tally -> You: {session.wins[config.human_player]}, Bot: {session.wins[config.bot_player]}, draws: {session.draws}")
            if input("Play another round? [y/N]: ").strip().lower() != "y":
                break
            starting_player = 1 - starting_player
    except KeyboardInterrupt:
        print("\nExiting early.")


if __name__ == "__main__":
    main()
