"""Common bot strategy interfaces."""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from engine.cards import Card
from engine.state import RoundSnapshot


class BotStrategy:
    """Base class for bot policies. Bots decide; they never mutate the round."""

    name: str = "BaseBot"

    def on_round_start(self, snapshot: RoundSnapshot, player: int) -> None:
        """Optional hook invoked when a new round is dealt."""
        return None

    def prefer_discard(self, hand: Sequence[Card], top_discard: Optional[Card]) -> bool:
        """Return True to draw the top of the discard pile, False to draw from the deck."""
        return False

    def select_discard_index(self, hand: Sequence[Card]) -> int:
        """Return the index of the card to discard, or -1 for an empty hand."""
        return len(hand) - 1

    def should_knock(
        self,
        hand: Sequence[Card],
        opponent_visible_cards: Iterable[Card],
        discard_pile_depth: int,
        *,
        opponent_hand_size: int = 3,
    ) -> bool:
        """Return True to end the round by knocking."""
        return False
