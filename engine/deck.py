"""Deck creation and dealing for 31."""

from __future__ import annotations

from random import Random
from typing import List, Optional, Sequence, Tuple

from .cards import Card, RANK_ORDER, SUIT_ORDER
from .errors import EmptyDeckError

DECK_SIZE = 52
HAND_SIZE = 3


def build_deck() -> List[Card]:
    """Return the ordered 52-card deck."""
    return [Card(rank, suit) for suit in SUIT_ORDER for rank in RANK_ORDER]


class Deck:
    """Ordered pool of undealt cards. The top of the deck is the end of the list."""

    def __init__(self, cards: Optional[Sequence[Card]] = None, *, rng: Optional[Random] = None) -> None:
        self._rng = rng or Random()
        if cards is None:
            self.cards: List[Card] = build_deck()
            self.shuffle()
        else:
            self.cards = list(cards)
        if len(set(self.cards)) != len(self.cards):
            raise ValueError("Deck must not contain duplicate cards.")

    def __len__(self) -> int:
        return len(self.cards)

    @property
    def remaining(self) -> int:
        return len(self.cards)

    def is_empty(self) -> bool:
        return not self.cards

    def shuffle(self) -> None:
        # Fisher-Yates, in place.
        for i in range(len(self.cards) - 1, 0, -1):
            j = self._rng.randint(0, i)
            self.cards[i], self.cards[j] = self.cards[j], self.cards[i]

    def draw(self) -> Card:
        if not self.cards:
            raise EmptyDeckError("The deck is empty.")
        return self.cards.pop()


def deal_round(deck: Deck) -> Tuple[List[List[Card]], List[Card]]:
    """Deal three cards to each seat, alternating, then turn one card onto the discard pile."""
    if deck.remaining < 2 * HAND_SIZE + 1:
        raise EmptyDeckError("Not enough cards left to deal a round.")
    hands: List[List[Card]] = [[], []]
    for count in range(2 * HAND_SIZE):
        hands[count % 2].append(deck.draw())
    discard_pile = [deck.draw()]
    return hands, discard_pile
