"""Random baseline bot for arena matches."""

from __future__ import annotations

import random
from typing import Iterable, Optional, Sequence

from engine.cards import Card
from engine.deck import HAND_SIZE

from .base import BotStrategy


class RandomBot(BotStrategy):
    name = "Random"

    def __init__(self, seed: Optional[int] = None, knock_probability: float = 0.1) -> None:
        if not 0.0 <= knock_probability <= 1.0:
            raise ValueError("knock_probability must lie in [0, 1].")
        self._rng = random.Random(seed)
        self.knock_probability = knock_probability

    def prefer_discard(self, hand: Sequence[Card], top_discard: Optional[Card]) -> bool:
        if top_discard is None:
            return False
        return self._rng.random() < 0.5

    def select_discard_index(self, hand: Sequence[Card]) -> int:
        if not hand:
            return -1
        return self._rng.randrange(len(hand))

    def should_knock(
        self,
        hand: Sequence[Card],
        opponent_visible_cards: Iterable[Card],
        discard_pile_depth: int,
        *,
        opponent_hand_size: int = 3,
    ) -> bool:
        if len(hand) != HAND_SIZE:
            return False
        return self._rng.random() < self.knock_probability
