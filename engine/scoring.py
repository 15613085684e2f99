"""Hand scoring helpers for 31."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from .cards import SUIT_SYMBOLS, Card, Suit

MAX_SCORE = 31


@dataclass(frozen=True)
class RoundResult:
    scores: Tuple[int, int]
    winner: Optional[int]
    knocked_player: Optional[int]

    @property
    def is_draw(self) -> bool:
        return self.winner is None


def score_by_suit(hand: Iterable[Card]) -> dict[Suit, int]:
    """Sum rank values per suit. Suits absent from the hand are omitted."""
    totals: dict[Suit, int] = {}
    for card in hand:
        totals[card.suit] = totals.get(card.suit, 0) + card.value()
    return totals


def best_score(hand: Iterable[Card]) -> int:
    totals = score_by_suit(hand)
    if not totals:
        return 0
    return max(totals.values())


def ordered_suit_scores(hand: Iterable[Card]) -> List[Tuple[Suit, int]]:
    """Per-suit totals, highest first; equal totals keep first-appearance order."""
    return sorted(score_by_suit(hand).items(), key=lambda item: -item[1])


def format_suit_scores(hand: Iterable[Card]) -> str:
    return " ".join(f"{total}{SUIT_SYMBOLS[suit]}" for suit, total in ordered_suit_scores(hand))


def resolve_round(hands: Sequence[Sequence[Card]], knocked_player: Optional[int] = None) -> RoundResult:
    if len(hands) != 2:
        raise ValueError("Exactly two hands are supported.")
    scores = (best_score(hands[0]), best_score(hands[1]))
    if scores[0] > scores[1]:
        winner: Optional[int] = 0
    elif scores[1] > scores[0]:
        winner = 1
    else:
        winner = None
    return RoundResult(scores=scores, winner=winner, knocked_player=knocked_player)
