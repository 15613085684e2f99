"""Heuristic bot that builds one strong suit and knocks on a good hand."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from engine.cards import Card, Suit, count_by_suit
from engine.deck import HAND_SIZE
from engine.scoring import MAX_SCORE, best_score, ordered_suit_scores, score_by_suit

from .base import BotStrategy

logger = logging.getLogger(__name__)

STRONG_HAND = 25
EARLY_KNOCK_SCORE = 26
LATE_GAME_ESTIMATE = 21
EARLY_GAME_ESTIMATE = 19


def _suit_groups(hand: Sequence[Card]) -> Dict[Suit, List[Tuple[int, Card]]]:
    """Group (hand index, card) pairs by suit, suits in order of first appearance."""
    groups: Dict[Suit, List[Tuple[int, Card]]] = {}
    for index, card in enumerate(hand):
        groups.setdefault(card.suit, []).append((index, card))
    return groups


def _lowest(members: Iterable[Tuple[int, Card]]) -> Tuple[int, Card]:
    # min() keeps the first of equal values, i.e. the earliest in hand order.
    return min(members, key=lambda member: member[1].value())


def strongest_suit(hand: Sequence[Card]) -> Optional[Suit]:
    ordered = ordered_suit_scores(hand)
    return ordered[0][0] if ordered else None


def weakest_card(hand: Sequence[Card]) -> Card:
    """Lowest card of the suit with the fewest cards, ties going to the lowest total."""
    groups = _suit_groups(hand)
    totals = score_by_suit(hand)
    weakest_suit = min(groups, key=lambda suit: (len(groups[suit]), totals[suit]))
    return _lowest(groups[weakest_suit])[1]


def is_better_than_weakest(candidate: Card, weakest: Card, hand: Sequence[Card]) -> bool:
    totals = score_by_suit(hand)
    counts = count_by_suit(hand)
    strongest = strongest_suit(hand)

    if candidate.suit is strongest and weakest.suit is not strongest:
        return True
    if candidate.value() >= 10 and weakest.value() < 10:
        return True
    if counts.get(candidate.suit, 0) >= 2 and counts.get(weakest.suit, 0) == 1:
        return True
    if candidate.suit is weakest.suit and candidate.value() > weakest.value():
        return True
    if totals.get(weakest.suit, 0) < 15 and candidate.value() >= 8:
        return True
    return False


class HeuristicBot(BotStrategy):
    name = "Heuristic"

    def prefer_discard(self, hand: Sequence[Card], top_discard: Optional[Card]) -> bool:
        if top_discard is None:
            return False
        if not hand:
            return True

        best_suit = strongest_suit(hand)
        best = best_score(hand)
        value = top_discard.value()
        held_in_suit = count_by_suit(hand).get(top_discard.suit, 0)

        if top_discard.suit is best_suit:
            return True
        if value >= 10 and held_in_suit < 2:
            return True
        if best >= STRONG_HAND:
            return top_discard.suit is best_suit and value >= 8
        if len(hand) >= HAND_SIZE + 1:
            return is_better_than_weakest(top_discard, weakest_card(hand), hand)
        if 7 <= value <= 9:
            return held_in_suit > 0
        return value >= 10

    def select_discard_index(self, hand: Sequence[Card]) -> int:
        if not hand:
            return -1

        groups = _suit_groups(hand)
        totals = score_by_suit(hand)

        long_suits = [suit for suit, members in groups.items() if len(members) >= 3]
        if long_suits:
            keep = max(long_suits, key=lambda suit: totals[suit])
            others = [(index, card) for index, card in enumerate(hand) if card.suit is not keep]
            if others:
                return _lowest(others)[0]

        ranked = sorted(groups, key=lambda suit: (-len(groups[suit]), -totals[suit]))
        if len(ranked) >= 2:
            first, second = ranked[0], ranked[1]
            if totals[first] - totals[second] <= 5 and len(groups[second]) >= 2:
                others = [
                    (index, card) for index, card in enumerate(hand) if card.suit not in (first, second)
                ]
                if others:
                    return _lowest(others)[0]

        return _lowest(groups[ranked[-1]])[0]

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

        own = best_score(hand)
        if own == MAX_SCORE:
            logger.debug("Knocking with %d.", own)
            return True
        if own >= STRONG_HAND:
            logger.debug("Knocking with strong hand %d.", own)
            return True

        visible = list(opponent_visible_cards)
        if visible:
            estimate = best_score(visible)
            if len(visible) >= opponent_hand_size - 1:
                decision = own >= estimate + 1
                logger.debug("Opponent mostly visible (%d), knock=%s.", estimate, decision)
                return decision
        elif discard_pile_depth > 3:
            estimate = LATE_GAME_ESTIMATE
        else:
            estimate = EARLY_GAME_ESTIMATE

        if discard_pile_depth < 3:
            decision = own >= EARLY_KNOCK_SCORE
        elif discard_pile_depth < 6:
            decision = own >= estimate + 2
        else:
            decision = own >= estimate + 1
        logger.debug(
            "Own %d vs estimate %d at pile depth %d, knock=%s.", own, estimate, discard_pile_depth, decision
        )
        return decision
