"""Round state management for 31."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterator, List, Optional, Set, Tuple

from .cards import Card
from .deck import DECK_SIZE, HAND_SIZE, Deck
from .errors import EmptyPileError, IllegalActionError, InvalidCardError
from .events import ObserverRegistry, RoundObserver

logger = logging.getLogger(__name__)


class TurnPhase(Enum):
    START = auto()
    AWAITING_DISCARD = auto()
    ROUND_OVER = auto()


@dataclass(frozen=True)
class RoundSnapshot:
    """Read-only copy of a round, safe to hand to bots and presentation code."""

    hands: Tuple[Tuple[Card, ...], Tuple[Card, ...]]
    discard_pile: Tuple[Card, ...]
    deck_size: int
    active_player: int
    phase: TurnPhase
    knocked_player: Optional[int]
    has_drawn: bool
    has_discarded: bool
    visible: Tuple[Tuple[Card, ...], Tuple[Card, ...]]

    @property
    def top_discard(self) -> Optional[Card]:
        return self.discard_pile[-1] if self.discard_pile else None

    @property
    def discard_depth(self) -> int:
        return len(self.discard_pile)

    def hand(self, player: int) -> Tuple[Card, ...]:
        return self.hands[player]

    def visible_cards(self, player: int) -> Tuple[Card, ...]:
        return self.visible[player]

    def total_cards(self) -> int:
        return self.deck_size + len(self.discard_pile) + sum(len(hand) for hand in self.hands)


@dataclass
class RoundState:
    """Owns the cards of one round and applies validated actions to them."""

    deck: Deck
    hands: List[List[Card]]
    discard_pile: List[Card] = field(default_factory=list)
    active_player: int = 0
    visible_ids: List[Set[int]] = field(default_factory=lambda: [set(), set()])
    phase: TurnPhase = field(init=False, default=TurnPhase.START)
    knocked_player: Optional[int] = field(init=False, default=None)
    has_drawn: bool = field(init=False, default=False)
    has_discarded: bool = field(init=False, default=False)
    _observers: ObserverRegistry = field(init=False, repr=False)
    _applying: bool = field(init=False, default=False, repr=False)

    def __post_init__(self) -> None:
        if len(self.hands) != 2:
            raise ValueError("RoundState supports exactly two players.")
        if self.active_player not in (0, 1):
            raise ValueError("Active player must be 0 or 1.")
        self.hands = [list(hand) for hand in self.hands]
        if any(len(hand) != HAND_SIZE for hand in self.hands):
            raise ValueError(f"Each hand must start with {HAND_SIZE} cards.")
        self.discard_pile = list(self.discard_pile)
        self.visible_ids = [set(ids) for ids in self.visible_ids]
        if self.total_cards() != DECK_SIZE:
            raise ValueError(f"A round must account for all {DECK_SIZE} cards, got {self.total_cards()}.")
        self._observers = ObserverRegistry()

    # Observers ---------------------------------------------------------

    def subscribe(self, observer: RoundObserver) -> None:
        self._observers.subscribe(observer)

    def unsubscribe(self, observer: RoundObserver) -> None:
        self._observers.unsubscribe(observer)

    # Queries -----------------------------------------------------------

    def opponent(self, player: int) -> int:
        return 1 - player

    def is_over(self) -> bool:
        return self.phase is TurnPhase.ROUND_OVER

    def top_discard(self) -> Optional[Card]:
        return self.discard_pile[-1] if self.discard_pile else None

    def total_cards(self) -> int:
        return len(self.deck) + len(self.discard_pile) + sum(len(hand) for hand in self.hands)

    def visible_cards(self, player: int) -> List[Card]:
        """Cards of ``player`` that the opponent has seen face up and that are still held."""
        return [card for card in self.hands[player] if card.identity in self.visible_ids[player]]

    def can_knock(self, player: int) -> bool:
        return (
            self.phase is TurnPhase.START
            and player == self.active_player
            and len(self.hands[player]) == HAND_SIZE
        )

    def can_end_turn(self, player: int) -> bool:
        return (
            self.phase is TurnPhase.START
            and player == self.active_player
            and len(self.hands[player]) == HAND_SIZE
            and self.has_drawn
            and self.has_discarded
        )

    def snapshot(self) -> RoundSnapshot:
        return RoundSnapshot(
            hands=(tuple(self.hands[0]), tuple(self.hands[1])),
            discard_pile=tuple(self.discard_pile),
            deck_size=len(self.deck),
            active_player=self.active_player,
            phase=self.phase,
            knocked_player=self.knocked_player,
            has_drawn=self.has_drawn,
            has_discarded=self.has_discarded,
            visible=(tuple(self.visible_cards(0)), tuple(self.visible_cards(1))),
        )

    # Actions -----------------------------------------------------------

    def draw_from_deck(self, player: int) -> Card:
        with self._applying_action():
            self._require_draw(player)
            card = self.deck.draw()
            self._take_card(player, card)
            logger.debug("Player %d drew %s from the deck (%d left).", player, card, len(self.deck))
            self._observers.state_changed(self.snapshot())
        return card

    def draw_from_discard(self, player: int) -> Card:
        with self._applying_action():
            self._require_draw(player)
            if not self.discard_pile:
                raise EmptyPileError("The discard pile is empty.")
            card = self.discard_pile.pop()
            self._take_card(player, card)
            logger.debug("Player %d took %s from the discard pile.", player, card)
            self._observers.state_changed(self.snapshot())
        return card

    def discard(self, player: int, card_index: int) -> Card:
        with self._applying_action():
            self._require_turn(player, TurnPhase.AWAITING_DISCARD)
            hand = self.hands[player]
            if not isinstance(card_index, int) or not 0 <= card_index < len(hand):
                raise InvalidCardError(f"Card index {card_index!r} is not in the hand of player {player}.")
            card = hand.pop(card_index)
            self.discard_pile.append(card)
            self.has_discarded = True
            self.phase = TurnPhase.START
            logger.debug("Player %d discarded %s.", player, card)
            self._observers.state_changed(self.snapshot())
        return card

    def end_turn(self, player: int) -> int:
        with self._applying_action():
            self._require_turn(player, TurnPhase.START)
            if not self.can_end_turn(player):
                raise IllegalActionError("A turn requires exactly one draw and one discard before it ends.")
            self.active_player = self.opponent(player)
            self.has_drawn = False
            self.has_discarded = False
            logger.debug("Turn passes to player %d.", self.active_player)
            self._observers.state_changed(self.snapshot())
            self._observers.turn_changed(self.active_player)
        return self.active_player

    def knock(self, player: int) -> None:
        with self._applying_action():
            self._require_turn(player, TurnPhase.START)
            if len(self.hands[player]) != HAND_SIZE:
                raise IllegalActionError(f"Knocking requires exactly {HAND_SIZE} cards in hand.")
            self.knocked_player = player
            self.phase = TurnPhase.ROUND_OVER
            logger.info("Player %d knocked.", player)
            self._observers.state_changed(self.snapshot())
            self._observers.knocked(player)

    def move_card(self, player: int, from_index: int, to_index: int) -> None:
        """Rearrange a hand. Scoring ignores order, so this is legal outside the turn cycle."""
        with self._applying_action():
            if self.is_over():
                raise IllegalActionError("The round is over.")
            if player not in (0, 1):
                raise IllegalActionError(f"Unknown player {player}.")
            hand = self.hands[player]
            for index in (from_index, to_index):
                if not isinstance(index, int) or not 0 <= index < len(hand):
                    raise InvalidCardError(f"Card index {index!r} is not in the hand of player {player}.")
            hand.insert(to_index, hand.pop(from_index))
            self._observers.state_changed(self.snapshot())

    # Helpers -----------------------------------------------------------

    def _take_card(self, player: int, card: Card) -> None:
        self.hands[player].append(card)
        self.has_drawn = True
        self.phase = TurnPhase.AWAITING_DISCARD

    def _require_draw(self, player: int) -> None:
        self._require_turn(player, TurnPhase.START)
        if self.has_drawn:
            raise IllegalActionError("Player has already drawn this turn.")

    def _require_turn(self, player: int, expected: TurnPhase) -> None:
        if self.phase is TurnPhase.ROUND_OVER:
            raise IllegalActionError("The round is over.")
        if player != self.active_player:
            raise IllegalActionError("Not this player's turn.")
        if self.phase is not expected:
            raise IllegalActionError(f"Action not allowed in phase {self.phase.name}. Expected {expected.name}.")

    @contextmanager
    def _applying_action(self) -> Iterator[None]:
        if self._applying:
            raise IllegalActionError("Another action is still being applied.")
        self._applying = True
        try:
            yield
        finally:
            self._applying = False
