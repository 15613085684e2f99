"""High-level round orchestration for 31."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from random import Random
from typing import List, Optional, Sequence

from .cards import Card
from .deck import Deck, deal_round
from .errors import IllegalActionError, SessionError
from .scoring import RoundResult, resolve_round
from .state import RoundState

logger = logging.getLogger(__name__)


def new_round(
    *,
    starting_player: int = 0,
    rng: Optional[Random] = None,
    deck: Optional[Sequence[Card]] = None,
    revealed_player: Optional[int] = 0,
) -> RoundState:
    """Shuffle (unless ``deck`` is given), deal, and return a fresh round.

    ``revealed_player`` is the seat whose dealt cards are face up to the
    opponent. Visibility is recorded once at the deal and never updated.
    """
    pool = Deck(deck, rng=rng) if deck is not None else Deck(rng=rng)
    hands, discard_pile = deal_round(pool)
    visible_ids: List[set] = [set(), set()]
    if revealed_player is not None:
        visible_ids[revealed_player] = {card.identity for card in hands[revealed_player]}
    return RoundState(
        deck=pool,
        hands=hands,
        discard_pile=discard_pile,
        active_player=starting_player,
        visible_ids=visible_ids,
    )


def round_result(state: RoundState) -> RoundResult:
    if not state.is_over():
        raise IllegalActionError("Cannot score a round before someone knocks.")
    return resolve_round(state.hands, knocked_player=state.knocked_player)


@dataclass
class GameSession:
    """Track results across rounds. Each round gets a fresh deck and state."""

    seed: Optional[int] = None
    revealed_player: Optional[int] = 0
    wins: List[int] = field(default_factory=lambda: [0, 0])
    draws: int = 0
    rng: Random = field(init=False)
    current_round: Optional[RoundState] = field(default=None, init=False)
    round_history: List[RoundResult] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.rng = Random(self.seed)

    def start_round(self, starting_player: int = 0) -> RoundState:
        if self.current_round is not None:
            if not self.current_round.is_over():
                raise SessionError("The current round has not ended.")
            raise SessionError("Finish the current round before dealing a new one.")
        self.current_round = new_round(
            starting_player=starting_player,
            rng=self.rng,
            revealed_player=self.revealed_player,
        )
        logger.debug("Round %d dealt, player %d starts.", len(self.round_history) + 1, starting_player)
        return self.current_round

    def finish_round(self) -> RoundResult:
        if self.current_round is None:
            raise SessionError("No active round.")
        result = round_result(self.current_round)
        if result.winner is None:
            self.draws += 1
        else:
            self.wins[result.winner] += 1
        self.round_history.append(result)
        self.current_round = None
        logger.info(
            "Round over: scores %s, %s.",
            result.scores,
            "draw" if result.winner is None else f"player {result.winner} wins",
        )
        return result
