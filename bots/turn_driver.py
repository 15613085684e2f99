"""Run a bot's full turn through the same actions a person uses."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

from engine.cards import Card
from engine.config import PacingConfig
from engine.errors import IllegalActionError, TurnInProgressError
from engine.state import RoundState, TurnPhase

from .base import BotStrategy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TurnOutcome:
    player: int
    knocked: bool
    drew_from_discard: Optional[bool] = None
    drawn: Optional[Card] = None
    discarded: Optional[Card] = None


def no_pause(seconds: float) -> None:
    return None


class BotTurnDriver:
    """Sequence knock check, draw, discard and end of turn for one seat.

    Pauses between steps are for presentation only. A turn that has started
    always runs to a knock or an end of turn; starting a second one while the
    first is running raises ``TurnInProgressError``.
    """

    def __init__(
        self,
        bot: BotStrategy,
        player: int,
        *,
        pacing: Optional[PacingConfig] = None,
        pause: Callable[[float], None] = time.sleep,
    ) -> None:
        if player not in (0, 1):
            raise ValueError("Player must be 0 or 1.")
        self.bot = bot
        self.player = player
        self.pacing = pacing or PacingConfig()
        self.pause = pause
        self._in_progress = False

    @property
    def in_progress(self) -> bool:
        return self._in_progress

    def take_turn(self, state: RoundState) -> TurnOutcome:
        if self._in_progress:
            raise TurnInProgressError(f"Player {self.player} is already taking a turn.")
        self._in_progress = True
        try:
            return self._run_turn(state)
        finally:
            self._in_progress = False

    def _run_turn(self, state: RoundState) -> TurnOutcome:
        player = self.player
        opponent = state.opponent(player)
        if state.is_over() or state.active_player != player:
            raise IllegalActionError(f"Player {player} cannot start a turn now.")
        if state.phase is not TurnPhase.START or state.has_drawn:
            raise IllegalActionError(f"Player {player} has already started this turn.")

        snapshot = state.snapshot()
        hand = snapshot.hand(player)
        if self.bot.should_knock(
            hand,
            snapshot.visible_cards(opponent),
            snapshot.discard_depth,
            opponent_hand_size=len(snapshot.hand(opponent)),
        ):
            state.knock(player)
            logger.info("%s (player %d) knocked holding %s.", self.bot.name, player, " ".join(map(str, hand)))
            self.pause(self.pacing.knock_pause)
            return TurnOutcome(player=player, knocked=True)

        top = snapshot.top_discard
        from_discard = top is not None and self.bot.prefer_discard(hand, top)
        if not from_discard and snapshot.deck_size == 0:
            logger.debug("Deck exhausted, player %d takes from the discard pile.", player)
            from_discard = True
        drawn = state.draw_from_discard(player) if from_discard else state.draw_from_deck(player)
        self.pause(self.pacing.draw_pause)

        index = self.bot.select_discard_index(state.snapshot().hand(player))
        discarded = state.discard(player, index)
        self.pause(self.pacing.discard_pause)

        state.end_turn(player)
        logger.debug(
            "%s (player %d) drew %s from the %s and discarded %s.",
            self.bot.name,
            player,
            drawn,
            "discard pile" if from_discard else "deck",
            discarded,
        )
        return TurnOutcome(
            player=player,
            knocked=False,
            drew_from_discard=from_discard,
            drawn=drawn,
            discarded=discarded,
        )
