"""Convenience service layer for UI and bots."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from .cards import Card, card_label, serialize_card
from .errors import SessionError
from .events import RoundObserver
from .game import GameSession, round_result
from .scoring import best_score, format_suit_scores
from .state import RoundState, TurnPhase


@dataclass
class RoundView:
    phase: str
    perspective: int
    active_player: int
    hand: list[dict]
    hand_labels: list[str]
    score_text: str
    best_score: int
    opponent_card_count: int
    opponent_visible: list[dict]
    opponent_hand: Optional[list[dict]]
    discard_top: Optional[dict]
    discard_depth: int
    deck_size: int
    knocked_player: Optional[int]
    legal_actions: list[str]
    result: Optional[dict]


@dataclass
class SessionView:
    wins: list[int]
    draws: int
    round: Optional[RoundView]


def legal_actions(state: RoundState, player: int) -> List[str]:
    if state.is_over() or player != state.active_player:
        return []
    if state.phase is TurnPhase.AWAITING_DISCARD:
        return ["discard"]
    actions: List[str] = []
    if not state.has_drawn:
        if len(state.deck) > 0:
            actions.append("draw_deck")
        if state.discard_pile:
            actions.append("draw_discard")
    if state.can_end_turn(player):
        actions.append("end_turn")
    if state.can_knock(player):
        actions.append("knock")
    return actions


class RoundService:
    """Facade around GameSession for UI consumers."""

    def __init__(self, session: Optional[GameSession] = None) -> None:
        self.session = session or GameSession()
        self._observers: List[RoundObserver] = []

    # Session lifecycle -------------------------------------------------

    def start_new_round(self, starting_player: int = 0) -> RoundView:
        state = self.session.start_round(starting_player=starting_player)
        for observer in self._observers:
            state.subscribe(observer)
        return self.get_round_view()

    def has_active_round(self) -> bool:
        return self.session.current_round is not None

    def subscribe(self, observer: RoundObserver) -> None:
        """Attach an observer to the current round and every later one."""
        if observer in self._observers:
            return
        self._observers.append(observer)
        if self.session.current_round is not None:
            self.session.current_round.subscribe(observer)

    # Actions -----------------------------------------------------------

    def draw_from_deck(self, player: int) -> RoundView:
        self._require_round().draw_from_deck(player)
        return self.get_round_view(player)

    def draw_from_discard(self, player: int) -> RoundView:
        self._require_round().draw_from_discard(player)
        return self.get_round_view(player)

    def discard(self, player: int, card_index: int) -> RoundView:
        self._require_round().discard(player, card_index)
        return self.get_round_view(player)

    def end_turn(self, player: int) -> RoundView:
        self._require_round().end_turn(player)
        return self.get_round_view(player)

    def knock(self, player: int) -> RoundView:
        self._require_round().knock(player)
        return self.get_round_view(player)

    def move_card(self, player: int, from_index: int, to_index: int) -> RoundView:
        self._require_round().move_card(player, from_index, to_index)
        return self.get_round_view(player)

    def finish_round(self) -> SessionView:
        self.session.finish_round()
        return SessionView(wins=list(self.session.wins), draws=self.session.draws, round=None)

    # Views -------------------------------------------------------------

    def get_session_view(self, perspective: int = 0) -> SessionView:
        return SessionView(
            wins=list(self.session.wins),
            draws=self.session.draws,
            round=self.get_round_view(perspective) if self.has_active_round() else None,
        )

    def get_round_view(self, perspective: int = 0) -> RoundView:
        state = self._require_round()
        opponent = state.opponent(perspective)
        hand = state.hands[perspective]
        top = state.top_discard()
        revealed: Optional[list[Card]] = list(state.hands[opponent]) if state.is_over() else None

        result_payload: Optional[dict] = None
        if state.is_over():
            result = round_result(state)
            result_payload = {
                "scores": list(result.scores),
                "winner": result.winner,
                "knocked_player": result.knocked_player,
            }

        return RoundView(
            phase=state.phase.name.lower(),
            perspective=perspective,
            active_player=state.active_player,
            hand=[serialize_card(card) for card in hand],
            hand_labels=[card_label(card) for card in hand],
            score_text=format_suit_scores(hand),
            best_score=best_score(hand),
            opponent_card_count=len(state.hands[opponent]),
            opponent_visible=[serialize_card(card) for card in state.visible_cards(opponent)],
            opponent_hand=[serialize_card(card) for card in revealed] if revealed is not None else None,
            discard_top=serialize_card(top) if top is not None else None,
            discard_depth=len(state.discard_pile),
            deck_size=len(state.deck),
            knocked_player=state.knocked_player,
            legal_actions=legal_actions(state, perspective),
            result=result_payload,
        )

    # Helpers -----------------------------------------------------------

    def _require_round(self) -> RoundState:
        if self.session.current_round is None:
            raise SessionError("No active round.")
        return self.session.current_round
