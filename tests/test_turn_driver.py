import pytest

from bots.base import BotStrategy
from bots.heuristic import HeuristicBot
from bots.turn_driver import BotTurnDriver, no_pause
from engine.cards import Card, Rank, Suit
from engine.config import PacingConfig
from engine.deck import Deck, build_deck
from engine.errors import IllegalActionError, TurnInProgressError
from engine.events import RoundObserver
from engine.state import RoundState, TurnPhase


def make_round(hand0, hand1, discard_pile, *, deck_cards=None, active_player=1):
    used = set(hand0) | set(hand1) | set(discard_pile)
    if deck_cards is None:
        deck_cards = [card for card in build_deck() if card not in used]
    return RoundState(deck=Deck(deck_cards), hands=[hand0, hand1], discard_pile=discard_pile, active_player=active_player)


HUMAN = [Card(Rank.TWO, Suit.CLUBS), Card(Rank.THREE, Suit.DIAMONDS), Card(Rank.FOUR, Suit.SPADES)]


class RecordingPause:
    def __init__(self):
        self.calls = []

    def __call__(self, seconds):
        self.calls.append(seconds)


def test_bot_turn_draws_discards_and_ends_turn():
    bot_hand = [Card(Rank.KING, Suit.HEARTS), Card(Rank.FIVE, Suit.HEARTS), Card(Rank.TWO, Suit.SPADES)]
    state = make_round(HUMAN, bot_hand, [Card(Rank.QUEEN, Suit.HEARTS)])
    pause = RecordingPause()
    driver = BotTurnDriver(HeuristicBot(), 1, pacing=PacingConfig(draw_pause=1.0, discard_pause=0.25), pause=pause)

    outcome = driver.take_turn(state)

    assert not outcome.knocked
    assert outcome.drew_from_discard is True
    assert outcome.drawn == Card(Rank.QUEEN, Suit.HEARTS)
    assert outcome.discarded == Card(Rank.TWO, Suit.SPADES)
    assert state.active_player == 0
    assert state.phase is TurnPhase.START
    assert len(state.hands[1]) == 3
    assert state.total_cards() == 52
    assert pause.calls == [1.0, 0.25]
    assert not driver.in_progress


def test_bot_knocks_at_turn_start_with_strong_hand():
    bot_hand = [Card(Rank.ACE, Suit.HEARTS), Card(Rank.KING, Suit.HEARTS), Card(Rank.QUEEN, Suit.HEARTS)]
    state = make_round(HUMAN, bot_hand, [Card(Rank.TWO, Suit.HEARTS)])
    pause = RecordingPause()
    knocks = []

    class KnockListener(RoundObserver):
        def on_knocked(self, player):
            knocks.append(player)

    state.subscribe(KnockListener())
    outcome = BotTurnDriver(HeuristicBot(), 1, pacing=PacingConfig(knock_pause=0.5), pause=pause).take_turn(state)

    assert outcome.knocked
    assert state.is_over()
    assert state.knocked_player == 1
    assert knocks == [1]
    assert pause.calls == [0.5]
    assert len(state.hands[1]) == 3


def test_bot_cannot_start_out_of_turn():
    bot_hand = [Card(Rank.KING, Suit.HEARTS), Card(Rank.FIVE, Suit.HEARTS), Card(Rank.TWO, Suit.SPADES)]
    state = make_round(HUMAN, bot_hand, [Card(Rank.QUEEN, Suit.HEARTS)], active_player=0)
    with pytest.raises(IllegalActionError):
        BotTurnDriver(HeuristicBot(), 1, pause=no_pause).take_turn(state)
    assert state.active_player == 0
    assert len(state.hands[1]) == 3


def test_reentrant_turn_is_rejected_and_first_turn_completes():
    bot_hand = [Card(Rank.KING, Suit.HEARTS), Card(Rank.FIVE, Suit.HEARTS), Card(Rank.TWO, Suit.SPADES)]
    state = make_round(HUMAN, bot_hand, [Card(Rank.QUEEN, Suit.HEARTS)])
    rejected = []

    def meddling_pause(seconds):
        try:
            driver.take_turn(state)
        except TurnInProgressError as exc:
            rejected.append(exc)

    driver = BotTurnDriver(HeuristicBot(), 1, pause=meddling_pause)
    outcome = driver.take_turn(state)

    assert len(rejected) == 2
    assert not outcome.knocked
    assert state.active_player == 0
    assert not driver.in_progress


def test_empty_deck_falls_back_to_discard_pile():
    bot_hand = [Card(Rank.KING, Suit.HEARTS), Card(Rank.FIVE, Suit.HEARTS), Card(Rank.TWO, Suit.SPADES)]
    rest = [card for card in build_deck() if card not in HUMAN and card not in bot_hand]
    state = make_round(HUMAN, bot_hand, rest, deck_cards=[])

    outcome = BotTurnDriver(BotStrategy(), 1, pause=no_pause).take_turn(state)

    assert outcome.drew_from_discard is True
    assert len(state.deck) == 0
    assert state.total_cards() == 52


def test_bot_turn_completes_despite_failing_observer():
    class Exploding(RoundObserver):
        def on_state_changed(self, snapshot):
            raise RuntimeError("listener failure")

    bot_hand = [Card(Rank.KING, Suit.HEARTS), Card(Rank.FIVE, Suit.HEARTS), Card(Rank.TWO, Suit.SPADES)]
    state = make_round(HUMAN, bot_hand, [Card(Rank.QUEEN, Suit.HEARTS)])
    state.subscribe(Exploding())
    driver = BotTurnDriver(HeuristicBot(), 1, pause=no_pause)

    outcome = driver.take_turn(state)

    assert not outcome.knocked
    assert state.active_player == 0
    assert state.phase is TurnPhase.START
    assert len(state.hands[1]) == 3
    assert not driver.in_progress
