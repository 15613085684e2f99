from engine.cards import Card, Rank, Suit
from bots.heuristic import HeuristicBot, is_better_than_weakest, strongest_suit, weakest_card


def c(rank, suit):
    return Card(rank, suit)


H, D, C, S = Suit.HEARTS, Suit.DIAMONDS, Suit.CLUBS, Suit.SPADES


def test_prefer_discard_without_top_card_goes_to_deck():
    assert HeuristicBot().prefer_discard([c(Rank.KING, H)], None) is False


def test_prefer_discard_with_empty_hand():
    assert HeuristicBot().prefer_discard([], c(Rank.TWO, C)) is True


def test_prefer_discard_matching_best_suit():
    hand = [c(Rank.KING, H), c(Rank.FIVE, H), c(Rank.TWO, C)]
    assert HeuristicBot().prefer_discard(hand, c(Rank.THREE, H)) is True


def test_prefer_discard_high_card_starts_new_suit():
    hand = [c(Rank.KING, H), c(Rank.FIVE, H), c(Rank.TWO, C)]
    assert HeuristicBot().prefer_discard(hand, c(Rank.QUEEN, S)) is True


def test_prefer_discard_protects_strong_hand():
    bot = HeuristicBot()
    strong = [c(Rank.ACE, H), c(Rank.KING, H), c(Rank.FOUR, H), c(Rank.EIGHT, S)]
    assert bot.prefer_discard(strong, c(Rank.NINE, S)) is False

    # The same candidate beats the lone eight once the hand is not strong.
    weaker = [c(Rank.ACE, H), c(Rank.THREE, H), c(Rank.FOUR, H), c(Rank.EIGHT, S)]
    assert bot.prefer_discard(weaker, c(Rank.NINE, S)) is True


def test_prefer_discard_full_hand_compares_with_weakest():
    bot = HeuristicBot()
    hand = [c(Rank.KING, H), c(Rank.NINE, H), c(Rank.THREE, C), c(Rank.TWO, D)]
    assert bot.prefer_discard(hand, c(Rank.EIGHT, C)) is True
    assert bot.prefer_discard(hand, c(Rank.FIVE, C)) is False


def test_prefer_discard_medium_card_needs_matching_suit():
    bot = HeuristicBot()
    hand = [c(Rank.KING, H), c(Rank.FIVE, H), c(Rank.TWO, C)]
    assert bot.prefer_discard(hand, c(Rank.EIGHT, C)) is True
    assert bot.prefer_discard(hand, c(Rank.EIGHT, S)) is False


def test_prefer_discard_fallback_on_rank_value():
    bot = HeuristicBot()
    hand = [c(Rank.KING, H), c(Rank.FIVE, H), c(Rank.TWO, C)]
    assert bot.prefer_discard(hand, c(Rank.FOUR, S)) is False

    split = [c(Rank.ACE, H), c(Rank.FIVE, C), c(Rank.SIX, C)]
    assert bot.prefer_discard(split, c(Rank.QUEEN, C)) is True


def test_weakest_card_prefers_short_low_suit():
    hand = [c(Rank.KING, H), c(Rank.NINE, H), c(Rank.THREE, C), c(Rank.TWO, D)]
    assert weakest_card(hand) == c(Rank.TWO, D)
    assert strongest_suit(hand) is H


def test_better_than_weakest_rules():
    hand = [c(Rank.KING, H), c(Rank.SEVEN, H), c(Rank.SIX, S), c(Rank.FIVE, S)]
    weakest = weakest_card(hand)
    assert weakest == c(Rank.FIVE, S)
    # Strongest suit while the weakest card is not.
    assert is_better_than_weakest(c(Rank.TWO, H), weakest, hand)
    # High card against a low one.
    assert is_better_than_weakest(c(Rank.JACK, D), weakest, hand)
    # Same suit, higher value.
    assert is_better_than_weakest(c(Rank.SEVEN, S), weakest, hand)
    # Low card of a third suit does not help.
    assert not is_better_than_weakest(c(Rank.THREE, D), weakest, hand)


def test_select_discard_keeps_long_suit():
    hand = [c(Rank.ACE, S), c(Rank.KING, S), c(Rank.QUEEN, S), c(Rank.TWO, H)]
    assert HeuristicBot().select_discard_index(hand) == 3


def test_select_discard_lowest_outside_long_suit():
    hand = [c(Rank.THREE, D), c(Rank.QUEEN, S), c(Rank.KING, S), c(Rank.JACK, S)]
    assert HeuristicBot().select_discard_index(hand) == 0


def test_select_discard_from_weakest_suit():
    assert HeuristicBot().select_discard_index([c(Rank.SEVEN, C), c(Rank.NINE, C), c(Rank.TWO, D)]) == 2

    # Two close two-card suits leave no third suit, so the weaker pair gives up its low card.
    close = [c(Rank.KING, H), c(Rank.FIVE, H), c(Rank.QUEEN, C), c(Rank.FOUR, C)]
    assert HeuristicBot().select_discard_index(close) == 3


def test_select_discard_ties_take_first_in_hand_order():
    hand = [c(Rank.THREE, D), c(Rank.KING, S), c(Rank.QUEEN, S), c(Rank.JACK, S), c(Rank.THREE, C)]
    assert HeuristicBot().select_discard_index(hand) == 0

    pairs = [c(Rank.TWO, H), c(Rank.TWO, C), c(Rank.KING, H), c(Rank.KING, C)]
    assert HeuristicBot().select_discard_index(pairs) == 1


def test_select_discard_empty_hand():
    assert HeuristicBot().select_discard_index([]) == -1


def test_knock_on_thirty_one():
    bot = HeuristicBot()
    hand = [c(Rank.ACE, H), c(Rank.KING, H), c(Rank.QUEEN, H)]
    opponent = [c(Rank.ACE, S), c(Rank.KING, S), c(Rank.QUEEN, S)]
    assert bot.should_knock(hand, opponent, 0)


def test_knock_on_strong_hand():
    hand = [c(Rank.ACE, H), c(Rank.KING, H), c(Rank.FOUR, H)]
    assert HeuristicBot().should_knock(hand, [], 0)


def test_no_knock_with_four_cards():
    hand = [c(Rank.ACE, H), c(Rank.KING, H), c(Rank.QUEEN, H), c(Rank.TWO, C)]
    assert not HeuristicBot().should_knock(hand, [], 10)


def test_knock_against_visible_opponent():
    bot = HeuristicBot()
    hand = [c(Rank.KING, H), c(Rank.NINE, H), c(Rank.TWO, C)]
    assert bot.should_knock(hand, [c(Rank.TEN, S), c(Rank.EIGHT, S)], 1)
    assert not bot.should_knock(hand, [c(Rank.TEN, S), c(Rank.NINE, S)], 1)


def test_knock_early_game_needs_high_score():
    hand = [c(Rank.KING, H), c(Rank.TEN, H), c(Rank.FOUR, H)]
    assert not HeuristicBot().should_knock(hand, [], 2)


def test_knock_mid_game_margin():
    bot = HeuristicBot()
    twenty_three = [c(Rank.KING, H), c(Rank.NINE, H), c(Rank.FOUR, H)]
    twenty_two = [c(Rank.KING, H), c(Rank.EIGHT, H), c(Rank.FOUR, H)]
    twenty_one = [c(Rank.KING, H), c(Rank.SEVEN, H), c(Rank.FOUR, H)]
    twenty = [c(Rank.KING, H), c(Rank.SIX, H), c(Rank.FOUR, H)]

    # Pile depth 4: late estimate 21, margin 2.
    assert bot.should_knock(twenty_three, [], 4)
    assert not bot.should_knock(twenty_two, [], 4)
    # Pile depth 3: early estimate 19, margin 2.
    assert bot.should_knock(twenty_one, [], 3)
    assert not bot.should_knock(twenty, [], 3)


def test_knock_late_game_margin():
    bot = HeuristicBot()
    assert bot.should_knock([c(Rank.KING, H), c(Rank.EIGHT, H), c(Rank.FOUR, H)], [], 7)
    assert not bot.should_knock([c(Rank.KING, H), c(Rank.SEVEN, H), c(Rank.FOUR, H)], [], 7)


def test_knock_with_single_visible_card_uses_it_as_estimate():
    hand = [c(Rank.KING, H), c(Rank.FIVE, H), c(Rank.TWO, C)]
    assert HeuristicBot().should_knock(hand, [c(Rank.ACE, S)], 4)
    assert not HeuristicBot().should_knock(hand, [], 4)


def test_better_than_weakest_when_candidate_joins_a_pair():
    hand = [c(Rank.KING, H), c(Rank.THREE, C), c(Rank.FOUR, C), c(Rank.TWO, D)]
    weakest = weakest_card(hand)
    assert weakest == c(Rank.TWO, D)
    # Only the pair of clubs against the lone diamond separates these two.
    assert is_better_than_weakest(c(Rank.FIVE, C), weakest, hand)
    assert not is_better_than_weakest(c(Rank.FIVE, S), weakest, hand)


def test_prefer_discard_takes_card_that_joins_a_pair():
    bot = HeuristicBot()
    hand = [c(Rank.KING, H), c(Rank.THREE, C), c(Rank.FOUR, C), c(Rank.TWO, D)]
    assert bot.prefer_discard(hand, c(Rank.FIVE, C)) is True
    assert bot.prefer_discard(hand, c(Rank.FIVE, S)) is False
