"""Card-related data structures and helpers for 31."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable, Mapping


class Suit(Enum):
    HEARTS = auto()
    DIAMONDS = auto()
    CLUBS = auto()
    SPADES = auto()

    def __str__(self) -> str:
        return self.name.lower()


class Rank(Enum):
    ACE = auto()
    TWO = auto()
    THREE = auto()
    FOUR = auto()
    FIVE = auto()
    SIX = auto()
    SEVEN = auto()
    EIGHT = auto()
    NINE = auto()
    TEN = auto()
    JACK = auto()
    QUEEN = auto()
    KING = auto()

    def __str__(self) -> str:
        return RANK_LABELS[self]


# Rank values used when summing a suit.
RANK_VALUES: dict[Rank, int] = {
    Rank.ACE: 11,
    Rank.TWO: 2,
    Rank.THREE: 3,
    Rank.FOUR: 4,
    Rank.FIVE: 5,
    Rank.SIX: 6,
    Rank.SEVEN: 7,
    Rank.EIGHT: 8,
    Rank.NINE: 9,
    Rank.TEN: 10,
    Rank.JACK: 10,
    Rank.QUEEN: 10,
    Rank.KING: 10,
}

RANK_LABELS: dict[Rank, str] = {
    Rank.ACE: "A",
    Rank.TWO: "2",
    Rank.THREE: "3",
    Rank.FOUR: "4",
    Rank.FIVE: "5",
    Rank.SIX: "6",
    Rank.SEVEN: "7",
    Rank.EIGHT: "8",
    Rank.NINE: "9",
    Rank.TEN: "10",
    Rank.JACK: "J",
    Rank.QUEEN: "Q",
    Rank.KING: "K",
}

SUIT_SYMBOLS: dict[Suit, str] = {
    Suit.HEARTS: "♥",
    Suit.DIAMONDS: "♦",
    Suit.CLUBS: "♣",
    Suit.SPADES: "♠",
}

SUIT_ORDER: list[Suit] = list(Suit)
RANK_ORDER: list[Rank] = list(Rank)

_LABEL_TO_RANK: dict[str, Rank] = {label: rank for rank, label in RANK_LABELS.items()}


@dataclass(frozen=True)
class Card:
    """Immutable representation of a playing card."""

    rank: Rank
    suit: Suit

    @property
    def identity(self) -> int:
        """Stable 0..51 index, suit-major in build order."""
        return SUIT_ORDER.index(self.suit) * len(RANK_ORDER) + RANK_ORDER.index(self.rank)

    def value(self) -> int:
        return RANK_VALUES[self.rank]

    def __str__(self) -> str:
        return f"{RANK_LABELS[self.rank]}{SUIT_SYMBOLS[self.suit]}"


def card_from_identity(identity: int) -> Card:
    if not 0 <= identity < len(SUIT_ORDER) * len(RANK_ORDER):
        raise ValueError(f"Card identity {identity} out of range.")
    suit_index, rank_index = divmod(identity, len(RANK_ORDER))
    return Card(RANK_ORDER[rank_index], SUIT_ORDER[suit_index])


def count_by_suit(cards: Iterable[Card]) -> dict[Suit, int]:
    """Return card counts per suit, in order of first appearance."""
    counts: dict[Suit, int] = {}
    for card in cards:
        counts[card.suit] = counts.get(card.suit, 0) + 1
    return counts


def serialize_card(card: Card) -> dict[str, str]:
    return {"rank": RANK_LABELS[card.rank], "suit": card.suit.name.lower()}


def deserialize_card(payload: Mapping[str, str]) -> Card:
    rank_label = str(payload["rank"]).upper()
    suit_name = str(payload["suit"]).upper()
    if rank_label not in _LABEL_TO_RANK:
        raise ValueError(f"Unknown rank: {payload['rank']!r}")
    if suit_name not in Suit.__members__:
        raise ValueError(f"Unknown suit: {payload['suit']!r}")
    return Card(_LABEL_TO_RANK[rank_label], Suit[suit_name])


def card_label(card: Card) -> str:
    return f"{card.rank.name.title()} of {card.suit.name.title()}"
