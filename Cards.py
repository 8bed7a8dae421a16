# Cards.py
"""
Card model and card containers.

A Card is an immutable (rank, suit) pair. Ranks run Ace low through King and
their enum value is the dense ordinal used to index 13-slot counting arrays.
"""

import random
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, Iterator, List, Optional

from CribbageErrors import InvalidCardError

# pip-value map for 15's and pegging counts
CARD_VALUES = {
    'Ace':   1, 'Two':   2, 'Three': 3, 'Four':  4,
    'Five':  5, 'Six':   6, 'Seven': 7, 'Eight': 8,
    'Nine':  9, 'Ten':  10, 'Jack': 10, 'Queen':10,
    'King': 10
}

SUIT_SYMBOLS = {'Hearts': '♥', 'Diamonds': '♦', 'Clubs': '♣', 'Spades': '♠'}
RANK_SYMBOLS = ['A', '2', '3', '4', '5', '6', '7', '8', '9', '10', 'J', 'Q', 'K']


class Rank(IntEnum):
    ACE = 0
    TWO = 1
    THREE = 2
    FOUR = 3
    FIVE = 4
    SIX = 5
    SEVEN = 6
    EIGHT = 7
    NINE = 8
    TEN = 9
    JACK = 10
    QUEEN = 11
    KING = 12

    @property
    def label(self) -> str:
        return self.name.title()

    @property
    def value_points(self) -> int:
        return CARD_VALUES[self.label]


class Suit(IntEnum):
    # Order only matters when cutting for deal.
    HEARTS = 0
    DIAMONDS = 1
    CLUBS = 2
    SPADES = 3

    @property
    def label(self) -> str:
        return self.name.title()


RANK_COUNT = len(Rank)


@dataclass(frozen=True, order=True)
class Card:
    rank: Rank
    suit: Suit

    @property
    def value(self) -> int:
        """Points this card adds to a fifteen or to the pegging count."""
        return self.rank.value_points

    @property
    def name(self) -> str:
        return f"{self.rank.label} of {self.suit.label}"

    @classmethod
    def from_name(cls, card_name: str) -> 'Card':
        """Parse a long card name, e.g. 'Five of Hearts'."""
        parts = card_name.split()
        if len(parts) != 3 or parts[1].lower() != 'of':
            raise InvalidCardError(f"Cannot read card name {card_name!r}")
        try:
            rank = Rank[parts[0].upper()]
            suit = Suit[parts[2].upper()]
        except KeyError:
            raise InvalidCardError(f"Unknown rank or suit in {card_name!r}") from None
        return cls(rank, suit)

    def __str__(self) -> str:
        return f"[{RANK_SYMBOLS[self.rank]}{SUIT_SYMBOLS[self.suit.label]}]"


class Hand:
    """Ordered pile of cards held by a player (or the crib)."""

    def __init__(self, cards: Iterable[Card] = ()):
        self._cards: List[Card] = list(cards)

    def add_card(self, card: Card) -> None:
        self._cards.append(card)

    def discard(self, index: int) -> Card:
        if not 0 <= index < len(self._cards):
            raise IndexError(f"No card at index {index} in a hand of {len(self._cards)}")
        return self._cards.pop(index)

    def discard_matching(self, card: Card) -> Optional[Card]:
        try:
            self._cards.remove(card)
        except ValueError:
            return None
        return card

    def clear(self) -> List[Card]:
        cards, self._cards = self._cards, []
        return cards

    def as_list(self) -> List[Card]:
        return list(self._cards)

    def sorted_cards(self) -> List[Card]:
        return sorted(self._cards)

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Hand):
            return NotImplemented
        return self._cards == other._cards

    def __repr__(self) -> str:
        return f"Hand({self._cards!r})"

    def __str__(self) -> str:
        return " ".join(str(c) for c in self._cards)


class Deck:
    """52-card deck. Cards are dealt from the end of the list."""

    def __init__(self, cards: Optional[Iterable[Card]] = None):
        if cards is None:
            cards = [Card(rank, suit) for suit in Suit for rank in Rank]
        self._cards: List[Card] = list(cards)

    @classmethod
    def from_cards(cls, cards: Iterable[Card]) -> 'Deck':
        return cls(cards)

    def shuffle(self, rng: Optional[random.Random] = None) -> None:
        (rng or random).shuffle(self._cards)

    def deal(self) -> Optional[Card]:
        if not self._cards:
            return None
        return self._cards.pop()

    def remove(self, index: int) -> Card:
        return self._cards.pop(index)

    def copy(self) -> 'Deck':
        return Deck(self._cards)

    def as_list(self) -> List[Card]:
        return list(self._cards)

    def __len__(self) -> int:
        return len(self._cards)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Deck):
            return NotImplemented
        return self._cards == other._cards

    def __repr__(self) -> str:
        return f"Deck({len(self._cards)} cards)"
