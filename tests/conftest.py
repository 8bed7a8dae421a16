# tests/conftest.py
import pytest

from Cards import Card, Rank, Suit
from Controllers import PredeterminedController
from Player import Player

_RANKS = {'A': Rank.ACE, '2': Rank.TWO, '3': Rank.THREE, '4': Rank.FOUR,
          '5': Rank.FIVE, '6': Rank.SIX, '7': Rank.SEVEN, '8': Rank.EIGHT,
          '9': Rank.NINE, 'T': Rank.TEN, 'J': Rank.JACK, 'Q': Rank.QUEEN,
          'K': Rank.KING}
_SUITS = {'H': Suit.HEARTS, 'D': Suit.DIAMONDS, 'C': Suit.CLUBS, 'S': Suit.SPADES}


def parse_cards(codes):
    """'5H JC TD' -> [Card, ...]. Ten is T."""
    return [Card(_RANKS[code[:-1]], _SUITS[code[-1]]) for code in codes.split()]


def parse_card(code):
    return parse_cards(code)[0]


def scripted_player(name, indices=(), cards='', crib=''):
    return Player(name, PredeterminedController(indices),
                  parse_cards(cards), parse_cards(crib))


@pytest.fixture
def cards():
    return parse_cards


@pytest.fixture
def card():
    return parse_card


@pytest.fixture
def make_player():
    return scripted_player
