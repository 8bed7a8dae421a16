# Player.py
"""A cribbage player: controller, hand, crib (when dealing), played cards, points."""

from typing import Iterable, List, Optional

from Cards import Card, Deck, Hand
from Controllers import Controller
from CribbageErrors import ControllerError


class Player:
    def __init__(self, name: str, controller: Controller,
                 cards: Iterable[Card] = (), crib: Iterable[Card] = ()):
        self.name = name
        self.controller = controller
        self.hand = Hand(cards)
        self.crib = Hand(crib)
        # cards put on the play stack this deal; they come back for the show
        self.played: List[Card] = []
        self.points = 0

    def add_card(self, card: Card) -> None:
        self.hand.add_card(card)

    def add_points(self, points: int) -> None:
        self.points += points

    def has_cards(self) -> bool:
        return bool(len(self.hand) or len(self.crib) or self.played)

    def has_cards_in_hand(self) -> bool:
        return len(self.hand) > 0

    def has_card_with_value_at_most(self, limit: int) -> bool:
        return any(c.value <= limit for c in self.hand)

    def _choose(self, cards: List[Card]) -> Optional[Card]:
        index = self.controller.get_card_index(cards)
        if index is None:
            return None
        if not 0 <= index < len(cards):
            raise ControllerError(
                f"{self.name}'s controller chose {index} from {len(cards)} cards")
        return cards[index]

    def remove_card(self) -> Optional[Card]:
        """Controller picks any card from the hand (discarding to the crib)."""
        card = self._choose(self.hand.as_list())
        if card is None:
            return None
        return self.hand.discard_matching(card)

    def play_card(self, limit: int) -> Card:
        """Controller picks a card worth at most `limit`; it moves to `played`."""
        legal = [c for c in self.hand if c.value <= limit]
        card = self._choose(legal)
        if card is None:
            raise ControllerError(f"{self.name}'s controller has no card to play")
        self.hand.discard_matching(card)
        self.played.append(card)
        return card

    def choose_card_for_cut(self, deck: Deck) -> Optional[Card]:
        """Cut for deal: the chosen card is taken out of `deck`."""
        index = self.controller.get_card_index(deck.as_list())
        if index is None:
            return None
        if not 0 <= index < len(deck):
            raise ControllerError(f"{self.name} cut at {index} in a deck of {len(deck)}")
        return deck.remove(index)

    def gather_played(self) -> None:
        for card in self.played:
            self.hand.add_card(card)
        self.played = []

    def remove_all(self) -> List[Card]:
        cards = self.hand.clear() + self.crib.clear() + self.played
        self.played = []
        return cards

    def reset(self) -> None:
        self.remove_all()

    def __repr__(self) -> str:
        return f"Player({self.name!r}, points={self.points}, hand={self.hand!r})"
