# Controllers.py
"""
How a player picks a card.

A controller is shown the cards it may choose from and returns the index of
its choice, or None when it has nothing to say. The scorer never talks to a
controller; only Player does.
"""

import random
from abc import ABC, abstractmethod
from collections import deque
from typing import Callable, Iterable, Optional, Sequence

from Cards import Card
from CribbageErrors import ControllerError


class Controller(ABC):

    @abstractmethod
    def get_card_index(self, available_cards: Sequence[Card]) -> Optional[int]:
        """Index into `available_cards`, or None for no choice."""


class PredeterminedController(Controller):
    """Plays back a fixed list of indices. Used by tests and replays."""

    def __init__(self, card_indices: Iterable[int] = ()):
        self.card_indices = deque(card_indices)

    def get_card_index(self, available_cards: Sequence[Card]) -> Optional[int]:
        if not self.card_indices:
            return None

        index = self.card_indices.popleft()
        if not 0 <= index < len(available_cards):
            raise ControllerError(
                f"Index {index}, from PredeterminedController, is out of bounds "
                f"for available cards {list(available_cards)}")
        return index

    def copy(self) -> 'PredeterminedController':
        return PredeterminedController(self.card_indices)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PredeterminedController):
            return NotImplemented
        return self.card_indices == other.card_indices

    def __repr__(self) -> str:
        return f"PredeterminedController({list(self.card_indices)})"


class RandomController(Controller):
    """Picks uniformly at random. Seed it for a repeatable game."""

    def __init__(self, seed: Optional[int] = None):
        self._random = random.Random(seed)

    def get_card_index(self, available_cards: Sequence[Card]) -> Optional[int]:
        if not available_cards:
            return None
        return self._random.randrange(len(available_cards))


class IoController(Controller):
    """Asks at the terminal. Keeps asking until it gets a usable number."""

    def __init__(self, input_fn: Callable[[str], str] = input,
                 output_fn: Callable[[str], None] = print):
        self.input_fn = input_fn
        self.output_fn = output_fn

    def _index_from_user(self, upper_bound: int) -> int:
        raw = self.input_fn(f"Choose card (1 to {upper_bound}): ").strip()
        try:
            number = int(raw)
        except ValueError:
            raise ValueError(f"{raw} is not a number!") from None
        if not 0 < number <= upper_bound:
            raise ValueError(
                f"{number} is out of bounds. Please choose a number between 1 and {upper_bound}!")
        return number - 1

    def get_card_index(self, available_cards: Sequence[Card]) -> Optional[int]:
        if not available_cards:
            return None

        self.output_fn("   ".join(f"{i}:{c}" for i, c in enumerate(available_cards, start=1)))
        while True:
            try:
                return self._index_from_user(len(available_cards))
            except ValueError as err:
                self.output_fn(f"⚠️ {err}")
