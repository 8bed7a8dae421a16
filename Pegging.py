# Pegging.py
"""
The play (pegging) stack.

Cards go on one at a time while the count stays at or under 31. Every card
scores against the current stack: the longest run ending at the top card,
pairs on the top card, 15 and 31. When neither player can add a card the last
player to go gets 1 (unless the count is exactly 31) and the stack restarts.
"""

import logging
from typing import Iterable, List, Sequence

import numpy as np

from Cards import Card, RANK_COUNT
from CribbageErrors import InvalidCardError

logger = logging.getLogger(__name__)

MAX_COUNT = 31
FIFTEEN = 15
RUN_SIZES = (7, 6, 5, 4, 3)
# 0, 1, 2 or 3 cards under the top card matching its rank
PAIR_POINTS = (0, 2, 6, 12)


class PlayStack:
    """Cards played since the last reset and their running count."""

    def __init__(self, cards: Iterable[Card] = ()):
        self.stack: List[Card] = []
        self.stack_score = 0
        for card in cards:
            self.add_card(card)

    def add_card(self, card: Card) -> None:
        # legality (count <= 31) is the caller's job, see can_play
        self.stack_score += card.value
        self.stack.append(card)

    def clear(self) -> None:
        self.stack = []
        self.stack_score = 0

    def can_play(self, player) -> bool:
        highest_possible = max(MAX_COUNT - self.stack_score, 0)
        return player.has_card_with_value_at_most(highest_possible)

    def any_can_play(self, player_1, player_2) -> bool:
        return self.can_play(player_1) or self.can_play(player_2)

    def reset_if_needed(self, player_1, player_2) -> bool:
        """Start a new count when nobody can go. Returns True if it reset."""
        if self.any_can_play(player_1, player_2):
            return False
        logger.debug("count reset at %d", self.stack_score)
        self.clear()
        return True

    def play_once(self, player, opponent) -> int:
        """
        Let `player` put one card on the stack and peg for it.
        Returns the points pegged; 0 (and no card played) when they cannot go.
        """
        if not self.can_play(player):
            return 0

        card = player.play_card(MAX_COUNT - self.stack_score)
        self.add_card(card)

        points = self.current_points() + self.go_point(player, opponent)
        player.add_points(points)
        logger.debug("%s plays %s, count %d, pegs %d", player.name, card,
                     self.stack_score, points)
        return points

    def current_points(self) -> int:
        return (self.largest_run_points()
                + self.pairs_points()
                + self.fifteen_points()
                + self.thirty_one_points())

    def go_point(self, player_1, player_2) -> int:
        return int(not self.any_can_play(player_1, player_2)
                   and self.stack_score != MAX_COUNT)

    # ---------- Runs ----------

    def largest_run_points(self) -> int:
        if len(self.stack) < min(RUN_SIZES):
            return 0

        top_index = len(self.stack) - 1
        top_card = self.stack[-1]

        for run_size in RUN_SIZES:
            ranks_found = np.zeros(RANK_COUNT, dtype=int)
            for index, card in enumerate(self.stack):
                if self.can_make_run_of(index, card, top_index, top_card, run_size):
                    self.add_rank_to_array(ranks_found, card)
            if self.is_run_of(ranks_found, run_size):
                return run_size

        return 0

    @staticmethod
    def can_make_run_of(card_index: int, card: Card, last_card_index: int,
                        last_card: Card, run_size: int) -> bool:
        """Card is close enough to the top card, by position and by rank, to share a run."""
        index_diff = abs(last_card_index - card_index)
        rank_diff = abs(int(last_card.rank) - int(card.rank))
        return index_diff < run_size and rank_diff < run_size

    @staticmethod
    def is_run_of(rank_array: Sequence[int], run_size: int) -> bool:
        """First block of consecutive occupied ranks is exactly `run_size` long."""
        current_run = 0
        for rank_count in rank_array:
            if rank_count > 0:
                current_run += 1
            elif current_run > 0:
                break
        return current_run == run_size

    @staticmethod
    def add_rank_to_array(rank_array: np.ndarray, card: Card) -> None:
        ordinal = int(card.rank)
        if not 0 <= ordinal < len(rank_array):
            raise InvalidCardError(f"Rank {card.rank!r} not handled")
        rank_array[ordinal] += 1

    # ---------- Pairs, 15, 31 ----------

    def pairs_points(self) -> int:
        if len(self.stack) < 2:
            return 0

        top_rank = self.stack[-1].rank
        matching = 0
        for card in reversed(self.stack[-4:-1]):
            if card.rank != top_rank:
                break
            matching += 1

        return PAIR_POINTS[matching]

    def fifteen_points(self) -> int:
        return 2 if self.stack_score == FIFTEEN else 0

    def thirty_one_points(self) -> int:
        return 2 if self.stack_score == MAX_COUNT else 0

    def __len__(self) -> int:
        return len(self.stack)

    def __repr__(self) -> str:
        return f"PlayStack({' '.join(str(c) for c in self.stack)}, count={self.stack_score})"
