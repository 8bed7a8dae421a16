# CribbageScorer.py
"""
Hand/crib scoring and the score ledger for a two-player game.

A hand is scored together with the starter (cut) card, 5 cards in all:
  * fifteens  - every subset (1 to 5 cards) adding to 15 is worth 2
  * pairs     - every 2-card combination of equal rank is worth 2
  * runs      - longest run of 3+ ranks, times the duplicate-rank multiplier
  * flushes   - 4 (hand only) or 5 (hand + starter); a crib needs all 5
  * nobs      - the Jack of the starter's suit is worth 1
"""

import logging
from itertools import combinations
from typing import Dict, List, Optional, Sequence

import numpy as np

from Cards import Card, Rank, RANK_COUNT
from CribbageErrors import InvalidHandError
from Pegging import MAX_COUNT, PlayStack

logger = logging.getLogger(__name__)

HAND_CARDS = 4
POINTS_PER_FIFTEEN = 2
POINTS_PER_PAIR = 2
MIN_RUN = 3
FOUR_FLUSH = 4
FIVE_FLUSH = 5
HEELS_POINTS = 2


def _scoring_set(hand: Sequence[Card], starter: Card) -> List[Card]:
    if len(hand) != HAND_CARDS:
        raise InvalidHandError(f"A hand is scored with {HAND_CARDS} cards, got {len(hand)}")
    cards = list(hand)
    cards.append(starter)
    return cards


def rank_counts(cards: Sequence[Card]) -> np.ndarray:
    """13-slot occupancy array indexed by rank ordinal (Ace=0 ... King=12)."""
    counts = np.zeros(RANK_COUNT, dtype=int)
    for card in cards:
        ordinal = int(card.rank)
        if not 0 <= ordinal < RANK_COUNT:
            raise InvalidHandError(f"Rank {card.rank!r} not handled")
        counts[ordinal] += 1
    return counts


def score_fifteens(hand: Sequence[Card], starter: Card) -> int:
    cards = _scoring_set(hand, starter)
    vals = [c.value for c in cards]

    fifteens = 0
    for r in range(1, len(vals) + 1):
        for combo in combinations(vals, r):
            if sum(combo) == 15:
                fifteens += 1

    return POINTS_PER_FIFTEEN * fifteens


def score_pairs(hand: Sequence[Card], starter: Card) -> int:
    cards = _scoring_set(hand, starter)
    pairs = sum(1 for a, b in combinations(cards, 2) if a.rank == b.rank)
    return POINTS_PER_PAIR * pairs


def score_runs(hand: Sequence[Card], starter: Card) -> int:
    """
    Longest run of consecutive ranks times a duplicate multiplier (a double
    run of 3 scores 6, double-double 12).

    A rank's count joins the multiplier only when it extends the longest run
    seen so far, and a gap clears the multiplier only while no run of 3 has
    been found. So a duplicate that opens a run after an earlier, longer
    block is not multiplied: A,3,3,4,5 scores 3.
    """
    counts = rank_counts(_scoring_set(hand, starter))

    max_run, max_multiplier = 0, 1
    current_run = 0
    for count in counts:
        current_run += 1
        if count == 0:
            current_run = 0
            if max_run < MIN_RUN:
                max_multiplier = 1
        if current_run > max_run:
            max_run = current_run
            max_multiplier *= int(count)

    if max_run < MIN_RUN:
        return 0
    return max_run * max_multiplier


def score_flushes(hand: Sequence[Card], starter: Card, is_crib: bool = False) -> int:
    cards = _scoring_set(hand, starter)
    target_suit = cards[0].suit

    if not all(c.suit == target_suit for c in cards[:HAND_CARDS]):
        return 0
    if starter.suit == target_suit:
        return FIVE_FLUSH
    # crib: require cut to match
    return 0 if is_crib else FOUR_FLUSH


def score_nobs(hand: Sequence[Card], starter: Card) -> int:
    cards = _scoring_set(hand, starter)
    nobs = Card(Rank.JACK, starter.suit)
    return int(any(c == nobs for c in cards[:HAND_CARDS]))


def total(hand: Sequence[Card], starter: Card, is_crib: bool = False) -> int:
    """Score a 4-card hand (or crib) with its starter card."""
    parts = {
        'fifteens': score_fifteens(hand, starter),
        'pairs':    score_pairs(hand, starter),
        'runs':     score_runs(hand, starter),
        'flush':    score_flushes(hand, starter, is_crib),
        'nobs':     score_nobs(hand, starter),
    }
    points = sum(parts.values())
    logger.debug("%s + %s%s -> %d %s", " ".join(str(c) for c in hand), starter,
                 " (crib)" if is_crib else "", points, parts)
    return points


class CribbageScorer:
    """
    Score ledger for a game counted by hand: pegging plays, Go points, the
    cut and the show are recorded against two named players.
    """

    def __init__(self, players=('Player 1', 'Player 2')):
        # cumulative game scores
        self.scores: Dict[str, int] = {p: 0 for p in players}
        # full history of scoring events
        self.score_history: List[dict] = []
        # pegging state
        self.play_stack = PlayStack()
        # turn / dealer
        self.turn: Optional[str] = None
        self.first_player: Optional[str] = None
        self.crib_owner: Optional[str] = None
        # cut card
        self.cut_card: Optional[Card] = None

    @property
    def current_total(self) -> int:
        return self.play_stack.stack_score

    def _record(self, phase: str, player: str, delta: int, **extra) -> None:
        self.scores[player] += delta
        event = {'phase': phase, 'player': player, 'delta': delta,
                 'total': self.scores[player]}
        event.update(extra)
        self.score_history.append(event)
        logger.debug("%s: %s +%d (total %d)", phase, player, delta, self.scores[player])

    def other(self, player: str) -> str:
        return next(p for p in self.scores if p != player)

    def set_first_player(self, first_player: str, crib_owner: str) -> None:
        """Who leads pegging, who owns the crib."""
        self.first_player = first_player
        self.crib_owner = crib_owner
        self.turn = first_player

    def switch_turn(self) -> None:
        self.turn = self.other(self.turn)

    def set_first_card_in_crib(self, card: Card) -> None:
        """Record cut; if it's a Jack, dealer gets 2 points ('heels')."""
        if self.cut_card is not None:
            return
        self.cut_card = card
        if card.rank == Rank.JACK and self.crib_owner:
            self._record('heels', self.crib_owner, HEELS_POINTS)

    def score_pegging(self, player: str, card: Card) -> int:
        """Score a single pegging play, return points scored."""
        self.play_stack.add_card(card)
        pts = self.play_stack.current_points()
        self._record('pegging', player, pts, card=card.name)
        # 31 already paid its 2, count starts over
        if self.current_total == MAX_COUNT:
            self.reset_count()
        if self.turn is not None:
            self.switch_turn()
        return pts

    def score_go(self, player: str) -> int:
        """One for the last card when neither player can go; the count restarts."""
        self._record('go', player, 1)
        self.reset_count()
        return 1

    def reset_count(self) -> None:
        self.play_stack.clear()

    def score_hand(self, hand_cards: Sequence[Card], cut_card: Card, is_crib: bool = False) -> int:
        return total(hand_cards, cut_card, is_crib)

    def score_round(self, p1_hand, p2_hand, crib_hand, cut_card: Card) -> None:
        """
        After pegging, score both players' hands and the crib.
        The non-dealer counts first; the crib goes to its owner.
        """
        players = list(self.scores)
        hands = dict(zip(players, (p1_hand, p2_hand)))
        order = players
        if self.crib_owner in players:
            order = [self.other(self.crib_owner), self.crib_owner]

        for player in order:
            self._record('hand', player, self.score_hand(hands[player], cut_card))

        if self.crib_owner:
            self._record('crib', self.crib_owner,
                         self.score_hand(crib_hand, cut_card, is_crib=True))

    def check_game_over(self, endpoint: int = 121) -> Optional[str]:
        for p, s in self.scores.items():
            if s >= endpoint:
                return p
        return None

    def get_scores(self) -> Dict[str, int]:
        return dict(self.scores)

    def get_history(self) -> List[dict]:
        return list(self.score_history)
