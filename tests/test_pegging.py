import numpy as np
import pytest

from Cards import Card, Rank, Suit
from CribbageErrors import InvalidCardError
from Pegging import MAX_COUNT, PlayStack


# ---------- Run window ----------
@pytest.mark.parametrize("card_index, card_code, top_index, top_code, run_size, expected", [
    (2, "5C", 6, "2C", 4, False),   # too far back in the stack
    (3, "6C", 6, "2C", 4, False),   # too far away in rank
    (5, "3C", 7, "AC", 3, True),
    (5, "3C", 7, "AC", 7, True),
])
def test_can_make_run_of(card, card_index, card_code, top_index, top_code, run_size, expected):
    assert PlayStack.can_make_run_of(
        card_index, card(card_code), top_index, card(top_code), run_size) is expected


@pytest.mark.parametrize("rank_array, run_size, expected", [
    ([0, 1, 1, 1, 0, 1, 1, 1, 1, 0, 0, 0, 0], 7, False),
    ([1, 2, 2, 1, 1, 0, 0, 0, 0, 0, 0, 0, 0], 7, False),
    ([1, 1, 1, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0], 4, False),
    ([1, 1, 1, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0], 3, True),
    ([0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 1, 1, 1], 3, True),
])
def test_is_run_of(rank_array, run_size, expected):
    assert PlayStack.is_run_of(rank_array, run_size) is expected


def test_add_rank_to_array(card):
    counts = np.zeros(13, dtype=int)
    PlayStack.add_rank_to_array(counts, card("KS"))
    PlayStack.add_rank_to_array(counts, card("KD"))
    assert counts[12] == 2


def test_add_rank_to_short_array_raises(card):
    with pytest.raises(InvalidCardError):
        PlayStack.add_rank_to_array(np.zeros(5, dtype=int), card("KS"))


# ---------- Largest run ----------
@pytest.mark.parametrize("stack, expected", [
    ("AC 2C", 0),
    ("AC 2C 3C 5C", 0),
    ("AC 3C 5C 6C 7C 8C 2C", 0),
    ("AC KC JC QC", 3),
    ("2C AC 3C 5C 3H AH 2H", 3),
    ("4C 2C AC 3C", 4),
    ("5C 4C 2C AC 3C 5C", 5),
    ("5C AC 4C 6C 2C 3C", 6),
    ("7C 5C AC 4C 6C 2C 3C", 7),
    ("4C 5H 6D", 3),
    ("4C 5H 6D JS", 0),
])
def test_largest_run_points(cards, stack, expected):
    assert PlayStack(cards(stack)).largest_run_points() == expected


# ---------- Pairs, 15, 31 ----------
@pytest.mark.parametrize("stack, expected", [
    ("KC", 0),
    ("KC KH KS AS", 0),
    ("AS KC KH", 2),
    ("AS KC KH KS", 6),
    ("AS KC KH KS KD", 12),
    ("KC KH AS KS", 0),
])
def test_pairs_points(cards, stack, expected):
    assert PlayStack(cards(stack)).pairs_points() == expected


@pytest.mark.parametrize("stack, expected", [("KC", 0), ("KC 5H", 2), ("KC 4H AH", 2)])
def test_fifteen_points(cards, stack, expected):
    assert PlayStack(cards(stack)).fifteen_points() == expected


@pytest.mark.parametrize("stack, expected", [("KC KH KS", 0), ("KC KH KS AS", 2)])
def test_thirty_one_points(cards, stack, expected):
    assert PlayStack(cards(stack)).thirty_one_points() == expected


@pytest.mark.parametrize("stack, expected", [
    ("4H 7D 4C JC 5D", 0),
    ("7C 4H 4D", 4),
    ("KC KH 8H AD AC AH", 8),
    ("4C 5H 6D", 5),
])
def test_current_points(cards, stack, expected):
    assert PlayStack(cards(stack)).current_points() == expected


# ---------- Go ----------
@pytest.mark.parametrize("hand_1, hand_2, stack, expected", [
    ("AC", "", "KC KH KD", 0),
    ("5C KS", "AC 8C", "KC KH KD", 0),
    ("5C KS", "AC 8C", "KC KH KD AD", 0),
    ("5C KS", "2C 8C", "KC KH KD", 1),
])
def test_go_point(cards, make_player, hand_1, hand_2, stack, expected):
    player_1 = make_player("P1", cards=hand_1)
    player_2 = make_player("P2", cards=hand_2)
    assert PlayStack(cards(stack)).go_point(player_1, player_2) == expected


def test_empty_hand_can_never_play(make_player):
    assert not PlayStack().can_play(make_player("P1"))


def test_can_play_respects_count(cards, make_player):
    stack = PlayStack(cards("KC KH 8D"))
    assert stack.can_play(make_player("P1", cards="3S KS"))
    assert not stack.can_play(make_player("P2", cards="4S KS"))


# ---------- Playing ----------
def test_play_once_pegs_and_moves_card(cards, make_player):
    player = make_player("P1", [1], cards="2H 5H")
    opponent = make_player("P2", cards="KD")
    stack = PlayStack(cards("KC"))

    assert stack.play_once(player, opponent) == 2
    assert player.points == 2
    assert player.played == cards("5H")
    assert player.hand.as_list() == cards("2H")
    assert stack.stack_score == 15


def test_play_once_only_offers_legal_cards(cards, make_player):
    # only 2H fits under 31, so index 0 of the legal cards is 2H
    player = make_player("P1", [0], cards="KH 2H")
    opponent = make_player("P2", cards="KD")
    stack = PlayStack(cards("KC KS 9D"))

    stack.play_once(player, opponent)
    assert player.played == cards("2H")
    assert stack.stack_score == 31


def test_play_once_when_player_cannot_go(cards, make_player):
    player = make_player("P1", [0], cards="KH")
    opponent = make_player("P2", cards="AD")
    stack = PlayStack(cards("KC KS 5D"))

    assert stack.play_once(player, opponent) == 0
    assert len(stack) == 3
    assert player.points == 0


def test_play_once_last_card_scores_go(cards, make_player):
    player = make_player("P1", [0], cards="AH")
    opponent = make_player("P2", cards="KD")
    stack = PlayStack(cards("KC KS 5D"))

    # 25 -> 26, nobody can go
    assert stack.play_once(player, opponent) == 1


def test_play_once_thirty_one_has_no_go(cards, make_player):
    player = make_player("P1", [0], cards="AH")
    opponent = make_player("P2", cards="KD")
    stack = PlayStack(cards("KC KS KH"))

    assert stack.play_once(player, opponent) == 2
    assert stack.stack_score == MAX_COUNT


def test_reset_if_needed(cards, make_player):
    player_1 = make_player("P1", cards="KH")
    player_2 = make_player("P2", cards="QD")
    stack = PlayStack(cards("KC KS 5D"))

    assert stack.reset_if_needed(player_1, player_2)
    assert len(stack) == 0
    assert stack.stack_score == 0
    assert not stack.reset_if_needed(player_1, player_2)


def test_reset_if_needed_keeps_stack_while_someone_can_go(cards, make_player):
    player_1 = make_player("P1", cards="KH")
    player_2 = make_player("P2", cards="AH")
    stack = PlayStack(cards("KC KS"))

    assert not stack.reset_if_needed(player_1, player_2)
    assert stack.stack_score == 20
    assert len(stack) == 2
    assert stack.stack == cards("KC KS")


def test_stack_built_from_cards_tracks_count():
    stack = PlayStack([Card(Rank.KING, Suit.CLUBS), Card(Rank.FIVE, Suit.HEARTS)])
    assert stack.stack_score == 15
    assert len(stack) == 2
