import pytest

from helpers import card_count, cards, suit_columns_state, suit_run
from klondike import rules
from klondike.cards import SUITS, Card
from klondike.piles import Move, PileRef
from klondike.state import GameState

F0 = PileRef.foundation(0)
T0 = PileRef.tableau(0)
T1 = PileRef.tableau(1)


def _state(foundation=(), tableau=()):
    state = GameState()
    state.foundations[0] = cards(*foundation)
    state.tableau[0] = cards(*tableau)
    return state


@pytest.mark.parametrize(
    "moving, foundation, expected",
    [
        (["AH"], [], True),
        (["2H"], [], False),
        (["2H"], ["AH"], True),
        (["2S"], ["AH"], False),
        (["3H"], ["AH"], False),
        (["AH", "2H"], [], False),
    ],
)
def test_foundation_legality(moving, foundation, expected):
    state = _state(foundation=foundation)
    assert rules.is_valid_move(state, cards(*moving), F0) is expected


@pytest.mark.parametrize(
    "moving, tableau, expected",
    [
        (["KS"], [], True),
        (["QS"], [], False),
        (["KH", "QS", "JD"], [], True),
        (["9D"], ["10S"], True),
        (["9H"], ["10D"], False),
        (["8D"], ["10S"], False),
        (["9C", "8H"], ["10H"], True),
    ],
)
def test_tableau_legality(moving, tableau, expected):
    state = _state(tableau=tableau)
    assert rules.is_valid_move(state, cards(*moving), T0) is expected


@pytest.mark.parametrize("target", [PileRef.stock(), PileRef.waste()])
def test_stock_and_waste_never_accept_cards(target):
    state = GameState()
    assert not rules.is_valid_move(state, cards("AH"), target)
    assert not rules.is_valid_move(state, cards("KS"), target)


def test_empty_or_face_down_runs_are_invalid():
    state = GameState()
    assert not rules.is_valid_move(state, [], F0)
    assert not rules.is_valid_move(state, cards("AH", face_up=False), F0)

    ace = Card("hearts", 1)
    assert not rules.is_valid_move(state, [ace], F0)
    ace.face_up = True
    assert rules.is_valid_move(state, [ace], F0)


def test_movable_run_sources():
    state = GameState()
    state.stock = cards("AS", face_up=False)
    state.waste = cards("4C", "5D")
    state.tableau[0] = cards("2C", face_up=False) + cards("9D", "8C")

    assert rules.movable_run(state, PileRef.stock()) is None
    assert rules.movable_run(state, PileRef.waste()) == state.waste[-1:]
    assert rules.movable_run(state, PileRef.waste(), 0) is None
    assert rules.movable_run(state, T0, 0) is None
    assert rules.movable_run(state, T0, 1) == state.tableau[0][1:]
    assert rules.movable_run(state, T0, 3) is None
    assert rules.movable_run(state, T1) is None


def test_apply_tableau_run_reveals_new_top():
    state = GameState()
    state.tableau[0] = cards("2C", face_up=False) + cards("10S")
    state.tableau[1] = cards("5H", face_up=False) + cards("9D", "8C")
    nine, eight = state.tableau[1][1:]

    assert rules.apply_move(state, Move(T1, T0, 1))

    assert state.tableau[0][-2:] == [nine, eight]
    assert [c.rank for c in state.tableau[0]] == ["2", "10", "9", "8"]
    assert len(state.tableau[1]) == 1
    assert state.tableau[1][0].face_up
    assert not state.tableau[0][0].face_up
    assert state.moves == 1


def test_apply_from_waste_does_not_flip_anything():
    state = GameState()
    state.waste = cards("KD", "AH")
    state.waste[0].face_up = False
    assert rules.apply_move(state, Move(PileRef.waste(), F0))
    assert state.foundations[0][0].rank == "A"
    assert not state.waste[0].face_up
    assert state.moves == 1


def test_rejected_move_changes_nothing():
    state = GameState()
    state.tableau[0] = cards("10D")
    state.tableau[1] = cards("9H")
    assert not rules.apply_move(state, Move(T1, T0))
    assert not rules.apply_move(state, Move(T0, T0))
    assert not rules.apply_move(state, Move(PileRef.stock(), T0))
    assert [c.rank for c in state.tableau[0]] == ["10"]
    assert [c.rank for c in state.tableau[1]] == ["9"]
    assert state.moves == 0


def test_draw_and_recycle_cycle():
    state = GameState()
    state.stock = cards("AS", "7D", "QC", face_up=False)
    original = list(state.stock)

    for _ in range(3):
        rules.draw_from_stock(state)
    assert state.stock == []
    assert state.waste == list(reversed(original))
    assert all(c.face_up for c in state.waste)

    rules.draw_from_stock(state)
    assert state.waste == []
    assert state.stock == original
    assert not any(c.face_up for c in state.stock)
    assert state.moves == 4

    first_pass = list(reversed(original))
    drawn = []
    for _ in range(3):
        rules.draw_from_stock(state)
        drawn.append(state.waste[-1])
    assert drawn == first_pass


def test_draw_with_both_piles_empty_still_counts():
    state = GameState()
    rules.draw_from_stock(state)
    assert state.stock == [] and state.waste == []
    assert state.moves == 1


def test_check_win():
    state = GameState()
    for i, suit in enumerate(SUITS):
        state.foundations[i] = suit_run(suit)
    assert rules.check_win(state)

    state.tableau[0].append(state.foundations[3].pop())
    assert not rules.check_win(state)


def test_no_win_with_all_cards_elsewhere():
    state = suit_columns_state()
    assert card_count(state) == 52
    assert not rules.check_win(state)


def test_can_auto_complete_conditions():
    state = suit_columns_state()
    assert rules.can_auto_complete(state)

    state.tableau[0][0].face_up = False
    assert not rules.can_auto_complete(state)
    state.tableau[0][0].face_up = True

    state.stock.append(state.tableau[3].pop(0))
    assert not rules.can_auto_complete(state)


def test_can_auto_complete_needs_a_foundation_move():
    state = GameState()
    state.tableau[0] = cards("KS")
    assert not rules.can_auto_complete(state)


def test_find_auto_move_scans_in_pile_order():
    state = GameState()
    state.tableau[2] = cards("AD")
    state.tableau[5] = cards("AS")
    step = rules.find_auto_move(state)
    assert step.source == PileRef.tableau(2)
    assert step.target == F0
    assert step.card.rank == "A"


def test_auto_complete_runs_to_win_and_halts():
    state = suit_columns_state()
    steps = rules.auto_complete(state)

    first = next(steps)
    assert first.source == T0 and first.target == F0
    assert state.foundations[0] == [first.card]
    assert state.moves == 1

    rest = list(steps)
    assert len(rest) == 51
    assert rules.check_win(state)
    assert state.moves == 52
    assert all(t == [] for t in state.tableau)
    assert list(rules.auto_complete(state)) == []


def test_auto_complete_ignores_the_waste():
    state = suit_columns_state()
    king = state.tableau[3].pop(0)
    state.waste.append(king)

    moved = list(rules.auto_complete(state))

    assert len(moved) == 51
    assert not rules.check_win(state)
    assert not rules.can_auto_complete(state)
    assert state.waste == [king]
