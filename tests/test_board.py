import numpy as np
import pytest

from gearbox.board import (
    BoardShapeError,
    BoardState,
    as_board,
    is_clear,
    lit_count,
    neighbor_group,
    press_all,
    scramble,
    toggle,
)


def test_neighbor_group_sizes():
    assert len(neighbor_group(4, 0, 0)) == 3
    assert len(neighbor_group(4, 3, 3)) == 3
    assert len(neighbor_group(4, 0, 2)) == 4
    assert len(neighbor_group(4, 2, 0)) == 4
    assert len(neighbor_group(4, 1, 2)) == 5
    assert neighbor_group(1, 0, 0) == [(0, 0)]


def test_neighbor_group_contents():
    assert set(neighbor_group(3, 1, 1)) == {(1, 1), (0, 1), (2, 1), (1, 0), (1, 2)}
    assert set(neighbor_group(2, 0, 0)) == {(0, 0), (1, 0), (0, 1)}


def test_neighbor_group_out_of_bounds():
    with pytest.raises(BoardShapeError):
        neighbor_group(3, 3, 0)
    with pytest.raises(BoardShapeError):
        neighbor_group(0, 0, 0)


def test_toggle_flips_group_only():
    board = [False] * 9
    out = toggle(board, 3, 0, 0)
    assert out.tolist() == [True, True, False, True, False, False, False, False, False]
    assert board == [False] * 9


def test_toggle_does_not_mutate_input():
    board = as_board([True, False, False, True], 2)
    toggle(board, 2, 1, 1)
    assert board.tolist() == [True, False, False, True]


def test_returned_board_is_read_only():
    out = toggle([False] * 4, 2, 0, 0)
    with pytest.raises(ValueError):
        out[0] = False


def test_toggle_involution(rng):
    for _ in range(20):
        size = int(rng.integers(1, 7))
        board = rng.random(size * size) < 0.5
        r, c = (int(x) for x in rng.integers(0, size, size=2))
        assert np.array_equal(toggle(toggle(board, size, r, c), size, r, c), board)


def test_toggle_commutes(rng):
    size = 5
    board = rng.random(size * size) < 0.5
    a = toggle(toggle(board, size, 0, 1), size, 3, 3)
    b = toggle(toggle(board, size, 3, 3), size, 0, 1)
    assert np.array_equal(a, b)


def test_toggle_dimension_mismatch():
    with pytest.raises(BoardShapeError):
        toggle([False] * 8, 3, 0, 0)
    with pytest.raises(BoardShapeError):
        toggle([], 0, 0, 0)


def test_scramble_shape_and_determinism():
    a = scramble(5, 14, np.random.default_rng(7))
    b = scramble(5, 14, np.random.default_rng(7))
    assert a.shape == (25,)
    assert a.dtype == bool
    assert np.array_equal(a, b)


def test_scramble_zero_steps_is_clear(rng):
    assert is_clear(scramble(4, 0, rng))


def test_scramble_rejects_bad_args(rng):
    with pytest.raises(ValueError):
        scramble(4, -1, rng)
    with pytest.raises(BoardShapeError):
        scramble(0, 3, rng)


def test_press_all_applies_each_marked_switch():
    presses = [True, False, False, True]
    out = press_all([False] * 4, 2, presses)
    expected = toggle(toggle([False] * 4, 2, 0, 0), 2, 1, 1)
    assert np.array_equal(out, expected)


def test_lit_count():
    assert lit_count([True, False, True]) == 2
    assert is_clear([False, False])


def test_board_state_round_trip():
    flat = [True, False, False, True]
    state = BoardState.from_flat(2, flat)
    assert state.count_on() == 2
    assert state.to_flat().tolist() == flat
    assert str(state) == "10\n01"
    assert state.copy() == state
    assert not state.is_clear()


def test_board_state_wrong_size():
    with pytest.raises(BoardShapeError):
        BoardState(3, np.zeros((2, 2), dtype=bool))
