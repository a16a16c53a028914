from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

import numpy as np

Position = Tuple[int, int]


class BoardShapeError(ValueError):
    """Raised when a board, grid size or cell position do not fit together."""

    pass


def _check_size(size: int) -> int:
    size = int(size)
    if size <= 0:
        raise BoardShapeError(f"Grid size must be positive, got {size}")
    return size


def as_board(board: Sequence[bool] | np.ndarray, size: int) -> np.ndarray:
    """Return `board` as a flat, read-only bool array of length size**2."""
    size = _check_size(size)
    flat = np.asarray(board).reshape(-1).astype(bool)
    if flat.shape[0] != size * size:
        raise BoardShapeError(
            f"Expected board of length {size * size}, got {flat.shape[0]}"
        )
    flat.flags.writeable = False
    return flat


def neighbor_group(size: int, row: int, col: int) -> List[Position]:
    """Cell (row, col) plus its in-bounds orthogonal neighbours."""
    size = _check_size(size)
    if not (0 <= row < size and 0 <= col < size):
        raise BoardShapeError(
            f"Cell ({row}, {col}) is outside a {size}x{size} grid"
        )
    neigh = [(row, col)]
    if row > 0:
        neigh.append((row - 1, col))
    if row < size - 1:
        neigh.append((row + 1, col))
    if col > 0:
        neigh.append((row, col - 1))
    if col < size - 1:
        neigh.append((row, col + 1))
    return neigh


def toggle(
    board: Sequence[bool] | np.ndarray, size: int, row: int, col: int
) -> np.ndarray:
    """Press switch (row, col): flip it and its neighbours on a new board."""
    nxt = as_board(board, size).copy()
    for rr, cc in neighbor_group(size, row, col):
        idx = rr * size + cc
        nxt[idx] = not nxt[idx]
    nxt.flags.writeable = False
    return nxt


def scramble(
    size: int, steps: int, rng: np.random.Generator | None = None
) -> np.ndarray:
    """Apply `steps` random presses to the cleared board.

    The result is reachable from the clear state, so it is always solvable.
    """
    size = _check_size(size)
    if steps < 0:
        raise ValueError(f"steps must be non-negative, got {steps}")
    rng = rng or np.random.default_rng()

    board = as_board(np.zeros(size * size, dtype=bool), size)
    for _ in range(int(steps)):
        row = int(rng.integers(0, size))
        col = int(rng.integers(0, size))
        board = toggle(board, size, row, col)
    return board


def press_all(
    board: Sequence[bool] | np.ndarray,
    size: int,
    presses: Sequence[bool] | np.ndarray,
) -> np.ndarray:
    """Apply the toggle of every switch marked True in `presses`."""
    out = as_board(board, size)
    pattern = as_board(presses, size)
    for idx in np.flatnonzero(pattern):
        row, col = divmod(int(idx), size)
        out = toggle(out, size, row, col)
    return out


def lit_count(board: Iterable[bool]) -> int:
    return int(np.count_nonzero(np.asarray(board, dtype=bool)))


def is_clear(board: Iterable[bool]) -> bool:
    return lit_count(board) == 0


class BoardState:
    def __init__(self, n: int, state: np.ndarray | None = None):
        self.n = _check_size(n)
        if state is None:
            self.state = np.zeros((self.n, self.n), dtype=bool)
        else:
            state = np.asarray(state)
            if state.size != self.n * self.n:
                raise BoardShapeError(
                    f"Expected {self.n * self.n} cells, got {state.size}"
                )
            self.state = state.reshape(self.n, self.n).astype(bool, copy=True)

    def copy(self) -> "BoardState":
        return BoardState(self.n, self.state.copy())

    def to_flat(self) -> np.ndarray:
        return as_board(self.state, self.n)

    @staticmethod
    def from_flat(n: int, flat: Sequence[bool] | np.ndarray) -> "BoardState":
        return BoardState(n, as_board(flat, n))

    def count_on(self) -> int:
        return int(self.state.sum())

    def is_clear(self) -> bool:
        return self.count_on() == 0

    def __eq__(self, other):
        if not isinstance(other, BoardState):
            return NotImplemented
        return self.n == other.n and bool(np.array_equal(self.state, other.state))

    def __repr__(self):
        return f"BoardState(n={self.n}, on={self.count_on()})"

    def __str__(self) -> str:
        return "\n".join(
            "".join("1" if cell else "0" for cell in row) for row in self.state
        )
