from __future__ import annotations

import itertools
import logging
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np

from .board import as_board, neighbor_group

logger = logging.getLogger(__name__)


class Unsolvable:
    """Solver outcome for a board that no set of presses can clear."""

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNSOLVABLE"


UNSOLVABLE = Unsolvable()

Solution = np.ndarray
SolveResult = Union[Solution, Unsolvable]


def build_A(n: int) -> np.ndarray:
    """Return the N×N effect matrix A over GF(2) for Lights Out.
    Column j encodes the cells toggled when pressing cell j.
    """
    N = n * n
    A = np.zeros((N, N), dtype=np.uint8)  # use 0/1 ints for XOR via mod2

    def idx(r, c):
        return r * n + c

    for r in range(n):
        for c in range(n):
            j = idx(r, c)
            for rr, cc in neighbor_group(n, r, c):
                A[idx(rr, cc), j] = 1
    return A


def build_augmented(board: Sequence[bool] | np.ndarray, size: int) -> np.ndarray:
    """Return [A | b] with b the current lit state of every cell."""
    b = as_board(board, size).astype(np.uint8).reshape(-1, 1)
    return np.concatenate([build_A(size), b], axis=1)


def gf2_rref_augmented(
    A: np.ndarray, b: np.ndarray
) -> Tuple[np.ndarray, list[int]]:
    """Return RREF of augmented matrix [A|b] over GF(2) and list of pivot columns."""
    A = (A % 2).astype(np.uint8)
    b = (b % 2).astype(np.uint8).reshape(-1, 1)
    m, n = A.shape
    M = np.concatenate([A.copy(), b.copy()], axis=1)  # shape (m, n+1)

    row = 0
    pivcols: list[int] = []
    for col in range(n):
        # find a pivot in/under current row
        pivot = None
        for r in range(row, m):
            if M[r, col]:
                pivot = r
                break
        if pivot is None:
            continue
        # swap pivot row up
        if pivot != row:
            M[[row, pivot]] = M[[pivot, row]]
        # eliminate ALL other rows (Gauss-Jordan)
        for r in range(m):
            if r != row and M[r, col]:
                M[r, :] ^= M[row, :]
        pivcols.append(col)
        row += 1
        if row == m:
            break
    return M, pivcols


def _inconsistent(R: np.ndarray, n: int) -> bool:
    # 0...0 | 1 rows
    return bool(np.any((R[:, :n].sum(axis=1) == 0) & (R[:, n] == 1)))


def gf2_solve_with_nullspace(
    A: np.ndarray, b: np.ndarray
) -> Tuple[Optional[np.ndarray], List[np.ndarray], bool]:
    """Solve A x = b over GF(2), and return a nullspace basis of A.

    Returns:
        x0: one particular solution (length n, uint8) or None if inconsistent
        basis: list of nullspace basis vectors v (length n, uint8) with A v = 0
        solvable: bool
    """
    m, n = A.shape
    R, pivcols = gf2_rref_augmented(A, b)  # R is [RREF(A) | r]
    R_A = R[:, :n]
    R_b = R[:, n]

    if _inconsistent(R, n):
        return None, [], False

    # Free vars = 0, so each pivot var equals its row's rhs
    x0 = np.zeros((n,), dtype=np.uint8)
    for ri, pc in enumerate(pivcols):
        x0[pc] = R_b[ri]

    # Nullspace basis: for each free column f, set x_f=1, others free=0; solve pivot vars
    pivset = set(pivcols)
    frees = [j for j in range(n) if j not in pivset]
    basis: list[np.ndarray] = []
    for f in frees:
        v = np.zeros((n,), dtype=np.uint8)
        v[f] = 1
        for ri, pc in enumerate(pivcols):
            v[pc] = R_A[ri, f]
        basis.append(v)

    return x0, basis, True


def gf2_min_weight_solution(
    A: np.ndarray, b: np.ndarray
) -> Tuple[Optional[np.ndarray], bool]:
    """Return the minimum-Hamming-weight solution to A x = b (if solvable)."""
    x0, basis, ok = gf2_solve_with_nullspace(A, b)
    if not ok or x0 is None:
        return None, False
    # Try all combinations of nullspace basis vectors
    best = x0.copy()
    best_w = int(best.sum())
    k = len(basis)
    for r in range(1, k + 1):
        for combo in itertools.combinations(range(k), r):
            cand = x0.copy()
            for idx in combo:
                cand ^= basis[idx]
            w = int(cand.sum())
            if w < best_w:
                best, best_w = cand, w
    return best, True


def solve(
    board: Sequence[bool] | np.ndarray, size: int, minimal: bool = False
) -> SolveResult:
    """Find switches whose presses (once each, any order) clear `board`.

    Returns a flat bool array marking the switches to press, or UNSOLVABLE.
    With free variables the default answer sets them all to 0; pass
    ``minimal=True`` for the pattern with the fewest presses instead.
    """
    total = size * size
    M = build_augmented(board, size)

    if minimal:
        x, ok = gf2_min_weight_solution(M[:, :total], M[:, total])
        if not ok or x is None:
            logger.debug("no solution for %dx%d board", size, size)
            return UNSOLVABLE
        return as_board(x, size)

    R, _ = gf2_rref_augmented(M[:, :total], M[:, total])
    if _inconsistent(R, total):
        logger.debug("no solution for %dx%d board", size, size)
        return UNSOLVABLE

    solution = np.zeros(total, dtype=bool)
    for r in range(total):
        lead = np.flatnonzero(R[r, :total])
        if len(lead) > 0:
            solution[lead[0]] = bool(R[r, total])
    return as_board(solution, size)


def is_solvable(board: Sequence[bool] | np.ndarray, size: int) -> bool:
    return not isinstance(solve(board, size), Unsolvable)
