from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Mapping, Optional, Union

import numpy as np

from .algebra import UNSOLVABLE, Unsolvable, solve
from .board import is_clear, lit_count, scramble, toggle
from .difficulty import Difficulty

logger = logging.getLogger(__name__)

SOLUTION_FOUND_MESSAGE = "Press the highlighted switches"
NO_SOLUTION_MESSAGE = "No solution for this scramble. Try New Puzzle."
SOLVED_STATUS = "Panel stabilized. All lights are down."
UNSOLVED_STATUS = "Power is unstable."


@dataclass(frozen=True, eq=False)
class Session:
    """One puzzle in progress. Transitions below return new sessions."""

    difficulty: Difficulty
    board: np.ndarray
    moves: int = 0
    scramble_count: int = 1
    best_moves: Mapping[str, int] = field(default_factory=dict)
    solution: Optional[Union[np.ndarray, Unsolvable]] = None
    show_solution: bool = False
    solution_message: str = ""
    celebrated: bool = False


def _fresh(session: Session, rng: np.random.Generator | None, **changes) -> Session:
    d = session.difficulty
    return replace(
        session,
        board=scramble(d.size, d.steps, rng),
        moves=0,
        solution=None,
        show_solution=False,
        solution_message="",
        celebrated=False,
        **changes,
    )


def start_session(
    difficulty: Difficulty,
    rng: np.random.Generator | None = None,
    best_moves: Mapping[str, int] | None = None,
) -> Session:
    board = scramble(difficulty.size, difficulty.steps, rng)
    logger.debug("new %s session", difficulty.id)
    return Session(
        difficulty=difficulty, board=board, best_moves=dict(best_moves or {})
    )


def lit(session: Session) -> int:
    return lit_count(session.board)


def is_solved(session: Session) -> bool:
    return is_clear(session.board)


def best_for(session: Session) -> Optional[int]:
    return session.best_moves.get(session.difficulty.id)


def status_line(session: Session) -> str:
    return SOLVED_STATUS if is_solved(session) else UNSOLVED_STATUS


def apply_move(session: Session, row: int, col: int) -> Session:
    """Press (row, col). A cleared board ignores further presses."""
    if is_solved(session):
        return session

    board = toggle(session.board, session.difficulty.size, row, col)
    moves = session.moves + 1
    best_moves = session.best_moves
    celebrated = session.celebrated

    if is_clear(board):
        current = best_moves.get(session.difficulty.id)
        if current is None or moves < current:
            best_moves = {**best_moves, session.difficulty.id: moves}
            logger.debug(
                "new best for %s: %d moves", session.difficulty.id, moves
            )
        celebrated = True

    return replace(
        session,
        board=board,
        moves=moves,
        best_moves=best_moves,
        show_solution=False,
        celebrated=celebrated,
    )


def new_puzzle(session: Session, rng: np.random.Generator | None = None) -> Session:
    return _fresh(session, rng, scramble_count=session.scramble_count + 1)


def reset(session: Session, rng: np.random.Generator | None = None) -> Session:
    """Rescramble at the same difficulty without advancing the panel counter."""
    return _fresh(session, rng)


def select_difficulty(
    session: Session,
    difficulty: Difficulty,
    rng: np.random.Generator | None = None,
) -> Session:
    logger.debug("difficulty %s -> %s", session.difficulty.id, difficulty.id)
    return _fresh(
        replace(session, difficulty=difficulty), rng, scramble_count=1
    )


def toggle_solution(session: Session) -> Session:
    """Show the solver's hint for the current board, or hide it if shown."""
    if session.show_solution:
        return replace(session, show_solution=False)

    result = solve(session.board, session.difficulty.size)
    if isinstance(result, Unsolvable):
        return replace(
            session,
            solution=UNSOLVABLE,
            solution_message=NO_SOLUTION_MESSAGE,
            show_solution=True,
        )
    return replace(
        session,
        solution=result,
        solution_message=SOLUTION_FOUND_MESSAGE,
        show_solution=True,
    )
