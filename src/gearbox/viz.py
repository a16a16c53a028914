import matplotlib.pyplot as plt
import numpy as np
from matplotlib.patches import Rectangle

from .algebra import Unsolvable
from .board import as_board


def _outline(ax, presses, n, color):
    for action in np.flatnonzero(presses):
        r, c = divmod(int(action), n)
        ax.add_patch(
            Rectangle(
                (c - 0.5, r - 0.5),
                1,
                1,
                edgecolor=color,
                facecolor="none",
                linewidth=2,
            )
        )


def _style(ax, n, title):
    ax.set_xticks(range(n))
    ax.set_yticks(range(n))
    ax.set_xlabel("col")
    ax.set_ylabel("row")
    if title:
        ax.set_title(title)


def show_board(
    board,
    n: int,
    solution=None,
    ax=None,
    cmap="cividis",
    pressed_color="red",
    title=None,
):
    """
    Draw the lit cells of a board. If `solution` is a press pattern, the
    switches to press are outlined; UNSOLVABLE is noted in the title.
    """
    grid = as_board(board, n).reshape(n, n)
    if ax is None:
        _, ax = plt.subplots(figsize=(3.5, 3.5))
    ax.imshow(grid.astype(float), cmap=cmap, vmin=0.0, vmax=1.0)

    if isinstance(solution, Unsolvable):
        title = f"{title} (no solution)" if title else "No solution"
    elif solution is not None:
        _outline(ax, as_board(solution, n), n, pressed_color)

    _style(ax, n, title)
    return ax


def show_solution_pair(board, n: int, solution, titles=("Board", "Presses")):
    """Side-by-side: the board and the press pattern that clears it."""
    _, axes = plt.subplots(1, 2, figsize=(7.2, 3.5), constrained_layout=True)
    show_board(board, n, solution=solution, ax=axes[0], title=titles[0])
    if isinstance(solution, Unsolvable) or solution is None:
        presses = np.zeros(n * n, dtype=bool)
    else:
        presses = as_board(solution, n)
    show_board(presses, n, ax=axes[1], cmap="Reds", title=titles[1])
    return list(axes)
