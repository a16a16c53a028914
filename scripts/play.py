import argparse
import logging
import sys
from pathlib import Path

import numpy as np

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from gearbox.algebra import Unsolvable  # noqa: E402
from gearbox.board import BoardShapeError  # noqa: E402
from gearbox.difficulty import DEFAULT_DIFFICULTY_ID, get_difficulty, load_config  # noqa: E402
from gearbox.scores import BestScoreStore  # noqa: E402
from gearbox import session as gs  # noqa: E402

HELP = "commands: <row> <col> | n(ew) | r(eset) | s(olution) | d <id> | q(uit)"


def render(sess: gs.Session) -> str:
    n = sess.difficulty.size
    grid = sess.board.reshape(n, n)
    hint = None
    if sess.show_solution and not isinstance(sess.solution, Unsolvable):
        hint = sess.solution.reshape(n, n)

    lines = ["   " + " ".join(str(c) for c in range(n))]
    for r in range(n):
        cells = []
        for c in range(n):
            ch = "#" if grid[r, c] else "."
            if hint is not None and hint[r, c]:
                ch = "*" if grid[r, c] else "o"
            cells.append(ch)
        lines.append(f"{r:>2} " + " ".join(cells))

    best = gs.best_for(sess)
    lines.append(
        f"{sess.difficulty.label} | Panel #{sess.scramble_count} | "
        f"Moves {sess.moves} | Best {best if best is not None else '--'} | "
        f"Lit {gs.lit(sess)}"
    )
    if sess.show_solution and sess.solution_message:
        lines.append(sess.solution_message)
    lines.append(gs.status_line(sess))
    return "\n".join(lines)


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--config", default=str(ROOT / "configs" / "gearbox.yaml"))
    ap.add_argument("--difficulty", default=DEFAULT_DIFFICULTY_ID)
    ap.add_argument("--seed", type=int, default=None)
    ap.add_argument("--scores", default=None, help="Best-score JSON path")
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    cfg = load_config(args.config)
    store = BestScoreStore(args.scores or cfg.scores_path)
    rng = np.random.default_rng(args.seed)

    sess = gs.start_session(
        get_difficulty(args.difficulty, cfg.difficulties),
        rng=rng,
        best_moves=store.load(),
    )
    print(HELP)

    while True:
        print()
        print(render(sess))
        try:
            line = input("> ").strip().lower()
        except EOFError:
            break
        if not line:
            continue
        parts = line.split()
        cmd = parts[0]

        if cmd in ("q", "quit"):
            break
        elif cmd in ("n", "new"):
            sess = gs.new_puzzle(sess, rng)
        elif cmd in ("r", "reset"):
            sess = gs.reset(sess, rng)
        elif cmd in ("s", "solution"):
            sess = gs.toggle_solution(sess)
        elif cmd in ("d", "difficulty") and len(parts) == 2:
            sess = gs.select_difficulty(
                sess, get_difficulty(parts[1], cfg.difficulties), rng
            )
        elif len(parts) == 2 and all(p.isdigit() for p in parts):
            was_solved = gs.is_solved(sess)
            try:
                sess = gs.apply_move(sess, int(parts[0]), int(parts[1]))
            except BoardShapeError as exc:
                print(f"[error] {exc}")
                continue
            if gs.is_solved(sess) and not was_solved:
                if store.record(sess.difficulty.id, sess.moves):
                    print(f"New best: {sess.moves} moves")
                print("Congratulations! You killed every light.")
        else:
            print(HELP)


if __name__ == "__main__":
    main()
