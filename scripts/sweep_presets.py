import argparse
import csv
import logging
import sys
import time
from pathlib import Path

import numpy as np

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from gearbox.algebra import Unsolvable, solve  # noqa: E402
from gearbox.board import lit_count, press_all, scramble  # noqa: E402
from gearbox.difficulty import load_config  # noqa: E402

FIELDNAMES = [
    "difficulty",
    "size",
    "steps",
    "seed",
    "board_id",
    "initial_on",
    "solvable",
    "presses",
    "min_presses",
    "verified",
    "time_ms",
]


def _board_seed(base_seed: int, *coords: int) -> int:
    """Generate deterministic seed for each board."""
    ss = np.random.SeedSequence([int(base_seed)] + [int(c) for c in coords])

    return int(
        ss.generate_state(1, dtype=np.uint64)[0] & np.uint64((1 << 63) - 1)
    )


def sweep_difficulty(difficulty, diff_index: int, n_samples: int, base_seed: int):
    """Scramble and solve `n_samples` boards for one preset."""
    rows = []
    n = difficulty.size
    for board_id in range(n_samples):
        rng = np.random.default_rng(_board_seed(base_seed, diff_index, board_id))
        board = scramble(n, difficulty.steps, rng)

        start_time = time.perf_counter()
        plain = solve(board, n)
        end_time = time.perf_counter()
        minimal = solve(board, n, minimal=True)

        solvable = not isinstance(plain, Unsolvable)
        verified = solvable and lit_count(press_all(board, n, plain)) == 0
        rows.append(
            {
                "difficulty": difficulty.id,
                "size": n,
                "steps": difficulty.steps,
                "seed": base_seed,
                "board_id": board_id,
                "initial_on": lit_count(board),
                "solvable": int(solvable),
                "presses": lit_count(plain) if solvable else "",
                "min_presses": lit_count(minimal) if solvable else "",
                "verified": int(verified),
                "time_ms": (end_time - start_time) * 1000,
            }
        )
    return rows


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument(
        "--config",
        default=str(ROOT / "configs" / "gearbox.yaml"),
    )
    ap.add_argument("--samples", type=int, default=200, help="Boards per preset")
    ap.add_argument("--seed", type=int, default=0)
    ap.add_argument("--out", default="presets.csv", help="Output CSV path")
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    cfg = load_config(args.config)
    total = len(cfg.difficulties)
    start_time = time.time()

    print(f"\nSweeping {total} presets x {args.samples:,} boards...\n")
    unsolved = 0
    with open(args.out, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=FIELDNAMES)
        writer.writeheader()
        for done, difficulty in enumerate(cfg.difficulties, start=1):
            rows = sweep_difficulty(difficulty, done - 1, args.samples, args.seed)
            writer.writerows(rows)
            unsolved += sum(1 for r in rows if not r["verified"])

            elapsed = time.time() - start_time
            print(
                f"\r[progress] {done}/{total} presets ({done / total:>6.1%}) | "
                f"elapsed: {int(elapsed // 60)}m {int(elapsed % 60)}s",
                end="",
                flush=True,
            )
    print()

    if unsolved:
        print(f"[WARN] {unsolved} scrambled boards were not cleared by the solver")
    print(f"Output: {args.out}\n")
    return 1 if unsolved else 0


if __name__ == "__main__":
    sys.exit(main())
