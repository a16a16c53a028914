import csv
import importlib.util
import sys
from pathlib import Path

import pytest

from gearbox.difficulty import Difficulty

ROOT = Path(__file__).resolve().parents[1]


@pytest.fixture(scope="module")
def sweep():
    spec = importlib.util.spec_from_file_location(
        "sweep_presets", ROOT / "scripts" / "sweep_presets.py"
    )
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_sweep_difficulty_rows(sweep):
    rows = sweep.sweep_difficulty(Difficulty("easy", "Easy 4x4", 4, 8), 0, 5, 42)
    assert len(rows) == 5
    assert [r["board_id"] for r in rows] == list(range(5))
    for r in rows:
        assert r["solvable"] == 1
        assert r["verified"] == 1
        assert r["min_presses"] <= r["presses"]


def test_sweep_is_deterministic(sweep):
    d = Difficulty("normal", "Normal 5x5", 5, 14)
    a = sweep.sweep_difficulty(d, 1, 4, 7)
    b = sweep.sweep_difficulty(d, 1, 4, 7)
    assert [r["initial_on"] for r in a] == [r["initial_on"] for r in b]


def test_main_writes_csv(sweep, tmp_path, monkeypatch):
    out = tmp_path / "presets.csv"
    monkeypatch.setattr(
        sys, "argv", ["sweep_presets.py", "--samples", "3", "--out", str(out)]
    )
    assert sweep.main() == 0
    with open(out, newline="", encoding="utf-8") as f:
        rows = list(csv.DictReader(f))
    assert len(rows) == 9
    assert {r["difficulty"] for r in rows} == {"easy", "normal", "hard"}
