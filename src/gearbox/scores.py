from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Dict, Mapping

logger = logging.getLogger(__name__)


class BestScoreStore:
    """Best (lowest) move count per difficulty id, kept in a JSON file."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def load(self) -> Dict[str, int]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Ignoring unreadable best-score file %s: %s", self.path, exc)
            return {}
        if not isinstance(raw, dict):
            logger.warning("Ignoring best-score file %s: not a JSON object", self.path)
            return {}
        # bool is an int subclass; keep real counts only
        return {
            str(k): v
            for k, v in raw.items()
            if isinstance(v, int) and not isinstance(v, bool) and v >= 0
        }

    def save(self, best_moves: Mapping[str, int]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(dict(best_moves), f, indent=2, sort_keys=True)
        os.replace(tmp, self.path)

    def record(self, difficulty_id: str, moves: int) -> bool:
        """Store `moves` if it beats the saved best. Returns True on improvement."""
        if moves < 0:
            raise ValueError(f"moves must be non-negative, got {moves}")
        best = self.load()
        current = best.get(difficulty_id)
        if current is not None and current <= moves:
            return False
        best[difficulty_id] = int(moves)
        self.save(best)
        return True
