from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Sequence, Tuple

import yaml


@dataclass(frozen=True)
class Difficulty:
    id: str
    label: str
    size: int
    steps: int


DIFFICULTIES: Tuple[Difficulty, ...] = (
    Difficulty("easy", "Easy 4x4", 4, 8),
    Difficulty("normal", "Normal 5x5", 5, 14),
    Difficulty("hard", "Hard 6x6", 6, 22),
)

DEFAULT_DIFFICULTY_ID = "normal"
DEFAULT_SCORES_PATH = "~/.gearbox/best_moves.json"


@dataclass(frozen=True)
class GearboxConfig:
    difficulties: Tuple[Difficulty, ...] = DIFFICULTIES
    scores_path: Path = Path(DEFAULT_SCORES_PATH).expanduser()


def get_difficulty(
    difficulty_id: str, catalog: Sequence[Difficulty] = DIFFICULTIES
) -> Difficulty:
    """Look up a preset by id, falling back to the default preset."""
    if not catalog:
        raise ValueError("Difficulty catalog is empty")
    for difficulty in catalog:
        if difficulty.id == difficulty_id:
            return difficulty
    for difficulty in catalog:
        if difficulty.id == DEFAULT_DIFFICULTY_ID:
            return difficulty
    return catalog[0]


def parse_difficulties(items) -> Tuple[Difficulty, ...]:
    """Parse difficulty entries from YAML."""
    if not isinstance(items, list) or not items:
        raise ValueError("'difficulties' must be a non-empty list")
    parsed = []
    seen = set()
    for item in items:
        if not isinstance(item, dict) or "id" not in item:
            raise ValueError(f"Invalid difficulty spec: {item}")
        try:
            d = Difficulty(
                id=str(item["id"]),
                label=str(item.get("label", item["id"])),
                size=int(item["size"]),
                steps=int(item["steps"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise ValueError(f"Invalid difficulty spec: {item}") from exc
        if d.size < 1:
            raise ValueError(f"Difficulty '{d.id}': size must be >= 1")
        if d.steps < 0:
            raise ValueError(f"Difficulty '{d.id}': steps must be >= 0")
        if d.id in seen:
            raise ValueError(f"Duplicate difficulty id: {d.id}")
        seen.add(d.id)
        parsed.append(d)
    return tuple(parsed)


def load_config(path: str | Path | None = None) -> GearboxConfig:
    """Read a `gearbox:` YAML document; defaults when `path` is None."""
    if path is None:
        return GearboxConfig()

    with open(path, "r", encoding="utf-8") as f:
        doc = yaml.safe_load(f) or {}
    if not isinstance(doc, dict) or not isinstance(doc.get("gearbox"), dict):
        raise ValueError(f"{path}: expected a top-level 'gearbox' mapping")
    cfg = doc["gearbox"]

    difficulties = DIFFICULTIES
    if "difficulties" in cfg:
        difficulties = parse_difficulties(cfg["difficulties"])
    scores_path = Path(str(cfg.get("scores_path", DEFAULT_SCORES_PATH)))
    return GearboxConfig(
        difficulties=difficulties, scores_path=scores_path.expanduser()
    )


def load_difficulties(path: str | Path) -> Tuple[Difficulty, ...]:
    return load_config(path).difficulties
