from __future__ import annotations

from pathlib import Path

BASE_DIR = Path(__file__).resolve().parents[2]
INPUT_DIR = BASE_DIR / "inputs"
DEFAULT_TREE_FILE = INPUT_DIR / "technologies.txt"

DEFAULT_POINTS = 25
MAX_POINTS = 10_000
