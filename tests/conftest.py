"""Import paths for the src/ packages and the shared vectors module."""

from __future__ import annotations

import sys
from pathlib import Path

TESTS_DIR = Path(__file__).resolve().parent


def _ensure_on_path(path: Path) -> None:
    value = str(path)
    if value not in sys.path:
        sys.path.insert(0, value)


_ensure_on_path(TESTS_DIR.parent / "src")
_ensure_on_path(TESTS_DIR)
