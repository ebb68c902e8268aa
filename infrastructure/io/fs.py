"""Filesystem utility functions."""

import json
from pathlib import Path
from typing import Any


def ensure_exists(path: Path, what: str) -> None:
    """
    Raise FileNotFoundError naming `what` when `path` is missing.

    Args:
        path: Path to check
        what: Description used in the error message (e.g. "session identity file")
    """
    if not path.exists():
        raise FileNotFoundError(f"Missing {what} at: {path}")


def read_text(path: Path) -> str:
    """Read a UTF-8 text file, stripped of surrounding whitespace."""
    return path.read_text(encoding="utf-8").strip()


def write_json(path: Path, data: Any) -> Path:
    """Write `data` as indented UTF-8 JSON, creating parent directories. Returns `path`."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)
    return path
