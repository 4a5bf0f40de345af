"""File-system helpers used by the command layer.

Generators never touch the disk; everything that reads or writes files goes
through these functions.
"""

import json
from pathlib import Path


def file_exists(path: Path) -> bool:
    return path.exists()


def ensure_dir(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path


def write_file(path: Path, content: str) -> Path:
    """Write ``content`` as UTF-8, creating parent directories first."""
    ensure_dir(path.parent)
    path.write_text(content, encoding="utf-8")
    return path


def read_json(path: Path):
    return json.loads(path.read_text(encoding="utf-8"))


def write_json(path: Path, data) -> Path:
    return write_file(path, json.dumps(data, indent=2, ensure_ascii=False) + "\n")


def is_empty_dir(path: Path) -> bool:
    return path.is_dir() and not any(path.iterdir())
