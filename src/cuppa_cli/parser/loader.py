"""Load spec documents from disk.

JSON and YAML are both accepted; the extension decides which parser runs
first.
"""

import json
from pathlib import Path

import yaml

from cuppa_cli.errors import SpecError

YAML_SUFFIXES = (".yaml", ".yml")


def load_document(file_path: Path) -> dict:
    """Read a JSON or YAML spec file into a plain mapping."""
    if not file_path.exists():
        raise SpecError(f"Specification file not found: {file_path}")

    text = file_path.read_text(encoding="utf-8")
    try:
        if file_path.suffix.lower() in YAML_SUFFIXES:
            data = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise SpecError(f"Could not parse {file_path.name}: {_first_line(e)}") from e

    if not isinstance(data, dict):
        raise SpecError(f"{file_path.name} must contain an object at the top level")
    return data


def find_schema_files(source: Path, name: str | None = None) -> list[Path]:
    """JSON schema files under ``source`` (or ``source`` itself), optionally filtered by model name."""
    if not source.is_dir():
        return [source]

    files = sorted(source.glob("*.json"))
    if name:
        files = [f for f in files if name.lower() in (f.stem.lower(), _schema_stem(f).lower())]
    return files


def _schema_stem(file_path: Path) -> str:
    # User.schema.json -> User
    return file_path.name.split(".")[0]


def _first_line(error: Exception) -> str:
    return str(error).strip().splitlines()[0] if str(error).strip() else type(error).__name__
