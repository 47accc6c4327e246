"""JSON read/write; writes go through :func:`atomic_write`."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from .core import atomic_write


def read_json(file_path: Path | str) -> Any:
    """Parse a JSON file.

    Raises:
        FileNotFoundError: the file does not exist
        json.JSONDecodeError: the file is not valid JSON
    """
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"JSON file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def write_json_atomic(
    file_path: Path | str,
    data: Any,
    *,
    indent: int = 2,
    sort_keys: bool = True,
    ensure_ascii: bool = False,
) -> None:
    """Atomically write ``data`` as JSON followed by a newline.

    Pass ``sort_keys=False`` when key order is part of the format.
    """

    def _write(f) -> None:
        json.dump(data, f, indent=indent, sort_keys=sort_keys, ensure_ascii=ensure_ascii)
        f.write("\n")

    atomic_write(Path(file_path), _write)


__all__ = ["read_json", "write_json_atomic"]
