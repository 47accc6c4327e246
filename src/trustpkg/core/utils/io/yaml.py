"""YAML readers for config layers and schemas."""
from __future__ import annotations

from pathlib import Path
from typing import Any, List

import yaml

YAML_SUFFIXES = (".yaml", ".yml")


def read_yaml(path: Path, default: Any = None, raise_on_error: bool = False) -> Any:
    """Parse a YAML file with ``yaml.safe_load``.

    A missing, empty or unparsable file yields ``default``. With
    ``raise_on_error`` a missing file raises FileNotFoundError and a parse
    failure re-raises ``yaml.YAMLError``; an empty file still yields ``default``.
    """
    p = Path(path)
    if not p.exists():
        if raise_on_error:
            raise FileNotFoundError(f"File not found: {p}")
        return default

    try:
        data = yaml.safe_load(p.read_text(encoding="utf-8"))
    except yaml.YAMLError:
        if raise_on_error:
            raise
        return default
    return default if data is None else data


def iter_yaml_files(dir_path: Path) -> List[Path]:
    """YAML files directly under ``dir_path``, sorted by stem.

    Files are applied in this order, so ``10-base.yaml`` loads before
    ``20-site.yaml``. If ``x.yaml`` and ``x.yml`` both exist only ``x.yaml``
    is returned.
    """
    d = Path(dir_path)
    if not d.is_dir():
        return []
    by_stem = {}
    # .yml first so a same-named .yaml overwrites it.
    for suffix in reversed(YAML_SUFFIXES):
        for p in d.glob(f"*{suffix}"):
            by_stem[p.stem] = p
    return [by_stem[stem] for stem in sorted(by_stem)]


__all__ = ["YAML_SUFFIXES", "read_yaml", "iter_yaml_files"]
