"""Project root and config directory resolution.

The project root is where ``.trustpkg/`` lives. Resolution walks up from the
current directory looking for it and falls back to the current directory, so
the CLI works from anywhere with bundled defaults only.
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional

PROJECT_CONFIG_DIR = ".trustpkg"


def resolve_project_root(start: Optional[Path] = None) -> Path:
    """Return the nearest ancestor of ``start`` (default: cwd) holding ``.trustpkg/``."""
    cwd = Path(start or Path.cwd()).expanduser().resolve()
    for candidate in (cwd, *cwd.parents):
        if (candidate / PROJECT_CONFIG_DIR).is_dir():
            return candidate
    return cwd


def get_project_config_dir(repo_root: Path) -> Path:
    return Path(repo_root) / PROJECT_CONFIG_DIR


__all__ = ["PROJECT_CONFIG_DIR", "resolve_project_root", "get_project_config_dir"]
