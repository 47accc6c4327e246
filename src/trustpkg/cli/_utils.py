"""Shared CLI utility functions."""
from __future__ import annotations

import argparse
from pathlib import Path

from trustpkg.core.utils.paths import resolve_project_root


def get_repo_root(args: argparse.Namespace) -> Path:
    """Get project root from ``--repo-root`` or auto-detect."""
    if getattr(args, "repo_root", None):
        return Path(args.repo_root).expanduser().resolve()
    return resolve_project_root()


__all__ = ["get_repo_root"]
