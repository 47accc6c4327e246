"""Centralized configuration caching.

Domain configs share one loaded config dict per repo root. The cache key
fingerprints the relevant environment variables and project config file
mtimes so changes made by tests or long-running callers are picked up.
"""
from __future__ import annotations

import hashlib
import os
from pathlib import Path
from typing import Any, Dict, Optional

from trustpkg.core.utils.io import iter_yaml_files
from trustpkg.core.utils.paths import get_project_config_dir, resolve_project_root

_config_cache: Dict[str, Dict[str, Any]] = {}


def _normalize_repo_root(repo_root: Optional[Path]) -> Path:
    if repo_root is None:
        return resolve_project_root()
    return Path(repo_root).expanduser().resolve()


def _fingerprint_dir(d: Path) -> list[tuple[str, int, int]]:
    files: list[tuple[str, int, int]] = []
    for p in iter_yaml_files(d):
        st = p.stat()
        files.append((p.name, int(st.st_mtime_ns), int(st.st_size)))
    return files


def _cache_key(repo_root: Path) -> str:
    from .manager import ENV_PREFIX, LEGACY_ENV_ALIASES

    env_items = sorted(
        (k, os.environ.get(k, ""))
        for k in os.environ.keys()
        if k.startswith(ENV_PREFIX) or k in LEGACY_ENV_ALIASES
    )
    env_fp = hashlib.sha256(repr(env_items).encode("utf-8")).hexdigest()[:12]

    project_dir = get_project_config_dir(repo_root)
    cfg_files = {
        "project": _fingerprint_dir(project_dir / "config"),
        "project_local": _fingerprint_dir(project_dir / "config.local"),
    }
    cfg_fp = hashlib.sha256(repr(cfg_files).encode("utf-8")).hexdigest()[:12]

    return f"{repo_root}:env={env_fp}:cfg={cfg_fp}"


def get_cached_config(repo_root: Optional[Path] = None) -> Dict[str, Any]:
    """Get configuration with caching.

    NOTE: returns the cached dict instance; treat it as immutable.
    """
    normalized_root = _normalize_repo_root(repo_root)
    key = _cache_key(normalized_root)

    if key not in _config_cache:
        from .manager import ConfigManager

        manager = ConfigManager(repo_root=normalized_root)
        _config_cache[key] = manager._load_config_uncached()
    return _config_cache[key]


def clear_all_caches() -> None:
    """Clear the config cache (call after editing config files in-process)."""
    _config_cache.clear()


def is_cached(repo_root: Optional[Path] = None) -> bool:
    return _cache_key(_normalize_repo_root(repo_root)) in _config_cache


__all__ = ["get_cached_config", "clear_all_caches", "is_cached"]
