"""
trustpkg configuration management (YAML layers + environment overrides).
"""
from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

from trustpkg.core.utils.io import iter_yaml_files, read_yaml
from trustpkg.core.utils.merge import deep_merge as _deep_merge
from trustpkg.core.utils.paths import get_project_config_dir, resolve_project_root
from trustpkg.data import get_data_path

logger = logging.getLogger(__name__)

ENV_PREFIX = "TRUSTPKG_"

# Environment variables understood by the original shell tooling.
LEGACY_ENV_ALIASES: Dict[str, Tuple[str, ...]] = {
    "CTR": ("runtime", "command"),
    "BIN_VALIDATE_TRUST_PACKAGE": ("validator", "binary"),
}

# Keys whose env values are kept verbatim; ".2" is a suffix, not a number.
STRING_ENV_KEYS = frozenset({
    ("trust_package", "name"),
    ("trust_package", "version_suffix"),
    ("package", "name"),
})


class ConfigManager:
    """Load and merge trustpkg configuration.

    Configuration sources (highest to lowest priority):
    1. Legacy environment aliases: CTR, BIN_VALIDATE_TRUST_PACKAGE
    2. Environment variables: TRUSTPKG_*
    3. Project-local config: <repo>/.trustpkg/config.local/*.yaml (uncommitted)
    4. Project config: <repo>/.trustpkg/config/*.yaml (alphabetical order)
    5. Bundled defaults: trustpkg.data/config/*.yaml (alphabetical order)
    """

    def __init__(self, repo_root: Optional[Path] = None) -> None:
        self.repo_root = Path(repo_root) if repo_root else resolve_project_root()

        project_root_dir = get_project_config_dir(self.repo_root)

        self.core_config_dir = get_data_path("config")
        self.project_config_dir = project_root_dir / "config"
        self.project_local_config_dir = project_root_dir / "config.local"

    def deep_merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        return _deep_merge(base, override)

    # ---------- environment overrides ----------

    def _as_bool(self, v: str) -> Optional[bool]:
        low = v.strip().lower()
        if low in {"true", "false"}:
            return low == "true"
        return None

    def _as_int(self, v: str) -> Optional[int]:
        if re.fullmatch(r"[-+]?\d+", v.strip() or " "):
            return int(v)
        return None

    def _as_float(self, v: str) -> Optional[float]:
        s = v.strip()
        if re.fullmatch(r"[-+]?\d*\.\d+", s) or re.fullmatch(r"[-+]?\d+\.\d*", s):
            return float(s)
        return None

    def _as_json(self, v: str) -> Optional[Any]:
        s = v.strip()
        if (s.startswith("{") and s.endswith("}")) or (s.startswith("[") and s.endswith("]")):
            try:
                return json.loads(s)
            except json.JSONDecodeError:
                return None
        return None

    def _coerce_type(self, value: str) -> Any:
        for caster in (self._as_bool, self._as_int, self._as_float, self._as_json):
            result = caster(value)
            if result is not None:
                return result
        return value.strip()

    def _parse_env_key(self, raw: str) -> List[str]:
        if not raw:
            return []
        segs = raw.split("__")
        if any(seg == "" for seg in segs):
            raise ValueError(f"Malformed {ENV_PREFIX}* key: empty segment in '{raw}'.")
        return [seg.lower() for seg in segs]

    def _iter_env_overrides(self) -> Iterator[Tuple[List[str], Any]]:
        for key in sorted(os.environ.keys()):
            if not key.startswith(ENV_PREFIX):
                continue
            path = self._parse_env_key(key[len(ENV_PREFIX):])
            if not path:
                continue
            raw_value = os.environ[key]
            if tuple(path) in STRING_ENV_KEYS:
                yield path, raw_value.strip()
            else:
                yield path, self._coerce_type(raw_value)

    def _set_nested(self, root: Dict[str, Any], path: List[str], value: Any) -> None:
        cur: Dict[str, Any] = root
        for part in path[:-1]:
            nxt = cur.get(part)
            if not isinstance(nxt, dict):
                nxt = {}
                cur[part] = nxt
            cur = nxt
        cur[path[-1]] = value

    def apply_env_overrides(self, cfg: Dict[str, Any]) -> None:
        for path, typed_value in self._iter_env_overrides():
            logger.debug("config override from env: %s", ".".join(path))
            self._set_nested(cfg, path, typed_value)

    def apply_legacy_env_aliases(self, cfg: Dict[str, Any]) -> None:
        for env_name, path in LEGACY_ENV_ALIASES.items():
            raw = os.environ.get(env_name)
            # The shell tooling treats an empty value as unset.
            if raw is None or raw == "":
                continue
            self._set_nested(cfg, list(path), raw)

    # ---------- loading ----------

    def _load_directory(self, directory: Path, cfg: Dict[str, Any]) -> Dict[str, Any]:
        for path in iter_yaml_files(directory):
            module_cfg = read_yaml(path, default={}, raise_on_error=True) or {}
            if not isinstance(module_cfg, dict):
                raise ValueError(f"Config file must contain a YAML mapping: {path}")
            cfg = self.deep_merge(cfg, module_cfg)
        return cfg

    def _load_config_uncached(self) -> Dict[str, Any]:
        cfg: Dict[str, Any] = {}
        for directory in (
            self.core_config_dir,
            self.project_config_dir,
            self.project_local_config_dir,
        ):
            cfg = self._load_directory(directory, cfg)

        self.apply_env_overrides(cfg)
        self.apply_legacy_env_aliases(cfg)
        return cfg

    def load_config(self) -> Dict[str, Any]:
        """Return the merged configuration (cached per repo root and env)."""
        from .cache import get_cached_config

        return get_cached_config(repo_root=self.repo_root)

    def get_all(self) -> Dict[str, Any]:
        return self.load_config()

    def get(self, key: str, default: Any = None) -> Any:
        """Look up a dot-notation key (e.g. ``runtime.command``)."""
        cur: Union[Dict[str, Any], Any] = self.load_config()
        for part in [p for p in key.split(".") if p]:
            if not isinstance(cur, dict) or part not in cur:
                return default
            cur = cur[part]
        return cur


__all__ = ["ConfigManager", "ENV_PREFIX", "LEGACY_ENV_ALIASES", "STRING_ENV_KEYS"]
