"""Base class for domain-specific configuration accessors."""
from __future__ import annotations

from abc import ABC, abstractmethod
from functools import cached_property
from pathlib import Path
from typing import Any, Dict, Optional

from .cache import get_cached_config


class BaseDomainConfig(ABC):
    """Abstract base class for domain-specific configuration accessors.

    Usage:
        class MyConfig(BaseDomainConfig):
            def _config_section(self) -> str:
                return "my_section"

            @cached_property
            def my_setting(self) -> str:
                return self.section.get("my_setting", "default")

        cfg = MyConfig(repo_root=Path("/path/to/project"))
        print(cfg.my_setting)
    """

    def __init__(self, repo_root: Optional[Path] = None) -> None:
        self._repo_root = repo_root
        self._config = get_cached_config(repo_root=repo_root)

    @property
    def repo_root(self) -> Path:
        if self._repo_root:
            return Path(self._repo_root)

        from trustpkg.core.utils.paths import resolve_project_root
        return resolve_project_root()

    @abstractmethod
    def _config_section(self) -> str:
        """Return the top-level config key for this domain."""
        ...

    @cached_property
    def section(self) -> Dict[str, Any]:
        """This domain's configuration section, or an empty dict."""
        return self._config.get(self._config_section(), {}) or {}


__all__ = ["BaseDomainConfig"]
