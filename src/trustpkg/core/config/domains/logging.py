"""Domain-specific configuration for file logging."""
from __future__ import annotations

from functools import cached_property
from pathlib import Path

from ..base import BaseDomainConfig


class LoggingConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "logging"

    @cached_property
    def enabled(self) -> bool:
        return bool(self.section.get("enabled", False))

    @cached_property
    def level(self) -> str:
        return str(self.section.get("level") or "INFO").upper()

    @cached_property
    def log_path(self) -> Path:
        """Log file path; relative paths resolve against the repo root."""
        raw = Path(str(self.section.get("path") or ".trustpkg/logs/trustpkg.log")).expanduser()
        return raw if raw.is_absolute() else self.repo_root / raw


__all__ = ["LoggingConfig"]
