"""Domain-specific configuration for subprocess timeouts."""
from __future__ import annotations

from functools import cached_property
from typing import Dict

from ..base import BaseDomainConfig

_REQUIRED_TIMEOUT_KEYS = (
    "container_run_seconds",
    "validate_seconds",
    "default_seconds",
)


class TimeoutsConfig(BaseDomainConfig):
    """Typed, cached access to the ``timeouts`` section."""

    def _config_section(self) -> str:
        return "timeouts"

    def _validate_required_keys(self) -> None:
        if not self.section:
            raise RuntimeError("timeouts section missing from configuration")

        for key in _REQUIRED_TIMEOUT_KEYS:
            if key not in self.section:
                raise RuntimeError(f"timeouts.{key} missing from configuration")

    @cached_property
    def container_run_seconds(self) -> float:
        self._validate_required_keys()
        return float(self.section["container_run_seconds"])

    @cached_property
    def validate_seconds(self) -> float:
        self._validate_required_keys()
        return float(self.section["validate_seconds"])

    @cached_property
    def default_seconds(self) -> float:
        self._validate_required_keys()
        return float(self.section["default_seconds"])

    def get_all_settings(self) -> Dict[str, float]:
        self._validate_required_keys()
        return {key: float(self.section[key]) for key in _REQUIRED_TIMEOUT_KEYS}


__all__ = ["TimeoutsConfig"]
