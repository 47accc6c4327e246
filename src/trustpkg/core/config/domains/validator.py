"""External validator configuration (``validator`` section)."""
from __future__ import annotations

from functools import cached_property

from ..base import BaseDomainConfig


class ValidatorConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "validator"

    @cached_property
    def binary(self) -> str:
        """Path (plus optional arguments) of validate-trust-package; empty if unset."""
        return str(self.section.get("binary") or "").strip()


__all__ = ["ValidatorConfig"]
