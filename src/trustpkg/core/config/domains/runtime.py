"""Container runtime configuration (``runtime`` section)."""
from __future__ import annotations

from functools import cached_property

from ..base import BaseDomainConfig


class RuntimeConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "runtime"

    @cached_property
    def command(self) -> str:
        """docker CLI compatible runtime binary (``CTR`` overrides)."""
        return str(self.section.get("command") or "docker")

    @cached_property
    def workdir(self) -> str:
        """Mount target for the working directory inside the container."""
        return str(self.section.get("workdir") or "/workdir")

    @cached_property
    def script_name(self) -> str:
        return str(self.section.get("script_name") or "run.sh")


__all__ = ["RuntimeConfig"]
