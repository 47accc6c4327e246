"""Package and trust package output configuration.

``package`` describes what is installed inside the container;
``trust_package`` describes the JSON artifact written on the host.
"""
from __future__ import annotations

from functools import cached_property

from ..base import BaseDomainConfig


class PackageConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "package"

    @cached_property
    def name(self) -> str:
        return str(self.section.get("name") or "ca-certificates")

    @cached_property
    def bundle_path(self) -> str:
        return str(self.section.get("bundle_path") or "/etc/ssl/certs/ca-certificates.crt")


class TrustPackageConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "trust_package"

    @cached_property
    def name(self) -> str:
        return str(self.section.get("name") or "cert-manager-debian")

    @cached_property
    def version_suffix(self) -> str:
        # An explicit empty suffix is allowed.
        value = self.section.get("version_suffix", ".1")
        if value is None:
            return ""
        if not isinstance(value, str):
            # Unquoted YAML `.1` parses as the float 0.1.
            raise RuntimeError(
                f"trust_package.version_suffix must be a string (quote it in YAML), got {value!r}"
            )
        return value


__all__ = ["PackageConfig", "TrustPackageConfig"]
