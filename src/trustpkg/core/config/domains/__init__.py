"""Domain-specific configuration accessors."""
from __future__ import annotations

from .logging import LoggingConfig
from .package import PackageConfig, TrustPackageConfig
from .runtime import RuntimeConfig
from .timeouts import TimeoutsConfig
from .validator import ValidatorConfig

__all__ = [
    "LoggingConfig",
    "PackageConfig",
    "RuntimeConfig",
    "TimeoutsConfig",
    "TrustPackageConfig",
    "ValidatorConfig",
]
