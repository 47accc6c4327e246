"""Layered YAML configuration for trustpkg.

Sources (lowest to highest priority):
1. Bundled defaults: trustpkg.data/config/*.yaml
2. Project config: <repo>/.trustpkg/config/*.yaml
3. Project-local config: <repo>/.trustpkg/config.local/*.yaml
4. Environment overrides: TRUSTPKG_<SECTION>__<KEY>
5. Legacy environment aliases: CTR, BIN_VALIDATE_TRUST_PACKAGE
"""
from __future__ import annotations

from .base import BaseDomainConfig
from .cache import clear_all_caches, get_cached_config
from .manager import ConfigManager

__all__ = [
    "BaseDomainConfig",
    "ConfigManager",
    "clear_all_caches",
    "get_cached_config",
]
