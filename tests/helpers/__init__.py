"""Test helper modules for the trustpkg test suite.

- cache_utils: config/logging cache reset for test isolation
- fakes: executable stand-ins for the container runtime and validator
"""
from __future__ import annotations

from helpers.cache_utils import reset_trustpkg_caches
from helpers.fakes import (
    TEST_BUNDLE,
    FakeRuntime,
    FakeValidator,
    write_fake_runtime,
    write_fake_validator,
)

__all__ = [
    "reset_trustpkg_caches",
    "TEST_BUNDLE",
    "FakeRuntime",
    "FakeValidator",
    "write_fake_runtime",
    "write_fake_validator",
]
