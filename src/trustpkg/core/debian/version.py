"""Version handling for Debian trust packages.

A trust package version is the installed Debian package version plus a fixed
suffix, e.g. ``20230311`` + ``.1``. When a trust package version is requested
explicitly, the suffix (the last dot component) is stripped to recover the
Debian package version to install.
"""
from __future__ import annotations

from typing import Optional


def strip_patch_version(version: str) -> str:
    """Remove the last ``.``-separated component.

    >>> strip_patch_version("20230311.1")
    '20230311'
    >>> strip_patch_version("20230311deb12u1.2")
    '20230311deb12u1'
    >>> strip_patch_version("20230311")
    '20230311'
    """
    head, sep, _ = version.rpartition(".")
    return head if sep else version


def normalize_target_version(target_version: Optional[str]) -> Optional[str]:
    """Return the package version to pin, or None to install the latest."""
    if target_version is None or not target_version.strip():
        return None
    pinned = strip_patch_version(target_version.strip())
    # `.1` strips to nothing; the shell tooling then installs the latest.
    return pinned or None


def install_target(package: str, target_version: Optional[str]) -> str:
    """apt-get install argument: ``package`` or ``package=<version>``."""
    pinned = normalize_target_version(target_version)
    if pinned is None:
        return package
    return f"{package}={pinned}"


def bundle_version(installed_version: str, suffix: str) -> str:
    return f"{installed_version}{suffix}"


__all__ = ["strip_patch_version", "normalize_target_version", "install_target", "bundle_version"]
