"""Debian trust package fetching.

Public API:
- fetch_trust_package: install ca-certificates in a container and package the bundle
- TrustPackage: the {name, bundle, version} artifact
- ContainerRuntime / TrustPackageValidator: the two external programs driven
"""
from __future__ import annotations

from .fetch import FetchRequest, FetchResult, FetchSettings, fetch_trust_package
from .package import TRUST_PACKAGE_SCHEMA, TrustPackage
from .runtime import ContainerRuntime
from .script import render_install_script
from .validator import TrustPackageValidator
from .version import bundle_version, install_target, normalize_target_version, strip_patch_version

__all__ = [
    "FetchRequest",
    "FetchResult",
    "FetchSettings",
    "fetch_trust_package",
    "TRUST_PACKAGE_SCHEMA",
    "TrustPackage",
    "ContainerRuntime",
    "render_install_script",
    "TrustPackageValidator",
    "bundle_version",
    "install_target",
    "normalize_target_version",
    "strip_patch_version",
]
