"""Fetch the latest (or a pinned) ca-certificates bundle as a trust package.

Flow:
1. Install the package in a fresh container of the Debian source image.
   There is no reliable way to ask apt for the latest installable version,
   so we install what apt picks and read back what we got.
2. Copy the installed version and bundle out through a bind-mounted
   temporary directory.
3. Write ``{name, bundle, version}`` to the destination and run the external
   validator on it.

The temporary directory is removed whether or not any step fails.
"""
from __future__ import annotations

import logging
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from trustpkg.core.config.domains import (
    PackageConfig,
    RuntimeConfig,
    TrustPackageConfig,
    ValidatorConfig,
)
from trustpkg.core.exceptions import BundleNotFoundError, InstalledVersionError, UsageError
from trustpkg.core.utils.io import read_text

from .package import TrustPackage
from .runtime import ContainerRuntime
from .script import BUNDLE_FILE, VERSION_FILE, render_install_script
from .validator import VALIDATOR_UNSET_MESSAGE, TrustPackageValidator
from .version import bundle_version, install_target, normalize_target_version

logger = logging.getLogger(__name__)

ProgressFn = Callable[[str], None]


@dataclass(frozen=True)
class FetchRequest:
    source_image: str
    destination: Path | str
    target_version: Optional[str] = None


@dataclass(frozen=True)
class FetchSettings:
    """Resolved configuration for one fetch."""

    runtime_command: str = "docker"
    workdir: str = "/workdir"
    script_name: str = "run.sh"
    package: str = "ca-certificates"
    bundle_path: str = "/etc/ssl/certs/ca-certificates.crt"
    trust_package_name: str = "cert-manager-debian"
    version_suffix: str = ".1"
    validator_binary: str = ""
    repo_root: Optional[Path] = None

    @classmethod
    def from_config(
        cls,
        repo_root: Optional[Path] = None,
        *,
        runtime_command: Optional[str] = None,
        validator_binary: Optional[str] = None,
    ) -> "FetchSettings":
        """Build settings from layered config; explicit arguments win."""
        runtime = RuntimeConfig(repo_root=repo_root)
        package = PackageConfig(repo_root=repo_root)
        trust = TrustPackageConfig(repo_root=repo_root)
        validator = ValidatorConfig(repo_root=repo_root)
        return cls(
            runtime_command=runtime_command or runtime.command,
            workdir=runtime.workdir,
            script_name=runtime.script_name,
            package=package.name,
            bundle_path=package.bundle_path,
            trust_package_name=trust.name,
            version_suffix=trust.version_suffix,
            validator_binary=validator_binary or validator.binary,
            repo_root=repo_root,
        )


@dataclass
class FetchResult:
    source_image: str
    destination: Path
    install_target: str
    installed_version: str = ""
    version: str = ""
    dry_run: bool = False
    script: str = ""
    container_argv: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "source_image": self.source_image,
            "destination": str(self.destination),
            "install_target": self.install_target,
            "dry_run": self.dry_run,
        }
        if self.dry_run:
            data["script"] = self.script
            data["container_argv"] = list(self.container_argv)
        else:
            data["installed_version"] = self.installed_version
            data["version"] = self.version
        return data


def check_inputs(request: FetchRequest, settings: FetchSettings, *, dry_run: bool = False) -> None:
    """Fail fast on missing inputs, in the order the shell tooling checked them.

    Raises:
        RuntimeNotFoundError: runtime binary missing (skipped for dry runs)
        UsageError: validator unset (skipped for dry runs), image or destination missing
    """
    if not dry_run:
        ContainerRuntime(settings.runtime_command).resolve()
        if not settings.validator_binary:
            raise UsageError(VALIDATOR_UNSET_MESSAGE)
    if not request.source_image:
        raise UsageError("debian source image must be specified")
    if not request.destination or not str(request.destination).strip():
        raise UsageError("destination file must be specified")


def _read_installed_version(work_dir: Path) -> str:
    path = work_dir / VERSION_FILE
    if not path.exists():
        raise InstalledVersionError(
            f"container did not write {VERSION_FILE}",
            context={"path": str(path)},
        )
    try:
        version = read_text(path).strip()
    except UnicodeDecodeError as exc:
        raise InstalledVersionError(
            f"{VERSION_FILE} is not valid UTF-8", context={"path": str(path)}
        ) from exc
    if not version:
        raise InstalledVersionError(f"{VERSION_FILE} is empty", context={"path": str(path)})
    return version


def _read_bundle(work_dir: Path) -> str:
    path = work_dir / BUNDLE_FILE
    if not path.exists():
        raise BundleNotFoundError(
            f"container did not export {BUNDLE_FILE}",
            context={"path": str(path)},
        )
    try:
        return read_text(path)
    except UnicodeDecodeError as exc:
        raise BundleNotFoundError(
            f"{BUNDLE_FILE} is not valid UTF-8", context={"path": str(path)}
        ) from exc


def fetch_trust_package(
    request: FetchRequest,
    settings: FetchSettings,
    *,
    dry_run: bool = False,
    progress: Optional[ProgressFn] = None,
    **run_kwargs: Any,
) -> FetchResult:
    """Produce and validate a trust package at ``request.destination``.

    ``run_kwargs`` are forwarded to the container run (e.g. ``stdout=`` to
    keep apt output off stdout in JSON mode); ``stdout`` also applies to the
    validator.
    """

    def _emit(message: str) -> None:
        logger.info(message)
        if progress is not None:
            progress(message)

    check_inputs(request, settings, dry_run=dry_run)

    pinned = normalize_target_version(request.target_version)
    if pinned is None:
        _emit("no target version specified, will use the latest version")
    else:
        _emit(f"target {settings.package} version specified: {pinned}")

    target = install_target(settings.package, request.target_version)
    script = render_install_script(
        target,
        package=settings.package,
        bundle_path=settings.bundle_path,
        workdir=settings.workdir,
    )
    runtime = ContainerRuntime(
        settings.runtime_command,
        workdir=settings.workdir,
        repo_root=settings.repo_root,
    )
    result = FetchResult(
        source_image=request.source_image,
        destination=Path(request.destination),
        install_target=target,
        dry_run=dry_run,
    )

    if dry_run:
        result.script = script
        result.container_argv = runtime.run_argv(
            request.source_image, Path("<tmpdir>"), settings.script_name
        )
        return result

    validator = TrustPackageValidator(settings.validator_binary, repo_root=settings.repo_root)

    _emit(f"+++ fetching latest version of {settings.package} package")

    with tempfile.TemporaryDirectory(prefix="trustpkg-") as tmp:
        work_dir = Path(tmp)
        (work_dir / settings.script_name).write_text(script, encoding="utf-8")

        runtime.run(request.source_image, work_dir, settings.script_name, **run_kwargs)

        installed = _read_installed_version(work_dir)
        bundle = _read_bundle(work_dir)

    result.installed_version = installed
    result.version = bundle_version(installed, settings.version_suffix)
    logger.info("installed %s %s", settings.package, installed)

    package = TrustPackage(
        name=settings.trust_package_name,
        bundle=bundle,
        version=result.version,
    )
    package.write(result.destination, repo_root=settings.repo_root)
    logger.info("wrote trust package %s to %s", result.version, result.destination)

    validator.validate(result.destination, stdout=run_kwargs.get("stdout"))
    return result


__all__ = [
    "FetchRequest",
    "FetchResult",
    "FetchSettings",
    "check_inputs",
    "fetch_trust_package",
]
