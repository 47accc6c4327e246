"""Runs the external validate-trust-package binary."""
from __future__ import annotations

import logging
import shlex
import subprocess
from pathlib import Path
from typing import Any, List, Optional

from trustpkg.core.exceptions import (
    TrustPackageValidationError,
    UsageError,
    ValidatorNotFoundError,
)
from trustpkg.core.utils.subprocess import run_with_timeout

logger = logging.getLogger(__name__)

VALIDATOR_UNSET_MESSAGE = (
    "BIN_VALIDATE_TRUST_PACKAGE must be set to the path of the validate-trust-package binary"
)


class TrustPackageValidator:
    """Feeds a trust package file to the validator on stdin.

    ``binary`` may carry arguments (``"/usr/bin/validate --strict"``); it is
    split with shell quoting rules.
    """

    def __init__(self, binary: str, *, repo_root: Optional[Path] = None) -> None:
        if not binary or not binary.strip():
            raise UsageError(VALIDATOR_UNSET_MESSAGE)
        self.binary = binary
        self.repo_root = repo_root

    @property
    def argv(self) -> List[str]:
        return shlex.split(self.binary)

    def validate(self, path: Path | str, **kwargs: Any) -> None:
        """Validate ``path``; returns None when the validator exits 0.

        Raises:
            ValidatorNotFoundError: if the binary cannot be executed
            TrustPackageValidationError: on non-zero exit or timeout
        """
        src = Path(path)
        argv = self.argv
        logger.info("validating %s with %s", src, argv[0])
        with open(src, "rb") as stdin:
            try:
                proc = run_with_timeout(
                    argv,
                    timeout_type="validate",
                    repo_root=self.repo_root,
                    stdin=stdin,
                    check=False,
                    **kwargs,
                )
            except FileNotFoundError as exc:
                raise ValidatorNotFoundError(
                    f"validator not found: {argv[0]}",
                    context={"binary": self.binary},
                ) from exc
            except PermissionError as exc:
                raise ValidatorNotFoundError(
                    f"validator is not executable: {argv[0]}",
                    context={"binary": self.binary},
                ) from exc
            except subprocess.TimeoutExpired as exc:
                raise TrustPackageValidationError(
                    f"validator timed out after {exc.timeout}s",
                    path=str(src),
                ) from exc

        if proc.returncode != 0:
            raise TrustPackageValidationError(
                f"trust package {src} failed validation (exit code {proc.returncode})",
                exit_code=proc.returncode,
                path=str(src),
            )


__all__ = ["TrustPackageValidator", "VALIDATOR_UNSET_MESSAGE"]
