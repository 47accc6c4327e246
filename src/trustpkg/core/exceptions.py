from __future__ import annotations

from typing import Any, Dict, Mapping


class TrustPackageError(Exception):
    """Base exception for trustpkg."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class UsageError(TrustPackageError, ValueError):
    """Raised when a required argument or environment value is missing."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        TrustPackageError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class RuntimeNotFoundError(TrustPackageError, FileNotFoundError):
    """Raised when the container runtime binary is not on PATH."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        TrustPackageError.__init__(self, message, context=context)
        FileNotFoundError.__init__(self, message)


class ContainerRunError(TrustPackageError, RuntimeError):
    """Raised when the container run exits non-zero or times out."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        TrustPackageError.__init__(self, message, context=context)
        RuntimeError.__init__(self, message)


class InstalledVersionError(TrustPackageError):
    """Raised when the container did not report an installed package version."""


class BundleNotFoundError(TrustPackageError, FileNotFoundError):
    """Raised when the extracted certificate bundle is missing."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        TrustPackageError.__init__(self, message, context=context)
        FileNotFoundError.__init__(self, message)


class TrustPackageFormatError(TrustPackageError, ValueError):
    """Raised when a trust package file is not a valid {name, bundle, version} object."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        TrustPackageError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class ValidatorNotFoundError(TrustPackageError, FileNotFoundError):
    """Raised when the validate-trust-package binary cannot be executed."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        TrustPackageError.__init__(self, message, context=context)
        FileNotFoundError.__init__(self, message)


class TrustPackageValidationError(TrustPackageError):
    """Raised when the external validator rejects a trust package."""

    def __init__(
        self,
        message: str,
        *,
        exit_code: int | None = None,
        path: str | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        ctx = dict(context or {})
        if exit_code is not None:
            ctx["exit_code"] = exit_code
        if path:
            ctx["path"] = path
        super().__init__(message, context=ctx)


__all__ = [
    "TrustPackageError",
    "UsageError",
    "RuntimeNotFoundError",
    "ContainerRunError",
    "InstalledVersionError",
    "BundleNotFoundError",
    "TrustPackageFormatError",
    "ValidatorNotFoundError",
    "TrustPackageValidationError",
]
