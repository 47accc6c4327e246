"""The trust package artifact: ``{"name", "bundle", "version"}``."""
from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from trustpkg.core.exceptions import TrustPackageFormatError
from trustpkg.core.schemas import SchemaValidationError, validate_payload
from trustpkg.core.utils.io import read_json, write_json_atomic

TRUST_PACKAGE_SCHEMA = "trust-package.schema.yaml"


@dataclass(frozen=True)
class TrustPackage:
    name: str
    bundle: str
    version: str

    def to_dict(self) -> Dict[str, str]:
        # Key order matches what validate-trust-package consumers expect to diff.
        return {"name": self.name, "bundle": self.bundle, "version": self.version}

    def validate(self, *, repo_root: Optional[Path] = None) -> None:
        """Check the payload against the bundled trust package schema."""
        check_payload(self.to_dict(), repo_root=repo_root)

    def write(self, path: Path | str, *, repo_root: Optional[Path] = None) -> Path:
        """Validate and atomically write the package as JSON."""
        self.validate(repo_root=repo_root)
        dest = Path(path)
        write_json_atomic(dest, self.to_dict(), sort_keys=False)
        return dest

    @classmethod
    def load(cls, path: Path | str, *, repo_root: Optional[Path] = None) -> "TrustPackage":
        try:
            data = read_json(path)
        except json.JSONDecodeError as exc:
            raise TrustPackageFormatError(
                f"{path} is not valid JSON: {exc}", context={"path": str(path)}
            ) from exc
        check_payload(data, repo_root=repo_root, path=str(path))
        return cls(name=data["name"], bundle=data["bundle"], version=data["version"])


def check_payload(payload: Any, *, repo_root: Optional[Path] = None, path: str | None = None) -> None:
    try:
        validate_payload(payload, TRUST_PACKAGE_SCHEMA, repo_root=repo_root)
    except SchemaValidationError as exc:
        ctx: Dict[str, Any] = {"errors": exc.errors}
        if path:
            ctx["path"] = path
        raise TrustPackageFormatError(str(exc), context=ctx) from exc


__all__ = ["TRUST_PACKAGE_SCHEMA", "TrustPackage", "check_payload"]
