"""Shared schema validation utilities.

Payloads are validated using JSON Schema. Schemas are stored as YAML files
and resolved in priority order:
1) Project schemas: ``<repo>/.trustpkg/schemas/``
2) Bundled defaults: ``trustpkg.data/schemas/``
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional

import jsonschema
from jsonschema import Draft202012Validator

from trustpkg.core.utils.io import read_yaml
from trustpkg.core.utils.paths import get_project_config_dir
from trustpkg.data import get_data_path


class SchemaValidationError(ValueError):
    """Raised when schema validation fails."""

    def __init__(self, message: str, errors: Optional[List[str]] = None) -> None:
        super().__init__(message)
        self.errors = list(errors or [])


def _iter_schema_dirs(repo_root: Optional[Path] = None) -> List[Path]:
    roots: List[Path] = []
    if repo_root is not None:
        roots.append(get_project_config_dir(repo_root) / "schemas")
    roots.append(get_data_path("schemas"))
    return roots


def load_schema(schema_name: str, *, repo_root: Optional[Path] = None) -> Dict[str, Any]:
    """Load a schema dict from project or bundled schema directories.

    Automatically appends ``.yaml`` if no extension is present.

    Raises:
        FileNotFoundError: If schema file doesn't exist.
        ValueError: If schema is not a YAML mapping.
    """
    lowered = schema_name.lower()
    if not (lowered.endswith(".yaml") or lowered.endswith(".yml")):
        schema_name = f"{schema_name}.yaml"

    schema_path: Optional[Path] = None
    for schemas_dir in _iter_schema_dirs(repo_root):
        candidate = schemas_dir / schema_name
        if candidate.exists():
            schema_path = candidate
            break

    if schema_path is None:
        searched = "\n".join(f"- {p}" for p in _iter_schema_dirs(repo_root))
        raise FileNotFoundError(f"Schema not found: {schema_name}\nSearched:\n{searched}")

    schema = read_yaml(schema_path, default=None, raise_on_error=True)
    if not isinstance(schema, dict):
        raise ValueError(f"Schema must be a YAML mapping, got {type(schema).__name__}")
    return schema


def validate_payload_safe(
    payload: Any,
    schema_name: str,
    *,
    repo_root: Optional[Path] = None,
) -> List[str]:
    """Validate a payload and return error messages (empty if valid)."""
    schema = load_schema(schema_name, repo_root=repo_root)
    validator = Draft202012Validator(schema)

    errors: List[str] = []
    for error in sorted(validator.iter_errors(payload), key=lambda e: str(e.path)):
        if error.path:
            path_str = ".".join(str(p) for p in error.path)
            errors.append(f"{path_str}: {error.message}")
        else:
            errors.append(error.message)
    return errors


def validate_payload(
    payload: Any,
    schema_name: str,
    *,
    repo_root: Optional[Path] = None,
) -> None:
    """Validate a payload against a schema.

    Raises:
        SchemaValidationError: If validation fails.
        FileNotFoundError: If schema doesn't exist.
    """
    schema = load_schema(schema_name, repo_root=repo_root)
    jsonschema.validators.validator_for(schema).check_schema(schema)

    errors = validate_payload_safe(payload, schema_name, repo_root=repo_root)
    if errors:
        raise SchemaValidationError(
            f"Validation failed against schema '{schema_name}': " + "; ".join(errors),
            errors,
        )


__all__ = [
    "load_schema",
    "validate_payload",
    "validate_payload_safe",
    "SchemaValidationError",
]
