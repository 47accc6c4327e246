"""Deep merge used when layering configuration sources.

Mappings merge key by key; any other value (scalars, lists, ``None``)
replaces what the lower layer had.
"""
from __future__ import annotations

from typing import Any, Dict


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Return ``base`` overlaid with ``override``; neither input is mutated.

    Example:
        >>> deep_merge({"runtime": {"command": "docker", "workdir": "/workdir"}},
        ...            {"runtime": {"command": "podman"}})
        {'runtime': {'command': 'podman', 'workdir': '/workdir'}}
    """
    merged: Dict[str, Any] = dict(base)
    for key, value in (override or {}).items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


__all__ = ["deep_merge"]
