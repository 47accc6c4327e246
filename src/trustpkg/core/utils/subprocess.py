from __future__ import annotations

"""Subprocess helpers with config-driven timeouts.

- Timeouts come from the ``timeouts`` config section, keyed by type
- Commands are always argv lists; no shell=True
"""

import logging
import shlex
import subprocess
from pathlib import Path
from time import perf_counter
from typing import Any, Sequence

from trustpkg.core.config.domains.timeouts import TimeoutsConfig

logger = logging.getLogger(__name__)


def _flatten_cmd(cmd: Any) -> Sequence[str]:
    if isinstance(cmd, (list, tuple)):
        return [str(p) for p in cmd]
    return shlex.split(str(cmd))


def configured_timeout(timeout_type: str | None = None, repo_root: Path | None = None) -> float:
    """Get the configured timeout (seconds) for a timeout bucket.

    Args:
        timeout_type: ``container_run``, ``validate`` or ``default``
        repo_root: Project root whose configuration applies
    """
    timeouts = TimeoutsConfig(repo_root=repo_root)
    timeout_map = {
        "container_run": timeouts.container_run_seconds,
        "validate": timeouts.validate_seconds,
        "default": timeouts.default_seconds,
    }
    return float(timeout_map.get(timeout_type or "default", timeouts.default_seconds))


def run_with_timeout(
    cmd: Any,
    timeout_type: str | None = None,
    *,
    repo_root: Path | None = None,
    **kwargs: Any,
) -> subprocess.CompletedProcess:
    """Run a subprocess using the configured timeout bucket.

    Args:
        cmd: Command list/str passed through to ``subprocess.run``.
        timeout_type: Key of the timeout bucket (e.g. ``container_run``).
        repo_root: Project root used to resolve configuration.
        **kwargs: Additional arguments forwarded to ``subprocess.run``.

    Raises:
        subprocess.TimeoutExpired: When the command exceeds its timeout.
        subprocess.CalledProcessError: When ``check=True`` and the command fails.
    """
    explicit_timeout = kwargs.pop("timeout", None)
    timeout = (
        explicit_timeout
        if explicit_timeout is not None
        else configured_timeout(timeout_type, repo_root=repo_root)
    )

    argv = list(_flatten_cmd(cmd))
    logger.debug("subprocess start: argv=%s timeout=%s", argv, timeout)
    start = perf_counter()
    try:
        result = subprocess.run(argv, timeout=timeout, **kwargs)
    except subprocess.CalledProcessError as exc:
        logger.debug(
            "subprocess failed: argv=%s exit_code=%s duration_ms=%d",
            argv,
            exc.returncode,
            int((perf_counter() - start) * 1000),
        )
        raise
    logger.debug(
        "subprocess end: argv=%s exit_code=%s duration_ms=%d",
        argv,
        result.returncode,
        int((perf_counter() - start) * 1000),
    )
    return result


__all__ = ["configured_timeout", "run_with_timeout"]
