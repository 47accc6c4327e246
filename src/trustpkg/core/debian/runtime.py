"""docker CLI compatible container runtime wrapper."""
from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path
from typing import Any, List, Optional

from trustpkg.core.exceptions import ContainerRunError, RuntimeNotFoundError
from trustpkg.core.utils.subprocess import run_with_timeout

logger = logging.getLogger(__name__)


def runtime_not_found_message(command: str) -> str:
    return "\n".join(
        [
            "This script requires a docker CLI compatible runtime, either docker or podman",
            "If CTR is not set, defaults to using docker",
            f"Couldn't find {command} command; exiting",
        ]
    )


class ContainerRuntime:
    """Runs a script from a bind-mounted host directory inside an image."""

    def __init__(
        self,
        command: str = "docker",
        *,
        workdir: str = "/workdir",
        repo_root: Optional[Path] = None,
    ) -> None:
        self.command = command
        self.workdir = workdir.rstrip("/") or "/"
        self.repo_root = repo_root

    def resolve(self) -> str:
        """Return the absolute path of the runtime binary.

        Raises:
            RuntimeNotFoundError: if the binary is not on PATH
        """
        found = shutil.which(self.command)
        if not found:
            raise RuntimeNotFoundError(
                runtime_not_found_message(self.command),
                context={"command": self.command},
            )
        return found

    def run_argv(self, image: str, host_dir: Path, script_name: str) -> List[str]:
        mount = f"type=bind,source={Path(host_dir)},target={self.workdir}"
        return [
            self.command,
            "run",
            "--rm",
            "--mount",
            mount,
            image,
            "/bin/bash",
            f"{self.workdir}/{script_name}",
        ]

    def run(self, image: str, host_dir: Path, script_name: str, **kwargs: Any) -> None:
        """Run ``script_name`` (already written to ``host_dir``) in ``image``.

        stdio is streamed unless the caller redirects it via ``stdout=``/``stderr=``.

        Raises:
            ContainerRunError: on non-zero exit or timeout
        """
        self.resolve()
        argv = self.run_argv(image, host_dir, script_name)
        logger.info("running %s in %s", script_name, image)
        try:
            proc = run_with_timeout(
                argv,
                timeout_type="container_run",
                repo_root=self.repo_root,
                check=False,
                **kwargs,
            )
        except subprocess.TimeoutExpired as exc:
            raise ContainerRunError(
                f"{self.command} run timed out after {exc.timeout}s",
                context={"image": image, "argv": argv, "timeout": exc.timeout},
            ) from exc
        except OSError as exc:
            raise ContainerRunError(
                f"failed to start {self.command}: {exc}",
                context={"image": image, "argv": argv},
            ) from exc

        if proc.returncode != 0:
            raise ContainerRunError(
                f"{self.command} run exited with code {proc.returncode}",
                context={"image": image, "argv": argv, "exit_code": proc.returncode},
            )


__all__ = ["ContainerRuntime", "runtime_not_found_message"]
