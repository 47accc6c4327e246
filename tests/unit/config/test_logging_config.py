from __future__ import annotations

from pathlib import Path

from trustpkg.core.config.domains import LoggingConfig


def test_relative_log_path_resolves_against_repo_root(isolated_project_env: Path) -> None:
    cfg = LoggingConfig(repo_root=isolated_project_env)
    assert cfg.enabled is False
    assert cfg.level == "INFO"
    assert cfg.log_path == isolated_project_env / ".trustpkg" / "logs" / "trustpkg.log"


def test_absolute_log_path_is_kept(project_config, isolated_project_env: Path, tmp_path: Path) -> None:
    target = tmp_path / "elsewhere" / "fetch.log"
    project_config("logging.yaml", f"logging:\n  enabled: true\n  level: debug\n  path: {target}\n")

    cfg = LoggingConfig(repo_root=isolated_project_env)
    assert cfg.enabled is True
    assert cfg.level == "DEBUG"
    assert cfg.log_path == target
