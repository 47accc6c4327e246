from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from trustpkg.core.config import ConfigManager
from trustpkg.core.config.cache import is_cached
from trustpkg.core.config.domains import (
    PackageConfig,
    RuntimeConfig,
    TimeoutsConfig,
    TrustPackageConfig,
    ValidatorConfig,
)


def test_bundled_defaults(isolated_project_env: Path) -> None:
    cfg = ConfigManager(isolated_project_env)

    assert cfg.get("runtime.command") == "docker"
    assert cfg.get("runtime.workdir") == "/workdir"
    assert cfg.get("package.name") == "ca-certificates"
    assert cfg.get("package.bundle_path") == "/etc/ssl/certs/ca-certificates.crt"
    assert cfg.get("trust_package.name") == "cert-manager-debian"
    assert cfg.get("trust_package.version_suffix") == ".1"
    assert cfg.get("validator.binary") == ""
    assert cfg.get("logging.enabled") is False


def test_missing_key_returns_default(isolated_project_env: Path) -> None:
    cfg = ConfigManager(isolated_project_env)
    assert cfg.get("runtime.nope") is None
    assert cfg.get("runtime.command.deeper", "fallback") == "fallback"


def test_project_config_overrides_defaults(project_config, isolated_project_env: Path) -> None:
    project_config("runtime.yaml", "runtime:\n  command: podman\n")

    assert RuntimeConfig(repo_root=isolated_project_env).command == "podman"
    assert RuntimeConfig(repo_root=isolated_project_env).workdir == "/workdir"


def test_local_config_overrides_project_config(project_config, isolated_project_env: Path) -> None:
    project_config("runtime.yaml", "runtime:\n  command: podman\n")
    project_config("runtime.yaml", "runtime:\n  command: nerdctl\n", local=True)

    assert ConfigManager(isolated_project_env).get("runtime.command") == "nerdctl"


def test_config_is_found_from_subdirectory(project_config, isolated_project_env: Path, monkeypatch) -> None:
    project_config("package.yaml", "package:\n  name: ca-certificates-java\n")
    nested = isolated_project_env / "a" / "b"
    nested.mkdir(parents=True)
    monkeypatch.chdir(nested)

    assert PackageConfig().name == "ca-certificates-java"


def test_env_overrides_are_coerced(isolated_project_env: Path, monkeypatch) -> None:
    monkeypatch.setenv("TRUSTPKG_TIMEOUTS__VALIDATE_SECONDS", "12")
    monkeypatch.setenv("TRUSTPKG_LOGGING__ENABLED", "true")
    monkeypatch.setenv("TRUSTPKG_TRUST_PACKAGE__NAME", "custom-debian")

    cfg = ConfigManager(isolated_project_env)
    assert cfg.get("timeouts.validate_seconds") == 12
    assert cfg.get("logging.enabled") is True
    assert TrustPackageConfig(repo_root=isolated_project_env).name == "custom-debian"


def test_malformed_env_key_is_rejected(isolated_project_env: Path, monkeypatch) -> None:
    monkeypatch.setenv("TRUSTPKG_RUNTIME____COMMAND", "podman")
    with pytest.raises(ValueError, match="empty segment"):
        ConfigManager(isolated_project_env).get_all()


def test_legacy_aliases_beat_namespaced_env(isolated_project_env: Path, monkeypatch) -> None:
    monkeypatch.setenv("TRUSTPKG_RUNTIME__COMMAND", "nerdctl")
    monkeypatch.setenv("CTR", "podman")
    monkeypatch.setenv("BIN_VALIDATE_TRUST_PACKAGE", "/opt/bin/validate-trust-package")

    assert RuntimeConfig(repo_root=isolated_project_env).command == "podman"
    assert ValidatorConfig(repo_root=isolated_project_env).binary == "/opt/bin/validate-trust-package"


def test_empty_legacy_alias_is_ignored(isolated_project_env: Path, monkeypatch) -> None:
    monkeypatch.setenv("CTR", "")
    assert RuntimeConfig(repo_root=isolated_project_env).command == "docker"


def test_invalid_project_yaml_fails_closed(project_config, isolated_project_env: Path) -> None:
    project_config("broken.yaml", "runtime: [unclosed\n")
    with pytest.raises(yaml.YAMLError):
        ConfigManager(isolated_project_env).get_all()


def test_non_mapping_project_yaml_is_rejected(project_config, isolated_project_env: Path) -> None:
    project_config("list.yaml", "- a\n- b\n")
    with pytest.raises(ValueError, match="YAML mapping"):
        ConfigManager(isolated_project_env).get_all()


def test_cache_refreshes_when_env_changes(isolated_project_env: Path, monkeypatch) -> None:
    cfg = ConfigManager(isolated_project_env)
    assert cfg.get("runtime.command") == "docker"
    assert is_cached(isolated_project_env)

    monkeypatch.setenv("CTR", "podman")
    assert cfg.get("runtime.command") == "podman"


def test_timeouts_require_all_keys(project_config, isolated_project_env: Path) -> None:
    # An explicit null drops the bundled section.
    project_config("timeouts.yaml", "timeouts: null\n")
    with pytest.raises(RuntimeError, match="timeouts section missing"):
        TimeoutsConfig(repo_root=isolated_project_env).container_run_seconds


def test_timeouts_defaults(isolated_project_env: Path) -> None:
    settings = TimeoutsConfig(repo_root=isolated_project_env).get_all_settings()
    assert settings == {
        "container_run_seconds": 1800.0,
        "validate_seconds": 300.0,
        "default_seconds": 60.0,
    }


def test_suffix_env_value_is_not_coerced(isolated_project_env: Path, monkeypatch) -> None:
    monkeypatch.setenv("TRUSTPKG_TRUST_PACKAGE__VERSION_SUFFIX", ".2")

    assert ConfigManager(isolated_project_env).get("trust_package.version_suffix") == ".2"
    assert TrustPackageConfig(repo_root=isolated_project_env).version_suffix == ".2"


def test_unquoted_yaml_suffix_is_a_config_error(project_config, isolated_project_env: Path) -> None:
    project_config("trust_package.yaml", "trust_package:\n  version_suffix: .1\n")

    with pytest.raises(RuntimeError, match="version_suffix must be a string"):
        TrustPackageConfig(repo_root=isolated_project_env).version_suffix


def test_empty_suffix_is_allowed(project_config, isolated_project_env: Path) -> None:
    project_config("trust_package.yaml", "trust_package:\n  version_suffix: ''\n")
    assert TrustPackageConfig(repo_root=isolated_project_env).version_suffix == ""
