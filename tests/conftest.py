import os
import sys
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'trustpkg'
for p in (SRC_ROOT, TESTS_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))


from helpers.cache_utils import reset_trustpkg_caches
from helpers.fakes import FakeRuntime, FakeValidator, write_fake_runtime, write_fake_validator

# Environment that changes which runtime/validator/config is used. Developer
# shells commonly export CTR, so tests must never inherit it.
_LEAK_PRONE_ENV_KEYS = (
    "CTR",
    "BIN_VALIDATE_TRUST_PACKAGE",
    "FAKE_CTR_EXIT",
    "FAKE_CTR_SLEEP",
    "FAKE_CTR_VERSION",
    "FAKE_CTR_SKIP_BUNDLE",
    "FAKE_CTR_SKIP_VERSION",
    "FAKE_VALIDATOR_EXIT",
)


@pytest.fixture(autouse=True)
def _reset_caches():
    reset_trustpkg_caches()
    yield
    reset_trustpkg_caches()


@pytest.fixture
def isolated_project_env(tmp_path, monkeypatch) -> Path:
    """
    Isolated project: cwd is a fresh directory holding `.trustpkg/config/`,
    and no TRUSTPKG_*/CTR/BIN_VALIDATE_TRUST_PACKAGE values leak in.
    """
    for key in list(os.environ):
        if key.startswith("TRUSTPKG_") or key in _LEAK_PRONE_ENV_KEYS:
            monkeypatch.delenv(key, raising=False)

    project = tmp_path / "project"
    (project / ".trustpkg" / "config").mkdir(parents=True)
    monkeypatch.chdir(project)
    reset_trustpkg_caches()
    return project


@pytest.fixture
def bin_dir(tmp_path, monkeypatch) -> Path:
    """A directory prepended to PATH for fake executables."""
    d = tmp_path / "bin"
    d.mkdir()
    monkeypatch.setenv("PATH", f"{d}{os.pathsep}{os.environ.get('PATH', '')}")
    return d


@pytest.fixture
def fake_runtime(isolated_project_env, bin_dir, tmp_path, monkeypatch) -> FakeRuntime:
    """A `docker` on PATH that emulates installing ca-certificates."""
    log_path = tmp_path / "ctr-calls.jsonl"
    monkeypatch.setenv("FAKE_CTR_LOG", str(log_path))
    return write_fake_runtime(bin_dir, log_path)


@pytest.fixture
def fake_validator(isolated_project_env, bin_dir, tmp_path, monkeypatch) -> FakeValidator:
    """A validate-trust-package binary, exported via BIN_VALIDATE_TRUST_PACKAGE."""
    log_path = tmp_path / "validator-calls.jsonl"
    monkeypatch.setenv("FAKE_VALIDATOR_LOG", str(log_path))
    validator = write_fake_validator(bin_dir, log_path)
    monkeypatch.setenv("BIN_VALIDATE_TRUST_PACKAGE", str(validator.path))
    return validator


def write_project_config(project: Path, name: str, content: str, *, local: bool = False) -> Path:
    """Write a YAML file into the project's `.trustpkg/config[.local]/`."""
    cfg_dir = project / ".trustpkg" / ("config.local" if local else "config")
    cfg_dir.mkdir(parents=True, exist_ok=True)
    path = cfg_dir / name
    path.write_text(content, encoding="utf-8")
    reset_trustpkg_caches()
    return path


@pytest.fixture
def project_config(isolated_project_env):
    def _write(name: str, content: str, *, local: bool = False) -> Path:
        return write_project_config(isolated_project_env, name, content, local=local)

    return _write
