"""Tests for OutputFormatter and the error payloads it renders."""
from __future__ import annotations

import json

from trustpkg.cli import OutputFormatter
from trustpkg.core.exceptions import ContainerRunError, TrustPackageError, UsageError


def test_text_mode_success_and_progress(capsys) -> None:
    fmt = OutputFormatter(json_mode=False)
    fmt.progress("+++ fetching")
    fmt.success({"version": "1.1"}, "done")

    assert capsys.readouterr().out == "+++ fetching\ndone\n"


def test_json_mode_suppresses_progress(capsys) -> None:
    fmt = OutputFormatter(json_mode=True)
    fmt.progress("+++ fetching")
    fmt.success({"version": "1.1"}, "done")

    assert json.loads(capsys.readouterr().out) == {"status": "success", "version": "1.1"}


def test_error_goes_to_stderr(capsys) -> None:
    OutputFormatter().error(UsageError("destination file must be specified"))

    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err == "Error: destination file must be specified\n"


def test_json_error_includes_context(capsys) -> None:
    err = ContainerRunError("docker run exited with code 100", context={"exit_code": 100})
    OutputFormatter(json_mode=True).error(err, error_code="ContainerRunError", context=err.context)

    payload = json.loads(capsys.readouterr().err)
    assert payload == {
        "error": "ContainerRunError",
        "message": "docker run exited with code 100",
        "context": {"exit_code": 100},
    }


def test_exceptions_keep_builtin_bases() -> None:
    assert isinstance(UsageError("x"), ValueError)
    assert isinstance(ContainerRunError("x"), RuntimeError)
    assert TrustPackageError("boom", context={"a": 1}).to_json_error() == {
        "message": "boom",
        "code": "TrustPackageError",
        "context": {"a": 1},
    }
