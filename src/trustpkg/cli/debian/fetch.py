"""
trustpkg debian fetch command.

SUMMARY: Fetch ca-certificates from a Debian image and write a trust package

Installs the latest ca-certificates package (or the version matching the
given trust package version) in a fresh container of the Debian source image,
writes ``{name, bundle, version}`` to the destination file and runs
validate-trust-package on it.
"""

from __future__ import annotations

import argparse
import sys

from trustpkg.cli import (
    OutputFormatter,
    add_dry_run_flag,
    add_json_flag,
    add_repo_root_flag,
    get_repo_root,
)
from trustpkg.cli._dispatcher import configure_logging
from trustpkg.core.debian import FetchRequest, FetchSettings, fetch_trust_package
from trustpkg.core.exceptions import RuntimeNotFoundError, TrustPackageError, UsageError

SUMMARY = "Fetch ca-certificates from a Debian image and write a trust package"

DEFAULT_PROG = "trustpkg debian fetch"

# Child process stdout goes here in JSON mode so apt noise never mixes with
# the JSON payload.
_STDERR_FD = 2


def usage_line(prog: str) -> str:
    return f"usage: {prog} <debian-source-image> <destination file> [target version]"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    # Positionals are optional at the argparse level so missing ones produce
    # the usage line plus a specific message instead of argparse's exit 2.
    parser.add_argument(
        "source_image",
        nargs="?",
        metavar="debian-source-image",
        help="Debian image to install ca-certificates in (e.g. docker.io/library/debian:12-slim)",
    )
    parser.add_argument(
        "destination",
        nargs="?",
        metavar="destination-file",
        help="Path of the trust package JSON to write",
    )
    parser.add_argument(
        "target_version",
        nargs="?",
        metavar="target-version",
        help="Trust package version to fetch (e.g. 20230311.1); latest if omitted",
    )
    parser.add_argument(
        "--ctr",
        help="docker CLI compatible runtime (default: $CTR or runtime.command, then docker)",
    )
    parser.add_argument(
        "--validator",
        help="validate-trust-package binary (default: $BIN_VALIDATE_TRUST_PACKAGE)",
    )
    add_dry_run_flag(parser)
    add_json_flag(parser)
    add_repo_root_flag(parser)


def _report_usage_error(formatter: OutputFormatter, prog: str, error: TrustPackageError) -> None:
    if formatter.json_mode:
        formatter.error(
            error,
            error_code="usage_error",
            context={"usage": usage_line(prog), **error.context},
        )
        return
    print(usage_line(prog), file=sys.stderr)
    print(str(error), file=sys.stderr)


def main(args: argparse.Namespace) -> int:
    """Fetch and validate a trust package."""
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    prog = getattr(args, "prog", None) or DEFAULT_PROG
    dry_run = bool(getattr(args, "dry_run", False))

    repo_root = get_repo_root(args)
    settings = FetchSettings.from_config(
        repo_root,
        runtime_command=getattr(args, "ctr", None),
        validator_binary=getattr(args, "validator", None),
    )
    request = FetchRequest(
        source_image=args.source_image or "",
        destination=args.destination or "",
        target_version=args.target_version,
    )

    run_kwargs = {"stdout": _STDERR_FD} if formatter.json_mode else {}
    try:
        result = fetch_trust_package(
            request,
            settings,
            dry_run=dry_run,
            progress=formatter.progress,
            **run_kwargs,
        )
    except (UsageError, RuntimeNotFoundError) as e:
        _report_usage_error(formatter, prog, e)
        return 1
    except TrustPackageError as e:
        formatter.error(e, error_code=type(e).__name__, context=e.context)
        return 1

    if dry_run and not formatter.json_mode:
        formatter.text(f"install target: {result.install_target}")
        formatter.text(f"container command: {' '.join(result.container_argv)}")
        formatter.text("install script:")
        formatter.text(result.script.rstrip("\n"))
        return 0

    formatter.success(
        result.to_dict(),
        f"✓ wrote trust package {result.version} to {result.destination}",
    )
    return 0


def cli(argv: list[str] | None = None) -> int:
    """Standalone entry point: ``debian-trust-package-fetch <image> <dest> [version]``."""
    parser = argparse.ArgumentParser(
        prog="debian-trust-package-fetch",
        description=SUMMARY,
    )
    register_args(parser)
    cli_args = parser.parse_args(argv)
    cli_args.prog = parser.prog
    try:
        configure_logging(cli_args)
        return main(cli_args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return 130
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(cli())
