"""
trustpkg debian validate command.

SUMMARY: Validate an existing trust package file

Checks the file against the trust package schema (exactly ``name``,
``bundle`` and ``version`` strings), then runs validate-trust-package on it
unless --skip-external is given.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from trustpkg.cli import OutputFormatter, add_json_flag, add_repo_root_flag, get_repo_root
from trustpkg.core.config.domains import ValidatorConfig
from trustpkg.core.debian import TrustPackage, TrustPackageValidator
from trustpkg.core.exceptions import TrustPackageError

SUMMARY = "Validate an existing trust package file"

_STDERR_FD = 2


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument("path", help="Trust package JSON file")
    parser.add_argument(
        "--validator",
        help="validate-trust-package binary (default: $BIN_VALIDATE_TRUST_PACKAGE)",
    )
    parser.add_argument(
        "--skip-external",
        action="store_true",
        help="Only run the schema check",
    )
    add_json_flag(parser)
    add_repo_root_flag(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    repo_root = get_repo_root(args)
    path = Path(args.path)

    try:
        package = TrustPackage.load(path, repo_root=repo_root)
        external = not args.skip_external
        if external:
            binary = args.validator or ValidatorConfig(repo_root=repo_root).binary
            TrustPackageValidator(binary, repo_root=repo_root).validate(
                path, stdout=_STDERR_FD if formatter.json_mode else None
            )
    except TrustPackageError as e:
        formatter.error(e, error_code=type(e).__name__, context=e.context)
        return 1
    except FileNotFoundError as e:
        formatter.error(e, error_code="not_found")
        return 1

    formatter.success(
        {
            "path": str(path),
            "name": package.name,
            "version": package.version,
            "external_validator": external,
        },
        f"✓ {path} is a valid trust package ({package.name} {package.version})",
    )
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    cli_args = parser.parse_args()
    sys.exit(main(cli_args))
