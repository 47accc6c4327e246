"""
trustpkg config show command.

SUMMARY: Show current configuration

Displays the merged configuration from bundled defaults, project overrides,
and environment variables (TRUSTPKG_*, CTR, BIN_VALIDATE_TRUST_PACKAGE).
"""

from __future__ import annotations

import argparse
import sys

import yaml

from trustpkg.cli import OutputFormatter, add_json_flag, add_repo_root_flag, get_repo_root
from trustpkg.core.config import ConfigManager

SUMMARY = "Show current configuration"

_MISSING = object()


def _nest_key(key: str, value):
    """Nest a dot-notation key into a YAML/JSON-friendly mapping."""
    parts = [p for p in str(key).split(".") if p]
    out = value
    for part in reversed(parts):
        out = {part: out}
    return out


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument(
        "key",
        nargs="?",
        help="Specific configuration key to show (e.g., 'runtime.command')",
    )
    parser.add_argument(
        "--format",
        choices=["json", "yaml", "table"],
        default="table",
        help="Output format (default: table)",
    )
    add_json_flag(parser)
    add_repo_root_flag(parser)


def _format_value(value, indent: int = 0) -> str:
    """Format a value for table display."""
    prefix = "  " * indent
    if isinstance(value, dict):
        lines = []
        for k, v in value.items():
            formatted = _format_value(v, indent + 1)
            if "\n" in formatted or isinstance(v, dict):
                lines.append(f"{prefix}{k}:")
                lines.append(formatted)
            else:
                lines.append(f"{prefix}{k}: {formatted}")
        return "\n".join(lines)
    if isinstance(value, list):
        if not value:
            return "[]"
        return f"[{', '.join(str(v) for v in value)}]"
    if isinstance(value, str) and value == "":
        return '""'
    return str(value)


def main(args: argparse.Namespace) -> int:
    """Show configuration - delegates to ConfigManager."""
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    repo_root = get_repo_root(args)
    config_manager = ConfigManager(repo_root)
    output_format = "json" if args.json else args.format

    if args.key:
        value = config_manager.get(args.key, _MISSING)
        if value is _MISSING:
            formatter.error(f"Key not found: {args.key}", error_code="key_not_found")
            return 1
        data = {args.key: value}
        nested = _nest_key(args.key, value)
    else:
        data = config_manager.get_all()
        nested = data

    if output_format == "json":
        formatter.json_output(data)
    elif output_format == "yaml":
        formatter.text(
            yaml.safe_dump(
                nested,
                default_flow_style=False,
                sort_keys=True,
                allow_unicode=True,
            ).rstrip()
        )
    elif args.key and not isinstance(value, dict):
        formatter.text(f"{args.key}: {_format_value(value)}")
    elif args.key:
        formatter.text(f"{args.key}:")
        formatter.text(_format_value(value, indent=1))
    else:
        formatter.text("trustpkg Configuration")
        formatter.text("=" * 60)
        formatter.text(f"project root: {repo_root}")
        formatter.text("")
        formatter.text(_format_value(data))
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    cli_args = parser.parse_args()
    sys.exit(main(cli_args))
