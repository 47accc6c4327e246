"""
trustpkg CLI package.

Provides the command-line interface with auto-discovery of commands
from subfolders (debian/, config/).

Framework utilities for building CLI commands:
- _output: Output formatting (JSON/text modes)
- _args: Common argument registration helpers
- _utils: Shared CLI utilities
"""
from ._output import OutputFormatter
from ._args import (
    add_dry_run_flag,
    add_json_flag,
    add_repo_root_flag,
)
from ._utils import get_repo_root

__all__ = [
    # Output formatting
    "OutputFormatter",
    # Argument helpers
    "add_json_flag",
    "add_repo_root_flag",
    "add_dry_run_flag",
    # Utilities
    "get_repo_root",
]
