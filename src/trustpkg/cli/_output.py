"""Unified CLI output formatting utilities.

Consistent output for all trustpkg commands, in JSON and text modes.
"""
from __future__ import annotations

import json
import sys
from typing import Any, Dict, Optional


class OutputFormatter:
    """Unified output formatter for CLI commands."""

    def __init__(self, json_mode: bool = False, indent: int = 2):
        self.json_mode = json_mode
        self.indent = indent

    def success(
        self,
        data: Dict[str, Any],
        message: str,
        *,
        status: str = "success",
    ) -> None:
        """Output success result (``message`` in text mode, ``data`` in JSON mode)."""
        if self.json_mode:
            output = {"status": status, **data}
            print(json.dumps(output, indent=self.indent, default=str))
        else:
            print(message)

    def error(
        self,
        error: Exception | str,
        message: Optional[str] = None,
        *,
        error_code: str = "error",
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Output error result to stderr."""
        msg = message or str(error)
        if self.json_mode:
            output: Dict[str, Any] = {
                "error": error_code,
                "message": msg,
            }
            if context:
                output["context"] = context
            print(json.dumps(output, indent=self.indent, default=str), file=sys.stderr)
        else:
            print(f"Error: {msg}", file=sys.stderr)

    def json_output(self, data: Any) -> None:
        print(json.dumps(data, indent=self.indent, default=str))

    def text(self, message: str) -> None:
        print(message)

    def progress(self, message: str) -> None:
        """Progress line; suppressed in JSON mode so stdout stays parseable."""
        if not self.json_mode:
            print(message, flush=True)


__all__ = ["OutputFormatter"]
