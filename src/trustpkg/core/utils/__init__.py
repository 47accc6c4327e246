"""Shared utilities: merging, file I/O, paths, and subprocess execution."""
