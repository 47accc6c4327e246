"""Debian trust package commands."""
