"""
trustpkg - Debian trust package fetcher

Installs ca-certificates inside a throwaway container, repackages the
certificate bundle as a trust package JSON artifact, and validates it.
"""

__version__ = "1.0.0"
__all__ = ["__version__"]
