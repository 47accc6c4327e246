"""Core library for trustpkg: configuration, I/O, and the Debian fetch flow."""
