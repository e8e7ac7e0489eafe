"""Memoized registry of cargo-built binaries."""

__version__ = "0.1.11"
