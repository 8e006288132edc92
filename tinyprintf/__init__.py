"""Compact printf-style formatting with embedded-printf semantics."""

__version__ = "0.1.0"
__all__ = ["convert", "formatter"]