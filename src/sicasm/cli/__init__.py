"""
sicasm Command-Line Interface
=============================

- **sicasm**: SIC two-pass assembler

Implemented as a Click application with help text and unified error
reporting (see cli.errors).
"""

__all__ = ["sicasm"]
