"""
dcc6502 Command-Line Interface
==============================

This package provides the ``dcc6502`` command-line disassembler, a
Click-based application with help text and unified error reporting.
"""

__all__ = ["dcc6502"]
