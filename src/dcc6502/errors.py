"""
dcc6502 Error Hierarchy
=======================

This module defines the exception hierarchy for the disassembler.
All exceptions inherit from DisassemblerError, allowing callers to catch
all package errors with a single except clause if desired.

Exception Hierarchy
-------------------
DisassemblerError (base)
├── ImageError - the input binary cannot be read
└── OptionError - an invalid origin or byte-count setting

Undefined opcodes are not exceptions. The decoder reports them inline as a
``.byte`` pseudo-instruction and decoding continues at the next byte.

Error messages follow this format:
    description
    hint: suggestion for fixing (when available)
"""

from pathlib import Path
from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class DisassemblerError(Exception):
    """
    Base exception for all dcc6502 errors.

    Attributes:
        message: The error description
        hint: A suggestion for fixing the error (optional)
    """

    def __init__(self, message: str, hint: Optional[str] = None):
        self.message = message
        self.hint = hint
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.hint:
            return f"{self.message}\nhint: {self.hint}"
        return self.message


# =============================================================================
# Input Image Exceptions
# =============================================================================

class ImageError(DisassemblerError):
    """
    Raised when a binary image cannot be loaded.

    Attributes:
        path: The file that failed to load (None for in-memory data)
    """

    def __init__(
        self,
        message: str,
        path: Optional[Path] = None,
        hint: Optional[str] = None,
    ):
        self.path = path
        if path is not None:
            message = f"{path}: {message}"
        super().__init__(message, hint)


# =============================================================================
# Option Exceptions
# =============================================================================

class OptionError(DisassemblerError):
    """
    Raised for an invalid disassembly option value.

    Attributes:
        option: Name of the offending option (e.g., "origin")
        value: The rejected value
    """

    def __init__(self, option: str, value: object, hint: Optional[str] = None):
        self.option = option
        self.value = value
        super().__init__(f"invalid value for {option}: {value!r}", hint)
