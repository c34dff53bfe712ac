"""
dcc6502 Configuration
=====================

Disassembly options, shared by the library and the command-line tool.
Configuration can come from:
- Default values (defined here)
- Environment variables (DisassemblyOptions.from_env)
- Command-line switches (dcc6502.cli)

Numeric settings accept hexadecimal with a ``0x`` or ``$`` prefix, or
decimal.
"""

import os
from dataclasses import dataclass

from dcc6502.errors import OptionError


# =============================================================================
# Constants
# =============================================================================

ADDRESS_SPACE = 0x10000     # 16-bit address space of the 6502
DEFAULT_ORIGIN = 0x8000     # Typical ROM origin (NES PRG, Atari cartridges)


def parse_number(text: str) -> int:
    """
    Parse a numeric option value.

    Args:
        text: "0x8000", "$8000" or "32768"

    Returns:
        The integer value

    Raises:
        ValueError: If text is not a valid number
    """
    text = text.strip()
    if text.lower().startswith("0x"):
        return int(text[2:], 16)
    if text.startswith("$"):
        return int(text[1:], 16)
    return int(text, 10)


# =============================================================================
# Disassembly Options
# =============================================================================

@dataclass
class DisassemblyOptions:
    """
    Options controlling what is disassembled and how it is annotated.

    Attributes:
        origin: Address at which the first byte of the image is loaded.
                Masked to 16 bits. (default: $8000)
        max_bytes: Maximum number of bytes to disassemble (default: 65536)
        cycle_counting: Append cycle counts to each line (default: False)
        hex_output: Include a hex dump of the instruction bytes (default: False)
        apple2_output: Apple II / Atari monitor style addresses (default: False)
        nes_mode: Annotate NES memory-mapped registers (default: False)
        filename: Display name used in the listing header
    """

    origin: int = DEFAULT_ORIGIN
    max_bytes: int = ADDRESS_SPACE
    cycle_counting: bool = False
    hex_output: bool = False
    apple2_output: bool = False
    nes_mode: bool = False
    filename: str = ""

    def __post_init__(self) -> None:
        if self.origin < 0:
            raise OptionError("origin", self.origin, hint="use an address from $0000 to $FFFF")
        if self.max_bytes < 0:
            raise OptionError("max_bytes", self.max_bytes)
        self.origin &= 0xFFFF

    @classmethod
    def from_env(cls) -> "DisassemblyOptions":
        """
        Create DisassemblyOptions from environment variables.

        Environment variables (all optional):
            DCC6502_ORIGIN: Origin address (e.g., "0xC000")
            DCC6502_MAX_BYTES: Byte limit
            DCC6502_CYCLES: Enable cycle counting ("1", "true", "yes")
            DCC6502_HEX: Enable hex dump
            DCC6502_APPLE: Enable Apple II style output
            DCC6502_NES: Enable NES register annotations

        Returns:
            DisassemblyOptions with values from environment variables

        Raises:
            OptionError: If a numeric variable cannot be parsed
        """
        kwargs = {}

        for name, field_name in (
            ("DCC6502_ORIGIN", "origin"),
            ("DCC6502_MAX_BYTES", "max_bytes"),
        ):
            if value := os.environ.get(name):
                try:
                    kwargs[field_name] = parse_number(value)
                except ValueError:
                    raise OptionError(field_name, value) from None

        for name, field_name in (
            ("DCC6502_CYCLES", "cycle_counting"),
            ("DCC6502_HEX", "hex_output"),
            ("DCC6502_APPLE", "apple2_output"),
            ("DCC6502_NES", "nes_mode"),
        ):
            if value := os.environ.get(name):
                kwargs[field_name] = value.strip().lower() in ("1", "true", "yes", "on")

        return cls(**kwargs)
