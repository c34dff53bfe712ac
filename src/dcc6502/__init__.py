"""
dcc6502 - Disassembler and Cycle Counter for the 6502
=====================================================

This package decodes MOS 6502 machine code into assembly listings,
optionally annotated with per-instruction cycle counts, hex dumps and NES
register names.

Main Components
---------------
- **cpu**: The 6502 opcode table (mnemonics, addressing modes, cycles)
- **disassembler**: Instruction decoder, cycle counter and listing formatter
- **image**: Loading binaries into the 16-bit address space
- **cli**: The ``dcc6502`` command-line tool

Quick Start
-----------
Decode one instruction:
    >>> from dcc6502 import decode
    >>> instr, next_offset = decode(bytes([0xBD, 0x00, 0x20, 0, 0]), 0, cycle_counting=True)
    >>> instr.text, instr.cycles
    ('LDA $2000,X', '4/5')

Disassemble a file:
    >>> from dcc6502 import DisassemblyOptions, MOS6502Disassembler, ProgramImage
    >>> image = ProgramImage.from_file("rom.bin", origin=0xC000)
    >>> disasm = MOS6502Disassembler(DisassemblyOptions(cycle_counting=True))
    >>> for instr in disasm.disassemble(image.buffer, image.origin, image.stop):
    ...     print(instr)

Or use the command-line tool:
    $ dcc6502 -c -d -o 0xC000 rom.bin

Version History
---------------
2.1.0 - Cycle counting, hex dump, Apple II and NES output modes
"""

__version__ = "2.1.0"
__author__ = "dcc6502 Contributors"

# =============================================================================
# Public API Exports
# =============================================================================

from dcc6502.cpu import (
    AddressingMode,
    CycleException,
    OpcodeEntry,
    OPCODE_TABLE,
    classify,
)
from dcc6502.config import DisassemblyOptions, parse_number
from dcc6502.disassembler import (
    MOS6502Disassembler,
    DecodedInstruction,
    decode,
    format_listing,
)
from dcc6502.errors import DisassemblerError, ImageError, OptionError
from dcc6502.image import ProgramImage, load_image

__all__ = [
    # Version info
    "__version__",
    "__author__",
    # Opcode table
    "AddressingMode",
    "CycleException",
    "OpcodeEntry",
    "OPCODE_TABLE",
    "classify",
    # Decoding
    "MOS6502Disassembler",
    "DecodedInstruction",
    "decode",
    "format_listing",
    # Configuration and input
    "DisassemblyOptions",
    "parse_number",
    "ProgramImage",
    "load_image",
    # Exception hierarchy
    "DisassemblerError",
    "ImageError",
    "OptionError",
]
