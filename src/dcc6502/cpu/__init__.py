"""
dcc6502 CPU Package
===================

This package contains the MOS 6502 instruction set definition shared by the
disassembler and the command-line tool.

Modules:
    mos6502: The 256-entry opcode table, addressing modes, cycle-counting
             exceptions and lookup helpers.

Usage:
    from dcc6502.cpu import AddressingMode, classify

    entry = classify(0xBD)
    print(entry.mnemonic, entry.mode, entry.cycles)   # LDA absolute x 4
"""

# =============================================================================
# Public API Exports
# =============================================================================

from dcc6502.cpu.mos6502 import (
    # Core types
    AddressingMode,
    CycleException,
    OpcodeEntry,
    # Master opcode table
    OPCODE_TABLE,
    ILLEGAL_MNEMONIC,
    # Instruction set reference lists
    MNEMONICS,
    BRANCH_INSTRUCTIONS,
    # Lookup functions
    classify,
    is_valid_opcode,
    get_opcodes,
)

__all__ = [
    # Core types
    "AddressingMode",
    "CycleException",
    "OpcodeEntry",
    # Master opcode table
    "OPCODE_TABLE",
    "ILLEGAL_MNEMONIC",
    # Instruction set reference lists
    "MNEMONICS",
    "BRANCH_INSTRUCTIONS",
    # Lookup functions
    "classify",
    "is_valid_opcode",
    "get_opcodes",
]
