"""
MOS 6502 Instruction Set Definition
===================================

This module defines the complete NMOS 6502 opcode map: for each of the 256
possible opcode bytes, the mnemonic, addressing mode, base cycle count and
the cycle-counting exceptions that can add time at runtime.

The table is total. Bytes that are not documented 6502 instructions are
present as invalid entries (mnemonic "???", IMPLIED mode, zero cycles) so
that a lookup never fails; the disassembler renders them as raw data.

Addressing Modes
----------------
The 6502 has thirteen addressing modes. The mode alone decides how many
operand bytes follow the opcode:

==================  ==========  ===============
Mode                Operand     Syntax
==================  ==========  ===============
IMPLIED             0 bytes     ``RTS``
ACCUMULATOR         0 bytes     ``ASL A``
IMMEDIATE           1 byte      ``LDA #$10``
ZERO_PAGE           1 byte      ``LDA $10``
ZERO_PAGE_X         1 byte      ``LDA $10,X``
ZERO_PAGE_Y         1 byte      ``LDX $10,Y``
INDEXED_INDIRECT_X  1 byte      ``LDA ($10,X)``
INDIRECT_INDEXED_Y  1 byte      ``LDA ($10),Y``
RELATIVE            1 byte      ``BNE $8010``
ABSOLUTE            2 bytes     ``LDA $1234``
ABSOLUTE_X          2 bytes     ``LDA $1234,X``
ABSOLUTE_Y          2 bytes     ``LDA $1234,Y``
INDIRECT_ABSOLUTE   2 bytes     ``JMP ($1234)``
==================  ==========  ===============

Two-byte operands are little-endian (low byte first).

Cycle Exceptions
----------------
- PAGE_CROSS: one extra cycle when an indexed access crosses a 256-byte page.
- BRANCH_TAKEN: one extra cycle when a conditional branch is taken.

Conditional branches carry both flags.

Reference
---------
- "Nick Bensema's Guide to Cycle Counting on the Atari 2600"
  http://www.alienbill.com/2600/cookbook/cycles/nickb.txt
- MOS MCS6500 Microcomputer Family Programming Manual
"""

from dataclasses import dataclass
from enum import Enum, Flag, auto


# =============================================================================
# Addressing Mode Enumeration
# =============================================================================

class AddressingMode(Enum):
    """
    6502 addressing modes.

    Each addressing mode determines the number of operand bytes and the
    textual form of the operand.
    """
    IMMEDIATE = auto()           # #$xx
    ABSOLUTE = auto()            # $xxxx
    ZERO_PAGE = auto()           # $xx
    IMPLIED = auto()             # no operand
    INDIRECT_ABSOLUTE = auto()   # ($xxxx), JMP only
    ABSOLUTE_X = auto()          # $xxxx,X
    ABSOLUTE_Y = auto()          # $xxxx,Y
    ZERO_PAGE_X = auto()         # $xx,X
    ZERO_PAGE_Y = auto()         # $xx,Y
    INDEXED_INDIRECT_X = auto()  # ($xx,X)
    INDIRECT_INDEXED_Y = auto()  # ($xx),Y
    RELATIVE = auto()            # branch displacement (signed 8-bit)
    ACCUMULATOR = auto()         # A

    @property
    def operand_size(self) -> int:
        """Number of operand bytes following the opcode (0, 1 or 2)."""
        return _OPERAND_SIZES[self]

    def __str__(self) -> str:
        """Return human-readable name for listings and error messages."""
        return self.name.lower().replace("_", " ")


_OPERAND_SIZES = {
    AddressingMode.IMPLIED: 0,
    AddressingMode.ACCUMULATOR: 0,
    AddressingMode.IMMEDIATE: 1,
    AddressingMode.ZERO_PAGE: 1,
    AddressingMode.ZERO_PAGE_X: 1,
    AddressingMode.ZERO_PAGE_Y: 1,
    AddressingMode.INDEXED_INDIRECT_X: 1,
    AddressingMode.INDIRECT_INDEXED_Y: 1,
    AddressingMode.RELATIVE: 1,
    AddressingMode.ABSOLUTE: 2,
    AddressingMode.INDIRECT_ABSOLUTE: 2,
    AddressingMode.ABSOLUTE_X: 2,
    AddressingMode.ABSOLUTE_Y: 2,
}


# =============================================================================
# Cycle-Counting Exceptions
# =============================================================================

class CycleException(Flag):
    """Conditions under which an instruction takes longer than its base count."""
    NONE = 0
    PAGE_CROSS = auto()    # Indexed access crosses a page boundary, +1 cycle
    BRANCH_TAKEN = auto()  # Conditional branch taken, +1 cycle


# =============================================================================
# Opcode Entry
# =============================================================================

@dataclass(frozen=True)
class OpcodeEntry:
    """
    Metadata for one opcode byte.

    This dataclass is immutable (frozen) to prevent accidental modification
    of the opcode table at runtime.

    Attributes:
        opcode: The opcode byte value (0-255)
        mnemonic: Three-letter mnemonic, or "???" for an illegal opcode
        mode: Addressing mode, which fixes the operand size
        cycles: Base number of CPU cycles
        exceptions: Cycle-counting exceptions that may add cycles
        valid: False for bytes that are not documented 6502 opcodes
    """
    opcode: int
    mnemonic: str
    mode: AddressingMode
    cycles: int
    exceptions: CycleException = CycleException.NONE
    valid: bool = True

    @property
    def operand_size(self) -> int:
        """Operand size in bytes. Invalid opcodes never consume operands."""
        return self.mode.operand_size if self.valid else 0

    @property
    def size(self) -> int:
        """Total encoded size in bytes, including the opcode."""
        return 1 + self.operand_size

    @property
    def is_branch(self) -> bool:
        """True for conditional branches (both cycle exceptions set)."""
        return self.exceptions == _BRANCH

    def __repr__(self) -> str:
        return (
            f"OpcodeEntry(opcode=${self.opcode:02X}, mnemonic={self.mnemonic!r}, "
            f"mode={self.mode.name}, cycles={self.cycles})"
        )


# =============================================================================
# Opcode Table
# =============================================================================
# Key: opcode byte
# Value: (mnemonic, addressing mode, base cycles, cycle exceptions)
#
# Only documented instructions are listed here; every other byte is filled
# in as an invalid entry by _build_table().
# =============================================================================

ILLEGAL_MNEMONIC = "???"

_NONE = CycleException.NONE
_PAGE = CycleException.PAGE_CROSS
_BRANCH = CycleException.PAGE_CROSS | CycleException.BRANCH_TAKEN

_INSTRUCTIONS: dict[int, tuple[str, AddressingMode, int, CycleException]] = {
    # Load and store
    0xA1: ("LDA", AddressingMode.INDEXED_INDIRECT_X, 6, _NONE),
    0xA5: ("LDA", AddressingMode.ZERO_PAGE, 3, _NONE),
    0xA9: ("LDA", AddressingMode.IMMEDIATE, 2, _NONE),
    0xAD: ("LDA", AddressingMode.ABSOLUTE, 4, _NONE),
    0xB1: ("LDA", AddressingMode.INDIRECT_INDEXED_Y, 5, _PAGE),
    0xB5: ("LDA", AddressingMode.ZERO_PAGE_X, 4, _NONE),
    0xB9: ("LDA", AddressingMode.ABSOLUTE_Y, 4, _PAGE),
    0xBD: ("LDA", AddressingMode.ABSOLUTE_X, 4, _PAGE),
    0xA2: ("LDX", AddressingMode.IMMEDIATE, 2, _NONE),
    0xA6: ("LDX", AddressingMode.ZERO_PAGE, 3, _NONE),
    0xAE: ("LDX", AddressingMode.ABSOLUTE, 4, _NONE),
    0xB6: ("LDX", AddressingMode.ZERO_PAGE_Y, 4, _NONE),
    0xBE: ("LDX", AddressingMode.ABSOLUTE_Y, 4, _PAGE),
    0xA0: ("LDY", AddressingMode.IMMEDIATE, 2, _NONE),
    0xA4: ("LDY", AddressingMode.ZERO_PAGE, 3, _NONE),
    0xAC: ("LDY", AddressingMode.ABSOLUTE, 4, _NONE),
    0xB4: ("LDY", AddressingMode.ZERO_PAGE_X, 4, _NONE),
    0xBC: ("LDY", AddressingMode.ABSOLUTE_X, 4, _PAGE),
    0x81: ("STA", AddressingMode.INDEXED_INDIRECT_X, 6, _NONE),
    0x85: ("STA", AddressingMode.ZERO_PAGE, 3, _NONE),
    0x8D: ("STA", AddressingMode.ABSOLUTE, 4, _NONE),
    0x91: ("STA", AddressingMode.INDIRECT_INDEXED_Y, 5, _PAGE),
    0x95: ("STA", AddressingMode.ZERO_PAGE_X, 4, _NONE),
    0x99: ("STA", AddressingMode.ABSOLUTE_Y, 4, _PAGE),
    0x9D: ("STA", AddressingMode.ABSOLUTE_X, 4, _PAGE),
    0x86: ("STX", AddressingMode.ZERO_PAGE, 3, _NONE),
    0x8E: ("STX", AddressingMode.ABSOLUTE, 4, _NONE),
    0x96: ("STX", AddressingMode.ZERO_PAGE_Y, 4, _NONE),
    0x84: ("STY", AddressingMode.ZERO_PAGE, 3, _NONE),
    0x8C: ("STY", AddressingMode.ABSOLUTE, 4, _NONE),
    0x94: ("STY", AddressingMode.ZERO_PAGE_X, 4, _NONE),

    # Arithmetic
    0x61: ("ADC", AddressingMode.INDEXED_INDIRECT_X, 6, _NONE),
    0x65: ("ADC", AddressingMode.ZERO_PAGE, 3, _NONE),
    0x69: ("ADC", AddressingMode.IMMEDIATE, 2, _NONE),
    0x6D: ("ADC", AddressingMode.ABSOLUTE, 4, _NONE),
    0x71: ("ADC", AddressingMode.INDIRECT_INDEXED_Y, 5, _PAGE),
    0x75: ("ADC", AddressingMode.ZERO_PAGE_X, 4, _NONE),
    0x79: ("ADC", AddressingMode.ABSOLUTE_Y, 4, _PAGE),
    0x7D: ("ADC", AddressingMode.ABSOLUTE_X, 4, _PAGE),
    0xE1: ("SBC", AddressingMode.INDEXED_INDIRECT_X, 6, _NONE),
    0xE5: ("SBC", AddressingMode.ZERO_PAGE, 3, _NONE),
    0xE9: ("SBC", AddressingMode.IMMEDIATE, 2, _NONE),
    0xED: ("SBC", AddressingMode.ABSOLUTE, 4, _NONE),
    0xF1: ("SBC", AddressingMode.INDIRECT_INDEXED_Y, 5, _PAGE),
    0xF5: ("SBC", AddressingMode.ZERO_PAGE_X, 4, _NONE),
    0xF9: ("SBC", AddressingMode.ABSOLUTE_Y, 4, _PAGE),
    0xFD: ("SBC", AddressingMode.ABSOLUTE_X, 4, _PAGE),

    # Logical
    0x21: ("AND", AddressingMode.INDEXED_INDIRECT_X, 6, _NONE),
    0x25: ("AND", AddressingMode.ZERO_PAGE, 3, _NONE),
    0x29: ("AND", AddressingMode.IMMEDIATE, 2, _NONE),
    0x2D: ("AND", AddressingMode.ABSOLUTE, 4, _NONE),
    0x31: ("AND", AddressingMode.INDIRECT_INDEXED_Y, 5, _PAGE),
    0x35: ("AND", AddressingMode.ZERO_PAGE_X, 4, _NONE),
    0x39: ("AND", AddressingMode.ABSOLUTE_Y, 4, _PAGE),
    0x3D: ("AND", AddressingMode.ABSOLUTE_X, 4, _PAGE),
    0x41: ("EOR", AddressingMode.INDEXED_INDIRECT_X, 6, _PAGE),  # (zp,X) never page-crosses; flag kept as published
    0x45: ("EOR", AddressingMode.ZERO_PAGE, 3, _NONE),
    0x49: ("EOR", AddressingMode.IMMEDIATE, 2, _NONE),
    0x4D: ("EOR", AddressingMode.ABSOLUTE, 4, _NONE),
    0x51: ("EOR", AddressingMode.INDIRECT_INDEXED_Y, 5, _PAGE),
    0x55: ("EOR", AddressingMode.ZERO_PAGE_X, 4, _NONE),
    0x59: ("EOR", AddressingMode.ABSOLUTE_Y, 4, _PAGE),
    0x5D: ("EOR", AddressingMode.ABSOLUTE_X, 4, _PAGE),
    0x01: ("ORA", AddressingMode.INDEXED_INDIRECT_X, 6, _NONE),
    0x05: ("ORA", AddressingMode.ZERO_PAGE, 3, _NONE),
    0x09: ("ORA", AddressingMode.IMMEDIATE, 2, _NONE),
    0x0D: ("ORA", AddressingMode.ABSOLUTE, 4, _NONE),
    0x11: ("ORA", AddressingMode.INDIRECT_INDEXED_Y, 5, _PAGE),
    0x15: ("ORA", AddressingMode.ZERO_PAGE_X, 4, _NONE),
    0x19: ("ORA", AddressingMode.ABSOLUTE_Y, 4, _PAGE),
    0x1D: ("ORA", AddressingMode.ABSOLUTE_X, 4, _PAGE),
    0x24: ("BIT", AddressingMode.ZERO_PAGE, 3, _NONE),
    0x2C: ("BIT", AddressingMode.ABSOLUTE, 4, _NONE),

    # Compare
    0xC1: ("CMP", AddressingMode.INDEXED_INDIRECT_X, 6, _NONE),
    0xC5: ("CMP", AddressingMode.ZERO_PAGE, 3, _NONE),
    0xC9: ("CMP", AddressingMode.IMMEDIATE, 2, _NONE),
    0xCD: ("CMP", AddressingMode.ABSOLUTE, 4, _NONE),
    0xD1: ("CMP", AddressingMode.INDIRECT_INDEXED_Y, 5, _PAGE),
    0xD5: ("CMP", AddressingMode.ZERO_PAGE_X, 4, _NONE),
    0xD9: ("CMP", AddressingMode.ABSOLUTE_Y, 4, _PAGE),
    0xDD: ("CMP", AddressingMode.ABSOLUTE_X, 4, _PAGE),
    0xE0: ("CPX", AddressingMode.IMMEDIATE, 2, _NONE),
    0xE4: ("CPX", AddressingMode.ZERO_PAGE, 3, _NONE),
    0xEC: ("CPX", AddressingMode.ABSOLUTE, 4, _NONE),
    0xC0: ("CPY", AddressingMode.IMMEDIATE, 2, _NONE),
    0xC4: ("CPY", AddressingMode.ZERO_PAGE, 3, _NONE),
    0xCC: ("CPY", AddressingMode.ABSOLUTE, 4, _NONE),

    # Increment and decrement
    0xE6: ("INC", AddressingMode.ZERO_PAGE, 5, _NONE),
    0xEE: ("INC", AddressingMode.ABSOLUTE, 6, _NONE),
    0xF6: ("INC", AddressingMode.ZERO_PAGE_X, 6, _NONE),
    0xFE: ("INC", AddressingMode.ABSOLUTE_X, 7, _NONE),
    0xE8: ("INX", AddressingMode.IMPLIED, 2, _NONE),
    0xC8: ("INY", AddressingMode.IMPLIED, 2, _NONE),
    0xC6: ("DEC", AddressingMode.ZERO_PAGE, 5, _NONE),
    0xCE: ("DEC", AddressingMode.ABSOLUTE, 6, _NONE),
    0xD6: ("DEC", AddressingMode.ZERO_PAGE_X, 6, _NONE),
    0xDE: ("DEC", AddressingMode.ABSOLUTE_X, 7, _NONE),
    0xCA: ("DEX", AddressingMode.IMPLIED, 2, _NONE),
    0x88: ("DEY", AddressingMode.IMPLIED, 2, _NONE),

    # Shift and rotate
    0x06: ("ASL", AddressingMode.ZERO_PAGE, 5, _NONE),
    0x0A: ("ASL", AddressingMode.ACCUMULATOR, 2, _NONE),
    0x0E: ("ASL", AddressingMode.ABSOLUTE, 6, _NONE),
    0x16: ("ASL", AddressingMode.ZERO_PAGE_X, 6, _NONE),
    0x1E: ("ASL", AddressingMode.ABSOLUTE_X, 7, _NONE),
    0x46: ("LSR", AddressingMode.ZERO_PAGE, 5, _NONE),
    0x4A: ("LSR", AddressingMode.ACCUMULATOR, 2, _NONE),
    0x4E: ("LSR", AddressingMode.ABSOLUTE, 6, _NONE),
    0x56: ("LSR", AddressingMode.ZERO_PAGE_X, 6, _NONE),
    0x5E: ("LSR", AddressingMode.ABSOLUTE_X, 7, _NONE),
    0x26: ("ROL", AddressingMode.ZERO_PAGE, 5, _NONE),
    0x2A: ("ROL", AddressingMode.ACCUMULATOR, 2, _NONE),
    0x2E: ("ROL", AddressingMode.ABSOLUTE, 6, _NONE),
    0x36: ("ROL", AddressingMode.ZERO_PAGE_X, 6, _NONE),
    0x3E: ("ROL", AddressingMode.ABSOLUTE_X, 7, _NONE),
    0x66: ("ROR", AddressingMode.ZERO_PAGE, 5, _NONE),
    0x6A: ("ROR", AddressingMode.ACCUMULATOR, 2, _NONE),
    0x6E: ("ROR", AddressingMode.ABSOLUTE, 6, _NONE),
    0x76: ("ROR", AddressingMode.ZERO_PAGE_X, 6, _NONE),
    0x7E: ("ROR", AddressingMode.ABSOLUTE_X, 7, _NONE),

    # Jumps, calls and interrupts
    0x4C: ("JMP", AddressingMode.ABSOLUTE, 3, _NONE),
    0x6C: ("JMP", AddressingMode.INDIRECT_ABSOLUTE, 5, _NONE),
    0x20: ("JSR", AddressingMode.ABSOLUTE, 6, _NONE),
    0x60: ("RTS", AddressingMode.IMPLIED, 6, _NONE),
    0x00: ("BRK", AddressingMode.IMPLIED, 7, _NONE),
    0x40: ("RTI", AddressingMode.IMPLIED, 6, _NONE),

    # Conditional branches (page cross and branch taken both add a cycle)
    0x90: ("BCC", AddressingMode.RELATIVE, 2, _BRANCH),
    0xB0: ("BCS", AddressingMode.RELATIVE, 2, _BRANCH),
    0xF0: ("BEQ", AddressingMode.RELATIVE, 2, _BRANCH),
    0x30: ("BMI", AddressingMode.RELATIVE, 2, _BRANCH),
    0xD0: ("BNE", AddressingMode.RELATIVE, 2, _BRANCH),
    0x10: ("BPL", AddressingMode.RELATIVE, 2, _BRANCH),
    0x50: ("BVC", AddressingMode.RELATIVE, 2, _BRANCH),
    0x70: ("BVS", AddressingMode.RELATIVE, 2, _BRANCH),

    # Register transfers
    0xAA: ("TAX", AddressingMode.IMPLIED, 2, _NONE),
    0xA8: ("TAY", AddressingMode.IMPLIED, 2, _NONE),
    0xBA: ("TSX", AddressingMode.IMPLIED, 2, _NONE),
    0x8A: ("TXA", AddressingMode.IMPLIED, 2, _NONE),
    0x9A: ("TXS", AddressingMode.IMPLIED, 2, _NONE),
    0x98: ("TYA", AddressingMode.IMPLIED, 2, _NONE),

    # Stack
    0x48: ("PHA", AddressingMode.IMPLIED, 3, _NONE),
    0x08: ("PHP", AddressingMode.IMPLIED, 3, _NONE),
    0x68: ("PLA", AddressingMode.IMPLIED, 4, _NONE),
    0x28: ("PLP", AddressingMode.IMPLIED, 4, _NONE),

    # Status flags
    0x18: ("CLC", AddressingMode.IMPLIED, 2, _NONE),
    0xD8: ("CLD", AddressingMode.IMPLIED, 2, _NONE),
    0x58: ("CLI", AddressingMode.IMPLIED, 2, _NONE),
    0xB8: ("CLV", AddressingMode.IMPLIED, 2, _NONE),
    0x38: ("SEC", AddressingMode.IMPLIED, 2, _NONE),
    0xF8: ("SED", AddressingMode.IMPLIED, 2, _NONE),
    0x78: ("SEI", AddressingMode.IMPLIED, 2, _NONE),

    # No operation
    0xEA: ("NOP", AddressingMode.IMPLIED, 2, _NONE),
}


def _build_table() -> tuple[OpcodeEntry, ...]:
    """
    Expand _INSTRUCTIONS into a 256-entry tuple indexed by opcode byte.

    Returns:
        Tuple of OpcodeEntry, one per byte value.
    """
    table = []
    for opcode in range(256):
        if opcode in _INSTRUCTIONS:
            mnemonic, mode, cycles, exceptions = _INSTRUCTIONS[opcode]
            table.append(OpcodeEntry(opcode, mnemonic, mode, cycles, exceptions))
        else:
            table.append(OpcodeEntry(
                opcode, ILLEGAL_MNEMONIC, AddressingMode.IMPLIED, 0, valid=False
            ))
    return tuple(table)


OPCODE_TABLE: tuple[OpcodeEntry, ...] = _build_table()


# =============================================================================
# Lookup Functions
# =============================================================================

def classify(opcode: int) -> OpcodeEntry:
    """
    Look up the metadata for an opcode byte.

    Args:
        opcode: Byte value (0-255)

    Returns:
        The OpcodeEntry for this byte. Illegal opcodes return an entry
        with valid=False rather than failing.

    Raises:
        ValueError: If opcode is not a byte value
    """
    if not 0 <= opcode <= 0xFF:
        raise ValueError(f"Opcode must be a byte value (0-255), got {opcode}")
    return OPCODE_TABLE[opcode]


def is_valid_opcode(opcode: int) -> bool:
    """Return True if the byte is a documented 6502 opcode."""
    return classify(opcode).valid


def get_opcodes(mnemonic: str) -> dict[AddressingMode, int]:
    """
    Get all encodings of a mnemonic.

    Args:
        mnemonic: The instruction mnemonic (e.g., "LDA")

    Returns:
        Dict mapping each supported addressing mode to its opcode byte
        (empty for unknown mnemonics)
    """
    name = mnemonic.upper()
    return {
        entry.mode: entry.opcode
        for entry in OPCODE_TABLE
        if entry.valid and entry.mnemonic == name
    }


MNEMONICS: frozenset[str] = frozenset(
    entry.mnemonic for entry in OPCODE_TABLE if entry.valid
)

BRANCH_INSTRUCTIONS: frozenset[str] = frozenset(
    entry.mnemonic for entry in OPCODE_TABLE if entry.is_branch
)
