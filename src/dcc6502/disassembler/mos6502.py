"""
MOS 6502 Disassembler
=====================

Decodes 6502 machine code into assembly text, with optional cycle-count
annotations.

Decoding is split into two steps:

1. render_request() reads the operand bytes an opcode's addressing mode
   consumes and resolves the operand value (for RELATIVE, the branch
   target address).
2. A single formatter turns the request into text using one operand
   template per addressing mode.

Cycle Counting
--------------
Each opcode has a base cycle count. Instructions with cycle-counting
exceptions report a best/worst pair:

- Conditional branches (PAGE_CROSS and BRANCH_TAKEN): the page crossing is
  known statically from the branch target. Crossing gives base+1/base+2,
  otherwise base/base+1.
- Indexed modes (PAGE_CROSS only): the crossing depends on the index
  register at runtime, so the result is always base/base+1.

Buffer Contract
---------------
decode() does not bounds-check operand reads. Callers must supply a buffer
with at least two bytes after the last opcode they decode (ProgramImage
does this). A short buffer raises IndexError.

Usage:
    disasm = MOS6502Disassembler(DisassemblyOptions(cycle_counting=True))
    image = ProgramImage.from_file("rom.bin", origin=0xC000)
    for instr in disasm.disassemble(image.buffer, image.origin, image.stop):
        print(instr)
"""

from dataclasses import dataclass, replace
from typing import List, Optional, Sequence, Tuple

from dcc6502.config import ADDRESS_SPACE, DisassemblyOptions
from dcc6502.cpu import AddressingMode, CycleException, OpcodeEntry, OPCODE_TABLE
from dcc6502.disassembler.nes import nes_annotation


INVALID_OPCODE_MARKER = "INVALID OPCODE !!!"
RAW_BYTE_MNEMONIC = ".byte"


# =============================================================================
# Operand Rendering Table
# =============================================================================
# One canonical operand form per addressing mode. "value" is the resolved
# operand: a byte, a little-endian word, or a branch target.
# =============================================================================

OPERAND_FORMATS: dict[AddressingMode, str] = {
    AddressingMode.IMMEDIATE: "#${value:02X}",
    AddressingMode.ABSOLUTE: "${value:04X}",
    AddressingMode.ZERO_PAGE: "${value:02X}",
    AddressingMode.IMPLIED: "",
    AddressingMode.INDIRECT_ABSOLUTE: "(${value:04X})",
    AddressingMode.ABSOLUTE_X: "${value:04X},X",
    AddressingMode.ABSOLUTE_Y: "${value:04X},Y",
    AddressingMode.ZERO_PAGE_X: "${value:02X},X",
    AddressingMode.ZERO_PAGE_Y: "${value:02X},Y",
    AddressingMode.INDEXED_INDIRECT_X: "(${value:02X},X)",
    AddressingMode.INDIRECT_INDEXED_Y: "(${value:02X}),Y",
    AddressingMode.RELATIVE: "${value:04X}",
    AddressingMode.ACCUMULATOR: "A",
}


# =============================================================================
# Data Structures
# =============================================================================

@dataclass(frozen=True)
class RenderRequest:
    """
    What an addressing mode consumed, before any text is produced.

    Attributes:
        entry: Opcode table entry
        operand_bytes: Raw operand bytes (0-2)
        value: Resolved operand value (None for IMPLIED and ACCUMULATOR)
    """
    entry: OpcodeEntry
    operand_bytes: bytes
    value: Optional[int]


@dataclass(frozen=True)
class DecodedInstruction:
    """
    Represents a single decoded 6502 instruction.

    Attributes:
        address: Address of the opcode byte
        opcode: The opcode byte
        mnemonic: Instruction mnemonic (".byte" for an invalid opcode)
        mode: The addressing mode used
        operand_bytes: Raw operand bytes (may be empty)
        value: Resolved operand value; the branch target for RELATIVE
        operand_str: Formatted operand string for display
        size: Total instruction size in bytes
        raw_bytes: All bytes comprising this instruction
        valid: False for an undefined opcode
        cycles: Cycle annotation ("4", "4/5"), empty if not requested
        comment: Annotation such as the invalid-opcode marker or a NES register
    """
    address: int
    opcode: int
    mnemonic: str
    mode: AddressingMode
    operand_bytes: bytes
    value: Optional[int]
    operand_str: str
    size: int
    raw_bytes: bytes
    valid: bool = True
    cycles: str = ""
    comment: str = ""

    @property
    def text(self) -> str:
        """Mnemonic and operand, e.g. "LDA $1234,X"."""
        if self.operand_str:
            return f"{self.mnemonic} {self.operand_str}"
        return self.mnemonic

    @property
    def next_address(self) -> int:
        """Address of the following instruction (may exceed $FFFF at the top)."""
        return self.address + self.size

    def __str__(self) -> str:
        """Format as assembly line: ADDRESS: BYTES  MNEMONIC OPERAND"""
        hex_bytes = " ".join(f"{b:02X}" for b in self.raw_bytes).ljust(8)

        notes = []
        if self.cycles:
            notes.append(f"Cycles: {self.cycles}")
        if self.comment:
            notes.append(self.comment)

        if notes:
            return f"${self.address:04X}: {hex_bytes}  {self.text:<16} ; {' '.join(notes)}"
        return f"${self.address:04X}: {hex_bytes}  {self.text}"

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "address": f"${self.address:04X}",
            "address_int": self.address,
            "opcode": f"${self.opcode:02X}",
            "mnemonic": self.mnemonic,
            "mode": self.mode.name,
            "operand": self.operand_str,
            "value": self.value,
            "size": self.size,
            "bytes": [f"${b:02X}" for b in self.raw_bytes],
            "valid": self.valid,
            "cycles": self.cycles,
            "comment": self.comment,
        }


# =============================================================================
# Decoding
# =============================================================================

def crosses_page(a: int, b: int) -> bool:
    """True if two 16-bit addresses lie in different 256-byte pages."""
    return ((a & 0xFFFF) >> 8) != ((b & 0xFFFF) >> 8)


def branch_target(address: int, displacement: int) -> int:
    """
    Resolve a RELATIVE operand to its target address.

    Args:
        address: Address of the branch opcode
        displacement: The raw operand byte (two's complement, -128..127)

    Returns:
        16-bit target, relative to the address after the 2-byte instruction
    """
    if displacement >= 0x80:
        displacement -= 0x100
    return (address + 2 + displacement) & 0xFFFF


def render_request(entry: OpcodeEntry, buffer: Sequence[int], address: int) -> RenderRequest:
    """
    Read the operand bytes for an opcode and resolve its operand value.

    Args:
        entry: Opcode table entry for the byte at address
        buffer: Memory image
        address: Address of the opcode byte

    Returns:
        RenderRequest for the formatter
    """
    width = entry.operand_size
    operand_bytes = bytes(buffer[address + 1:address + 1 + width])
    if len(operand_bytes) < width:
        raise IndexError(
            f"operand of ${entry.opcode:02X} at ${address:04X} runs past end of buffer"
        )

    if width == 0:
        value = None
    elif width == 1:
        value = operand_bytes[0]
    else:
        value = operand_bytes[0] | (operand_bytes[1] << 8)

    if entry.mode == AddressingMode.RELATIVE:
        value = branch_target(address, value)

    return RenderRequest(entry=entry, operand_bytes=operand_bytes, value=value)


def cycle_range(entry: OpcodeEntry, address: int, target: Optional[int] = None) -> Tuple[int, int]:
    """
    Get the best and worst case cycle counts for an instruction.

    Args:
        entry: Opcode table entry
        address: Address of the opcode byte
        target: Resolved branch target (only used for conditional branches)

    Returns:
        (best, worst); equal when the instruction has no cycle exceptions
    """
    base = entry.cycles
    exceptions = entry.exceptions

    if exceptions == CycleException.NONE:
        return base, base

    if CycleException.BRANCH_TAKEN in exceptions and CycleException.PAGE_CROSS in exceptions:
        if target is not None and crosses_page(address + entry.size, target):
            return base + 1, base + 2
        return base, base + 1

    # Single exception: depends on an index register, unknown statically
    return base, base + 1


def cycle_annotation(entry: OpcodeEntry, address: int, target: Optional[int] = None) -> str:
    """Format the cycle count as "N" or "best/worst"."""
    best, worst = cycle_range(entry, address, target)
    if best == worst:
        return f"{best}"
    return f"{best}/{worst}"


def decode(
    buffer: Sequence[int],
    offset: int,
    cycle_counting: bool = False,
) -> Tuple[DecodedInstruction, int]:
    """
    Decode one instruction.

    Args:
        buffer: Memory image, indexed by address
        offset: Address of the opcode byte (0-$FFFF)
        cycle_counting: Fill in the cycles annotation

    Returns:
        Tuple of (DecodedInstruction, next offset)

    Raises:
        ValueError: If offset is outside the 16-bit address space
        IndexError: If the buffer ends inside the instruction
    """
    if not 0 <= offset <= 0xFFFF:
        raise ValueError(f"Offset must be 0-$FFFF, got {offset}")

    opcode = buffer[offset]
    entry = OPCODE_TABLE[opcode]

    if not entry.valid:
        instr = DecodedInstruction(
            address=offset,
            opcode=opcode,
            mnemonic=RAW_BYTE_MNEMONIC,
            mode=entry.mode,
            operand_bytes=bytes(),
            value=None,
            operand_str=f"${opcode:02X}",
            size=1,
            raw_bytes=bytes([opcode]),
            valid=False,
            comment=INVALID_OPCODE_MARKER,
        )
        return instr, offset + 1

    request = render_request(entry, buffer, offset)
    instr = DecodedInstruction(
        address=offset,
        opcode=opcode,
        mnemonic=entry.mnemonic,
        mode=entry.mode,
        operand_bytes=request.operand_bytes,
        value=request.value,
        operand_str=OPERAND_FORMATS[entry.mode].format(value=request.value),
        size=entry.size,
        raw_bytes=bytes([opcode]) + request.operand_bytes,
        cycles=cycle_annotation(entry, offset, request.value) if cycle_counting else "",
    )
    return instr, offset + entry.size


# =============================================================================
# MOS 6502 Disassembler
# =============================================================================

class MOS6502Disassembler:
    """
    Disassembler for 6502 machine code.

    Wraps decode() with the annotations selected in DisassemblyOptions
    (cycle counts, NES register comments) and the decode loop.

    Attributes:
        options: The DisassemblyOptions in effect
    """

    def __init__(self, options: Optional[DisassemblyOptions] = None):
        """
        Initialize the disassembler.

        Args:
            options: Disassembly options (defaults to DisassemblyOptions())
        """
        self.options = options or DisassemblyOptions()

    def disassemble_one(self, buffer: Sequence[int], address: int) -> DecodedInstruction:
        """
        Disassemble a single instruction.

        Args:
            buffer: Memory image, indexed by address
            address: Address of the opcode byte

        Returns:
            DecodedInstruction with the configured annotations
        """
        instr, _ = decode(buffer, address, cycle_counting=self.options.cycle_counting)

        if self.options.nes_mode and instr.valid:
            note = nes_annotation(instr.mode, instr.value)
            if note:
                comment = f"{instr.comment} {note}" if instr.comment else note
                instr = replace(instr, comment=comment)

        return instr

    def disassemble(
        self,
        buffer: Sequence[int],
        start_address: int,
        stop_address: Optional[int] = None,
        count: Optional[int] = None,
    ) -> List[DecodedInstruction]:
        """
        Disassemble instructions from start_address up to stop_address.

        An instruction that starts before stop_address is decoded in full,
        even if its operand bytes extend past it.

        Args:
            buffer: Memory image, indexed by address
            start_address: Address of the first opcode
            stop_address: Address at which to stop (default: end of buffer,
                          at most $10000)
            count: Maximum number of instructions (None = all)

        Returns:
            List of DecodedInstruction objects
        """
        if stop_address is None:
            stop_address = len(buffer)
        stop_address = min(stop_address, ADDRESS_SPACE)

        result = []
        address = start_address

        while address < stop_address:
            if count is not None and len(result) >= count:
                break

            instr = self.disassemble_one(buffer, address)
            result.append(instr)
            address = instr.next_address

        return result

    def disassemble_to_text(
        self,
        buffer: Sequence[int],
        start_address: int,
        stop_address: Optional[int] = None,
        count: Optional[int] = None,
    ) -> str:
        """
        Disassemble and return formatted text output.

        This is a convenience method for getting a plain listing without the
        header; each line is str(DecodedInstruction).

        Returns:
            Multi-line string with disassembly listing
        """
        instructions = self.disassemble(buffer, start_address, stop_address, count)
        return "\n".join(str(instr) for instr in instructions)
