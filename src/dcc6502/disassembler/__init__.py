"""
dcc6502 Disassembler Module
===========================

This module provides disassembly of MOS 6502 machine code:
- mos6502: instruction decoding and cycle counting
- listing: assembler listing layout (hex dump, Apple II styles)
- nes: NES memory-mapped register annotations

Usage:
    from dcc6502.disassembler import MOS6502Disassembler, decode

    # Decode a single instruction
    instr, next_offset = decode(memory, 0x8000, cycle_counting=True)

    # Disassemble a range
    disasm = MOS6502Disassembler()
    instructions = disasm.disassemble(memory, 0x8000, 0x8100)
"""

from .mos6502 import (
    MOS6502Disassembler,
    DecodedInstruction,
    RenderRequest,
    OPERAND_FORMATS,
    INVALID_OPCODE_MARKER,
    decode,
    render_request,
    branch_target,
    crosses_page,
    cycle_range,
    cycle_annotation,
)
from .listing import format_header, format_line, format_listing
from .nes import NES_REGISTERS, nes_annotation

__all__ = [
    "MOS6502Disassembler",
    "DecodedInstruction",
    "RenderRequest",
    "OPERAND_FORMATS",
    "INVALID_OPCODE_MARKER",
    "decode",
    "render_request",
    "branch_target",
    "crosses_page",
    "cycle_range",
    "cycle_annotation",
    "format_header",
    "format_line",
    "format_listing",
    "NES_REGISTERS",
    "nes_annotation",
]
