"""
NES Memory-Mapped Registers
===========================

Annotations for the NES PPU and APU/IO registers, used to comment
instructions whose absolute operand addresses one of them.

Only the ABSOLUTE, ABSOLUTE_X and ABSOLUTE_Y addressing modes carry a full
16-bit address in the instruction, so only those are annotated.

Reference
---------
- NESdev wiki: https://www.nesdev.org/wiki/PPU_registers
- NESdev wiki: https://www.nesdev.org/wiki/APU_registers
"""

from typing import Optional

from dcc6502.cpu import AddressingMode


# =============================================================================
# Register Table
# =============================================================================

NES_REGISTERS: dict[int, str] = {
    # PPU
    0x2000: "PPU setup #1",
    0x2001: "PPU setup #2",
    0x2002: "PPU status",
    0x2003: "SPR-RAM address select",
    0x2004: "SPR-RAM data",
    0x2005: "PPU scroll",
    0x2006: "VRAM address select",
    0x2007: "VRAM data",

    # APU
    0x4000: "Audio -> Square 1",
    0x4001: "Audio -> Square 1",
    0x4002: "Audio -> Square 1",
    0x4003: "Audio -> Square 1",
    0x4004: "Audio -> Square 2",
    0x4005: "Audio -> Square 2",
    0x4006: "Audio -> Square 2",
    0x4007: "Audio -> Square 2",
    0x4008: "Audio -> Triangle",
    0x4009: "Audio -> Triangle",
    0x400A: "Audio -> Triangle",
    0x400B: "Audio -> Triangle",
    0x400C: "Audio -> Noise control reg",
    0x400E: "Audio -> Noise Frequency reg #1",
    0x400F: "Audio -> Noise Frequency reg #2",
    0x4010: "Audio -> DPCM control",
    0x4011: "Audio -> DPCM D/A data",
    0x4012: "Audio -> DPCM address",
    0x4013: "Audio -> DPCM data length",

    # DMA and I/O
    0x4014: "Sprite DMA trigger",
    0x4015: "IRQ status / Sound enable",
    0x4016: "Joypad & I/O port for port #1",
    0x4017: "Joypad & I/O port for port #2",
}

ANNOTATED_MODES = frozenset({
    AddressingMode.ABSOLUTE,
    AddressingMode.ABSOLUTE_X,
    AddressingMode.ABSOLUTE_Y,
})


def nes_annotation(mode: AddressingMode, address: Optional[int]) -> str:
    """
    Get the NES register comment for an operand.

    Args:
        mode: Addressing mode of the instruction
        address: Resolved operand value (None for modes without one)

    Returns:
        "[NES] description", or "" when the operand is not a known register
    """
    if mode not in ANNOTATED_MODES or address is None:
        return ""
    name = NES_REGISTERS.get(address)
    return f"[NES] {name}" if name else ""
