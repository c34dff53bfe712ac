"""
Listing Formatter
=================

Lays out decoded instructions as assembler listing lines:

    $8000   LDA #$10        ; Cycles: 2
    $8000> A9 10:   LDA #$10        ;               (hex dump)
    8000:A9 10      LDA #$10        ;               (Apple II, hex dump)

The address/hex-dump column is followed by the instruction text in a
16-character column and a ";" comment field carrying the cycle count,
the invalid-opcode marker and NES register notes.

In the hex dump, two-byte operands are shown in memory order (low byte
first): ``$8000> AD 3412:``.
"""

from typing import List

from dcc6502 import __version__
from dcc6502.config import DisassemblyOptions
from dcc6502.disassembler.mos6502 import DecodedInstruction
from dcc6502.image import ProgramImage


SEPARATOR = ";" + "-" * 75
PROJECT_URL = "https://github.com/Michaelangel007/dcc6502"


def address_column(instr: DecodedInstruction, options: DisassemblyOptions) -> str:
    """
    Format the address / hex dump column for one instruction.

    Args:
        instr: Decoded instruction
        options: Selects hex dump and Apple II styles

    Returns:
        Column text (unpadded)
    """
    address = instr.address
    raw = instr.raw_bytes

    if not options.hex_output:
        return f"{address:04X}:" if options.apple2_output else f"${address:04X}"

    if options.apple2_output:
        return f"{address:04X}:" + " ".join(f"{b:02X}" for b in raw)

    if len(raw) == 3:
        return f"${address:04X}> {raw[0]:02X} {raw[1]:02X}{raw[2]:02X}:"
    return f"${address:04X}> " + " ".join(f"{b:02X}" for b in raw) + ":"


def format_line(instr: DecodedInstruction, options: DisassemblyOptions) -> str:
    """
    Format one listing line.

    Args:
        instr: Decoded instruction
        options: Display options

    Returns:
        The listing line, without a trailing newline
    """
    width = 16 if options.hex_output else 8
    line = f"{address_column(instr, options):<{width}}{instr.text:<16};"

    if instr.cycles:
        line += f" Cycles: {instr.cycles}"
    if instr.comment:
        line += f" {instr.comment}"
    return line


def format_header(image: ProgramImage, options: DisassemblyOptions) -> List[str]:
    """
    Build the comment header that opens a listing.

    Args:
        image: The loaded program image
        options: Options in effect (enabled ones are listed)

    Returns:
        Header lines, ending with the ORG line
    """
    name = options.filename or image.name
    lines = [
        f"; Source generated by dcc6502 version {__version__}",
        f"; For more info about DCC6502, see {PROJECT_URL}",
        f"; FILENAME: {name}, File Size: ${image.size:04X} ({image.size})",
    ]
    if options.hex_output:
        lines.append(";     -> Hex output enabled")
    if options.cycle_counting:
        lines.append(";     -> Cycle counting enabled")
    if options.nes_mode:
        lines.append(";     -> NES mode enabled")
    if options.apple2_output:
        lines.append(";     -> Apple II output enabled")
    lines.append(SEPARATOR)

    width = 16 if options.hex_output else 8
    lines.append(f"{'':<{width}}{f'ORG ${image.origin:04X}':<16};")
    return lines


def format_listing(
    image: ProgramImage,
    instructions: List[DecodedInstruction],
    options: DisassemblyOptions,
) -> str:
    """
    Render a complete listing: header followed by one line per instruction.

    Returns:
        Multi-line string ending with a newline
    """
    lines = format_header(image, options)
    lines.extend(format_line(instr, options) for instr in instructions)
    return "\n".join(lines) + "\n"
