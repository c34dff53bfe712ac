"""
dcc6502 - 6502 Disassembler and Cycle Counter Command-Line Interface
====================================================================

This module implements the command-line interface for the 6502
disassembler.

Usage Examples
--------------
Disassemble a ROM loaded at the default origin ($8000):
    $ dcc6502 rom.bin

Set the origin:
    $ dcc6502 -o 0xC000 rom.bin

Cycle counts and hex dump:
    $ dcc6502 -c -d rom.bin

Only the first 256 bytes, NES register comments:
    $ dcc6502 -m 256 -n game.prg

Apple II monitor style, written to a file:
    $ dcc6502 -a -d rom.bin --output listing.asm

Option defaults may also be set with DCC6502_* environment variables
(see dcc6502.config.DisassemblyOptions.from_env).
"""

import logging
from pathlib import Path
from typing import Optional

import click

from dcc6502 import __version__
from dcc6502.cli.errors import ExitCode, handle_cli_exception
from dcc6502.config import DisassemblyOptions, parse_number
from dcc6502.disassembler import MOS6502Disassembler, format_listing
from dcc6502.errors import OptionError
from dcc6502.image import load_image

logger = logging.getLogger(__name__)


def _parse_option(name: str, text: Optional[str]) -> Optional[int]:
    if text is None:
        return None
    try:
        return parse_number(text)
    except ValueError:
        raise OptionError(name, text, hint="use 0x or $ for hex, e.g. 0xC000") from None


class DisassemblerCommand(click.Command):
    """Command whose usage errors exit with ExitCode.INVALID_ARGS, not 2."""

    def parse_args(self, ctx: click.Context, args: list) -> list:
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as e:
            e.exit_code = ExitCode.INVALID_ARGS
            raise


# =============================================================================
# CLI Definition
# =============================================================================

@click.command(cls=DisassemblerCommand)
@click.argument(
    "input_file",
    type=click.Path(dir_okay=False, path_type=Path),
)
@click.option(
    "-o", "--origin",
    type=str,
    default=None,
    help="Origin (base address of disassembly), hex with 0x or $ prefix, or decimal. Default: 0x8000",
)
@click.option(
    "-m", "--max-bytes",
    type=str,
    default=None,
    help="Only disassemble the first MAX_BYTES bytes",
)
@click.option(
    "-c", "--cycles",
    is_flag=True,
    help="Enable cycle counting annotations",
)
@click.option(
    "-d", "--hex",
    "hex_output",
    is_flag=True,
    help="Enable hex dump within disassembly",
)
@click.option(
    "-a", "--apple",
    is_flag=True,
    help="Apple II/Atari style output",
)
@click.option(
    "-n", "--nes",
    is_flag=True,
    help="Enable NES register annotations",
)
@click.option(
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output file (default: stdout)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output (debug logging to stderr)",
)
@click.version_option(version=__version__, prog_name="dcc6502")
def main(
    input_file: Path,
    origin: Optional[str],
    max_bytes: Optional[str],
    cycles: bool,
    hex_output: bool,
    apple: bool,
    nes: bool,
    output: Optional[Path],
    verbose: bool,
) -> None:
    """
    Disassemble 6502 machine code with optional cycle counting.

    INPUT_FILE is the raw binary to disassemble. It is loaded at the
    origin address and clamped to the 64K address space.

    \b
    Examples:
        dcc6502 rom.bin               # Load at $8000
        dcc6502 -o 0xC000 -c rom.bin  # Origin $C000, cycle counts
        dcc6502 -d -n game.prg        # Hex dump, NES registers
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(name)s: %(message)s",
    )

    try:
        defaults = DisassemblyOptions.from_env()

        origin_value = _parse_option("origin", origin)
        max_bytes_value = _parse_option("max_bytes", max_bytes)

        options = DisassemblyOptions(
            origin=defaults.origin if origin_value is None else origin_value,
            max_bytes=defaults.max_bytes if max_bytes_value is None else max_bytes_value,
            cycle_counting=cycles or defaults.cycle_counting,
            hex_output=hex_output or defaults.hex_output,
            apple2_output=apple or defaults.apple2_output,
            nes_mode=nes or defaults.nes_mode,
            filename=str(input_file),
        )

        image = load_image(
            input_file, origin=options.origin, max_bytes=options.max_bytes
        )
        logger.debug(f"Disassembling ${image.origin:04X}-${image.stop:04X} of {input_file}")

        disasm = MOS6502Disassembler(options)
        instructions = disasm.disassemble(image.buffer, image.origin, image.stop)
        result = format_listing(image, instructions, options)

        logger.debug(f"Instructions disassembled: {len(instructions)}")

        if output:
            output.write_text(result, encoding="utf-8")
            logger.debug(f"Output written to: {output}")
        else:
            click.echo(result, nl=False)

    except Exception as e:
        handle_cli_exception(e, verbose=verbose)


# =============================================================================
# Entry Point
# =============================================================================

if __name__ == "__main__":
    main()
