"""
Program Image Loading
=====================

Loads a raw binary into a 64 KiB memory image at a given origin, the way
the disassembler expects to see it.

The image buffer always covers the whole 16-bit address space plus
IMAGE_PADDING zero bytes. The decoder reads operand bytes without bounds
checks, so an instruction starting in the last two bytes of the address
space (or of the loaded data) reads zeros instead of faulting.

Usage Examples
--------------
    >>> from dcc6502.image import ProgramImage
    >>> image = ProgramImage.from_file("game.nes.prg", origin=0xC000)
    >>> print(f"{image.size} bytes at ${image.origin:04X}-${image.stop - 1:04X}")
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Union
import logging

from dcc6502.config import ADDRESS_SPACE
from dcc6502.errors import ImageError, OptionError

logger = logging.getLogger(__name__)

# Trailing zero bytes beyond the address space (longest operand is 2 bytes)
IMAGE_PADDING = 2


@dataclass
class ProgramImage:
    """
    A binary loaded into the 6502 address space.

    Attributes:
        buffer: ADDRESS_SPACE + IMAGE_PADDING bytes, zero outside the loaded data
        origin: Address of the first loaded byte
        size: Number of bytes actually loaded (after clamping)
        file_size: Size of the source data before clamping
        name: Display name (file name, or "<memory>")
    """

    buffer: bytearray
    origin: int
    size: int
    file_size: int
    name: str = "<memory>"

    @property
    def stop(self) -> int:
        """Address one past the last loaded byte; decoding stops here."""
        return self.origin + self.size

    @classmethod
    def from_bytes(
        cls,
        data: bytes,
        origin: int = 0x8000,
        max_bytes: int = ADDRESS_SPACE,
        name: str = "<memory>",
    ) -> "ProgramImage":
        """
        Place raw bytes into a fresh padded image.

        The data is clamped so that it neither runs past $FFFF nor exceeds
        max_bytes.

        Args:
            data: Raw binary contents
            origin: Load address (0-$FFFF)
            max_bytes: Maximum number of bytes to load
            name: Display name for the listing header

        Returns:
            ProgramImage with the data copied in at origin

        Raises:
            OptionError: If origin or max_bytes is out of range
        """
        if not 0 <= origin <= 0xFFFF:
            raise OptionError("origin", origin, hint="use an address from $0000 to $FFFF")
        if max_bytes < 0:
            raise OptionError("max_bytes", max_bytes)

        size = min(len(data), ADDRESS_SPACE - origin, max_bytes)
        if size < len(data):
            logger.debug(
                f"Clamped {name} from {len(data)} to {size} bytes "
                f"(origin ${origin:04X}, limit {max_bytes})"
            )

        buffer = bytearray(ADDRESS_SPACE + IMAGE_PADDING)
        buffer[origin:origin + size] = data[:size]

        logger.debug(f"Loaded {size} bytes of {name} at ${origin:04X}")
        return cls(buffer=buffer, origin=origin, size=size, file_size=len(data), name=name)

    @classmethod
    def from_file(
        cls,
        path: Union[str, Path],
        origin: int = 0x8000,
        max_bytes: int = ADDRESS_SPACE,
    ) -> "ProgramImage":
        """
        Load a binary file into a fresh padded image.

        Args:
            path: Path to the binary file
            origin: Load address (0-$FFFF)
            max_bytes: Maximum number of bytes to load

        Returns:
            ProgramImage with the file contents copied in at origin

        Raises:
            ImageError: If the file cannot be read
            OptionError: If origin or max_bytes is out of range
        """
        path = Path(path)
        try:
            data = path.read_bytes()
        except FileNotFoundError:
            raise ImageError("file not found", path=path) from None
        except OSError as e:
            raise ImageError(f"cannot read file: {e.strerror or e}", path=path) from e

        return cls.from_bytes(data, origin=origin, max_bytes=max_bytes, name=path.name)


def load_image(
    source: Union[bytes, bytearray, str, Path],
    origin: int = 0x8000,
    max_bytes: int = ADDRESS_SPACE,
) -> ProgramImage:
    """
    Load a program image from raw bytes or from a file path.

    Args:
        source: Binary data, or a path to a binary file
        origin: Load address (0-$FFFF)
        max_bytes: Maximum number of bytes to load

    Returns:
        ProgramImage ready for disassembly
    """
    if isinstance(source, (bytes, bytearray)):
        return ProgramImage.from_bytes(bytes(source), origin=origin, max_bytes=max_bytes)
    return ProgramImage.from_file(source, origin=origin, max_bytes=max_bytes)
