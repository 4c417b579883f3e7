"""
GB ROM Assembler
================

This module provides the ROMAssembler class, which turns a GBS file into a
Game Boy cartridge image that plays the rip on real hardware.

Conversion Steps
----------------
1. Validate the GBS header (identifier, version, load address)
2. Size the ROM for the relocated file
3. Allocate the image, filled with 0xFF like an unprogrammed cartridge
4. Patch the player's cartridge header (title, type, size, checksum) and
   copy the player into the first 0x400 bytes
5. Copy the whole GBS file so its code lands at its load address
6. Apply the player patch table
7. Write the global checksum

Any failure stops the conversion before anything is written to disk; the
output file is written in one go as the last step of convert_file().

Usage
-----
    >>> from gbs2gb.rom import ROMAssembler
    >>> rom = ROMAssembler().assemble(Path("song.gbs").read_bytes())
    >>> Path("song.gb").write_bytes(rom.data)

Substituting the player (e.g. in tests):

    >>> assembler = ROMAssembler(player_source=player_from_bytes(player_data))
"""

from dataclasses import dataclass, field
import logging
from pathlib import Path
from typing import Optional, Union

from gbs2gb.gbs.header import GBSHeader, read_header
from gbs2gb.rom.cartridge import (
    CartridgeSizeInfo,
    get_cartridge_size,
    required_image_length,
)
from gbs2gb.rom.checksum import write_global_checksum, write_header_checksum
from gbs2gb.rom.patches import PLAYER_LENGTH, apply_patches
from gbs2gb.rom.player import PlayerSource, load_player, validate_player

# Logger for this module
logger = logging.getLogger(__name__)


# =============================================================================
# Cartridge Header Offsets
# =============================================================================

TITLE_OFFSET = 0x134
TITLE_LENGTH = 15
CARTRIDGE_TYPE_OFFSET = 0x147
ROM_SIZE_OFFSET = 0x148

# Value of unprogrammed ROM space
FILL_BYTE = 0xFF

ROM_EXTENSION = ".gb"


# =============================================================================
# Result
# =============================================================================

@dataclass(frozen=True)
class ROMImage:
    """
    A finished cartridge image.

    Attributes:
        data: The complete ROM bytes
        header: Header of the GBS file it was built from
        size_info: ROM size and cartridge type
    """
    data: bytes = field(repr=False)
    header: GBSHeader
    size_info: CartridgeSizeInfo

    @property
    def gbs_start(self) -> int:
        return self.header.gbs_start

    def __len__(self) -> int:
        return len(self.data)


# =============================================================================
# ROM Assembler
# =============================================================================

@dataclass
class ROMAssembler:
    """
    Builds GB ROM images from GBS files.

    Attributes:
        player_source: Callable returning the GBS player bytes (defaults
            to loading the bundled player ROM)

    Example:
        >>> assembler = ROMAssembler()
        >>> rom = assembler.assemble(gbs_data)
        >>> print(rom.size_info.size_bytes)
    """
    player_source: PlayerSource = load_player

    def assemble(self, gbs_data: bytes) -> ROMImage:
        """
        Convert GBS file data to a ROM image.

        Args:
            gbs_data: The complete GBS file, header included

        Returns:
            The finished ROMImage

        Raises:
            InvalidHeaderError: If the GBS header is not valid
            IncompatibleLoadAddressError: If the load address is below 0x470
            ImageTooLargeError: If the ROM would exceed 8 MiB
            PlayerError: If the player cannot be loaded
        """
        header = read_header(gbs_data)
        for line in header.describe():
            logger.info(line)

        required = required_image_length(len(gbs_data), header.load_address)
        size_info = get_cartridge_size(required)
        logger.info(
            f"CartridgeType/ROMSize: {size_info.cartridge_type.value}/{size_info.size_code} "
            f"({size_info.size.get_description()})"
        )
        logger.debug(f"GB file size: {required}")

        player = self._patch_player_header(validate_player(self.player_source()), header, size_info)

        image = bytearray([FILL_BYTE]) * size_info.size_bytes
        logger.debug(f"ROM size in bytes: {len(image)}")

        image[:PLAYER_LENGTH] = player
        logger.debug(f"gbs player inserted: {len(player)}")

        gbs_start = header.gbs_start
        image[gbs_start:gbs_start + len(gbs_data)] = gbs_data
        logger.debug(f"gbs file inserted at 0x{gbs_start:04X}: {len(gbs_data)}")

        apply_patches(image, gbs_start)

        checksum = write_global_checksum(image)
        logger.debug(f"global checksum: 0x{checksum:04X}")

        return ROMImage(data=bytes(image), header=header, size_info=size_info)

    def _patch_player_header(
        self,
        player: bytes,
        header: GBSHeader,
        size_info: CartridgeSizeInfo,
    ) -> bytearray:
        """Write title, cartridge type, ROM size and header checksum into the player."""
        patched = bytearray(player)

        title = header.title_bytes[:TITLE_LENGTH]
        patched[TITLE_OFFSET:TITLE_OFFSET + len(title)] = title
        patched[CARTRIDGE_TYPE_OFFSET] = size_info.cartridge_type
        patched[ROM_SIZE_OFFSET] = size_info.size_code

        checksum = write_header_checksum(patched)
        logger.debug(f"header checksum: 0x{checksum:02X}")

        return patched

    def convert_file(
        self,
        input_path: Union[str, Path],
        output_dir: Union[str, Path] = ".",
        output_path: Optional[Path] = None,
    ) -> Path:
        """
        Convert a GBS file on disk and write the ROM.

        The output directory is created only after the conversion has
        succeeded, and the ROM is written as the single final action.

        Args:
            input_path: Path to the GBS file
            output_dir: Directory for the ROM (ignored if output_path given)
            output_path: Explicit output file path

        Returns:
            Path of the written ROM

        Raises:
            GBS2GBError: If the conversion fails
            OSError: If reading or writing fails
        """
        input_path = Path(input_path)
        if output_path is None:
            output_path = output_path_for(input_path, output_dir)

        rom = self.assemble(input_path.read_bytes())

        output_path.parent.mkdir(parents=True, exist_ok=True)
        written = write_rom(output_path, rom)
        logger.info(f"ROM written to {output_path}: {written}/{rom.size_info.size_bytes} bytes")

        return output_path


# =============================================================================
# File Helpers
# =============================================================================

def output_path_for(input_path: Union[str, Path], output_dir: Union[str, Path] = ".") -> Path:
    """
    Derive the ROM path for a GBS file.

    Example:
        >>> output_path_for("music/Pokemon Red.gbs", "out")
        PosixPath('out/Pokemon Red.gb')
    """
    return Path(output_dir) / (Path(input_path).stem + ROM_EXTENSION)


def write_rom(path: Path, rom: ROMImage) -> int:
    """Write a ROM image to path and return the number of bytes written."""
    return path.write_bytes(rom.data)


def convert(gbs_data: bytes, player: Optional[bytes] = None) -> bytes:
    """
    Convenience function to convert GBS data to ROM bytes.

    Args:
        gbs_data: The complete GBS file
        player: Player ROM data (defaults to the bundled player)

    Example:
        >>> rom_data = convert(Path("song.gbs").read_bytes())
    """
    if player is None:
        assembler = ROMAssembler()
    else:
        assembler = ROMAssembler(player_source=lambda: player)
    return assembler.assemble(gbs_data).data
