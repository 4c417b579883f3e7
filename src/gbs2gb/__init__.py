"""
gbs2gb - GBS to Game Boy ROM Converter
======================================

This package converts GBS (Game Boy Sound System) music rips into Game Boy
cartridge images that play the music on original hardware or in any
emulator.

A GBS file is a 0x70-byte header followed by the sound driver and music
data ripped from a game. The converter embeds a small pre-built player
(GBSPlay 1.03, modified) at the start of a ROM, copies the GBS file to its
load address, and rewrites the player's absolute addresses so it calls the
rip's init and play routines.

Main Components
---------------
- **gbs**: GBS header parsing and validation
- **rom**: ROM sizing, checksums, player patch table and the ROM assembler
- **cli**: The gbs2gb command-line tool

Quick Start
-----------
    >>> from gbs2gb import ROMAssembler
    >>> rom = ROMAssembler().assemble(Path("song.gbs").read_bytes())
    >>> Path("song.gb").write_bytes(rom.data)

Or use the command-line tool:
    $ gbs2gb -o roms/ "Pokemon Red.gbs"

Version History
---------------
1.0.0 - Initial release
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from gbs2gb.errors import (
    GBS2GBError,
    GBSError,
    InvalidHeaderError,
    IncompatibleLoadAddressError,
    CartridgeError,
    ImageTooLargeError,
    PlayerError,
    PlayerNotFoundError,
    InvalidPlayerError,
)

from gbs2gb.gbs import (
    GBSHeader,
    parse_header,
    validate_header,
    read_header,
)

from gbs2gb.rom import (
    CartridgeSizeInfo,
    get_cartridge_size,
    header_checksum,
    global_checksum,
    build_patch_plan,
    apply_patches,
    load_player,
    ROMAssembler,
    ROMImage,
    convert,
)

__all__ = [
    "__version__",
    # Exception hierarchy
    "GBS2GBError",
    "GBSError",
    "InvalidHeaderError",
    "IncompatibleLoadAddressError",
    "CartridgeError",
    "ImageTooLargeError",
    "PlayerError",
    "PlayerNotFoundError",
    "InvalidPlayerError",
    # GBS
    "GBSHeader",
    "parse_header",
    "validate_header",
    "read_header",
    # ROM
    "CartridgeSizeInfo",
    "get_cartridge_size",
    "header_checksum",
    "global_checksum",
    "build_patch_plan",
    "apply_patches",
    "load_player",
    "ROMAssembler",
    "ROMImage",
    "convert",
]
