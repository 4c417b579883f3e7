"""
GB ROM Building
===============

This module builds Game Boy cartridge images around the GBS player.

This module provides:
- **ROMAssembler**: Convert GBS files to ROM images
- **Cartridge sizing**: ROM size code and cartridge type for an image
- **Checksum utilities**: Header and global cartridge checksums
- **Patch tables**: Address rewrites that point the player at the rip
- **Player asset**: Locate and load the bundled GBS player

Quick Start
-----------
    >>> from gbs2gb.rom import ROMAssembler
    >>> assembler = ROMAssembler()
    >>> out = assembler.convert_file("song.gbs", "roms/")

Reference
---------
- Cartridge header: https://gbdev.gg8.se/wiki/articles/The_Cartridge_Header
"""

# =============================================================================
# Public API Exports
# =============================================================================

from gbs2gb.rom.cartridge import (
    CartridgeType,
    CartridgeSize,
    CartridgeSizeInfo,
    MAX_ROM_SIZE,
    get_cartridge_size,
    required_image_length,
)

from gbs2gb.rom.checksum import (
    header_checksum,
    global_checksum,
    write_header_checksum,
    write_global_checksum,
    verify_header_checksum,
)

from gbs2gb.rom.patches import (
    PLAYER_ENTRYPOINT,
    PLAYER_LENGTH,
    RelocationBase,
    PatchEntry,
    AddressPatch,
    BytePatch,
    build_patch_plan,
    apply_patches,
)

from gbs2gb.rom.player import (
    DEFAULT_PLAYER_NAME,
    PLAYER_ENV_VAR,
    PlayerSource,
    get_player_path,
    load_player,
    validate_player,
    player_from_file,
    player_from_bytes,
)

from gbs2gb.rom.assembler import (
    ROMAssembler,
    ROMImage,
    output_path_for,
    write_rom,
    convert,
)

__all__ = [
    # Cartridge sizing
    "CartridgeType",
    "CartridgeSize",
    "CartridgeSizeInfo",
    "MAX_ROM_SIZE",
    "get_cartridge_size",
    "required_image_length",
    # Checksums
    "header_checksum",
    "global_checksum",
    "write_header_checksum",
    "write_global_checksum",
    "verify_header_checksum",
    # Patches
    "PLAYER_ENTRYPOINT",
    "PLAYER_LENGTH",
    "RelocationBase",
    "PatchEntry",
    "AddressPatch",
    "BytePatch",
    "build_patch_plan",
    "apply_patches",
    # Player
    "DEFAULT_PLAYER_NAME",
    "PLAYER_ENV_VAR",
    "PlayerSource",
    "get_player_path",
    "load_player",
    "validate_player",
    "player_from_file",
    "player_from_bytes",
    # Assembler
    "ROMAssembler",
    "ROMImage",
    "output_path_for",
    "write_rom",
    "convert",
]
