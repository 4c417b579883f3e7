"""
GBS Player Asset
================

Locates and loads the pre-built GBS player ROM that is embedded at the
start of every converted cartridge.

The player is treated as opaque data: only the first 0x400 bytes are used
and only the byte ranges listed in gbs2gb.rom.patches are modified.

Lookup order for load_player():
1. An explicit path argument
2. The GBS2GB_PLAYER environment variable
3. The roms/ directory next to this module
"""

import os
from pathlib import Path
from typing import Callable, Optional, Union

from gbs2gb.errors import InvalidPlayerError, PlayerNotFoundError
from gbs2gb.rom.patches import PLAYER_LENGTH

DEFAULT_PLAYER_NAME = "GBSPlay103_Mod.gb"

PLAYER_ENV_VAR = "GBS2GB_PLAYER"

# Anything that returns the player bytes when called with no arguments
PlayerSource = Callable[[], bytes]


def get_player_path(name: str = DEFAULT_PLAYER_NAME, player_dir: Optional[Path] = None) -> Path:
    """
    Get the full path to a player ROM.

    Args:
        name: Player ROM filename
        player_dir: Directory to look in (defaults to the bundled roms/)

    Returns:
        Path to the player ROM

    Raises:
        PlayerNotFoundError: If the file doesn't exist
    """
    if player_dir is None:
        player_dir = Path(__file__).parent / "roms"

    player_path = player_dir / name

    if not player_path.is_file():
        raise PlayerNotFoundError(
            f"GBS player ROM not found: {player_path} "
            f"(use --player or set {PLAYER_ENV_VAR})"
        )

    return player_path


def validate_player(data: bytes) -> bytes:
    """
    Check that data can serve as the GBS player.

    Returns:
        The first 0x400 bytes of data

    Raises:
        InvalidPlayerError: If data is shorter than 0x400 bytes
    """
    if len(data) < PLAYER_LENGTH:
        raise InvalidPlayerError(
            f"GBS player too short: need {PLAYER_LENGTH} bytes, got {len(data)}"
        )
    return bytes(data[:PLAYER_LENGTH])


def load_player(path: Optional[Union[str, Path]] = None) -> bytes:
    """
    Load and validate the GBS player ROM.

    Args:
        path: Explicit player file; falls back to GBS2GB_PLAYER, then the
            bundled ROM

    Raises:
        PlayerNotFoundError: If no player file can be found
        InvalidPlayerError: If the file is too short
    """
    if path is None:
        path = os.environ.get(PLAYER_ENV_VAR) or None

    if path is None:
        player_path = get_player_path()
    else:
        player_path = Path(path)
        if not player_path.is_file():
            raise PlayerNotFoundError(f"GBS player ROM not found: {player_path}")

    return validate_player(player_path.read_bytes())


def player_from_file(path: Union[str, Path]) -> PlayerSource:
    """Build a PlayerSource that reads path on each call."""
    return lambda: load_player(path)


def player_from_bytes(data: bytes) -> PlayerSource:
    """Build a PlayerSource over in-memory player data."""
    player = validate_player(data)
    return lambda: player
