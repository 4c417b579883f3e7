"""
GBS2GB Error Hierarchy
======================

This module defines the exception hierarchy for the GBS to GB converter.
All exceptions inherit from GBS2GBError, allowing callers to catch every
conversion-related error with a single except clause if desired.

Exception Hierarchy
-------------------
GBS2GBError (base)
├── GBSError (input file)
│   ├── InvalidHeaderError - bad magic, bad version or truncated header
│   └── IncompatibleLoadAddressError - load address overlaps the player
├── CartridgeError (output image)
│   └── ImageTooLargeError - required length exceeds the largest ROM size
└── PlayerError (bootstrap player asset)
    ├── PlayerNotFoundError - asset file missing
    └── InvalidPlayerError - asset too short to hold the player

I/O failures are not wrapped: reading the GBS file or writing the ROM raises
the built-in OSError family (FileNotFoundError, PermissionError, ...) and the
CLI reports them per file.
"""

from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class GBS2GBError(Exception):
    """
    Base exception for all converter errors.

        try:
            rom = ROMAssembler().assemble(gbs_data)
        except GBS2GBError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# GBS Input Exceptions
# =============================================================================

class GBSError(GBS2GBError):
    """Base exception for problems with the input GBS file."""
    pass


class InvalidHeaderError(GBSError):
    """
    The file does not carry a valid GBS header.

    Raised when:
    - The file is shorter than the 0x70-byte header
    - The identifier is not "GBS"
    - The version byte is not 1
    """
    pass


class IncompatibleLoadAddressError(GBSError):
    """
    The GBS load address is below the region reserved for the player.

    Code loaded below 0x470 would land on top of the interrupt vectors,
    the cartridge header or the player itself once relocated.

    Attributes:
        load_address: The offending load address
        minimum: The lowest accepted load address
    """

    def __init__(self, load_address: int, minimum: int):
        self.load_address = load_address
        self.minimum = minimum
        super().__init__(
            f"incompatible load address 0x{load_address:04X} "
            f"(must be at least 0x{minimum:04X})"
        )


# =============================================================================
# Cartridge Exceptions
# =============================================================================

class CartridgeError(GBS2GBError):
    """Base exception for output image errors."""
    pass


class ImageTooLargeError(CartridgeError):
    """
    The relocated GBS file does not fit in any supported ROM size.

    Attributes:
        required_length: Bytes needed for the player plus relocated file
        maximum: The largest supported ROM size in bytes
    """

    def __init__(self, required_length: int, maximum: Optional[int] = None):
        self.required_length = required_length
        self.maximum = maximum
        message = f"final gb file is too large: {required_length} bytes"
        if maximum is not None:
            message += f" (maximum {maximum} bytes)"
        super().__init__(message)


# =============================================================================
# Player Asset Exceptions
# =============================================================================

class PlayerError(GBS2GBError):
    """Base exception for bootstrap player asset errors."""
    pass


class PlayerNotFoundError(PlayerError):
    """
    The bootstrap player ROM could not be located.

    Pass an explicit path with --player or set GBS2GB_PLAYER.
    """
    pass


class InvalidPlayerError(PlayerError):
    """The bootstrap player data is too short to be the GBS player."""
    pass
