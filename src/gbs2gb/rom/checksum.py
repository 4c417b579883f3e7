"""
Cartridge Checksum Calculations
===============================

This module provides the two checksums defined by the Game Boy cartridge
header.

Header Checksum (0x14D)
-----------------------
Computed over header bytes 0x134-0x14C:

    x = 0
    for each byte b: x = x - b - 1

The boot ROM refuses to start a cartridge whose header checksum is wrong,
so this one matters on real hardware.

Global Checksum (0x14E-0x14F)
-----------------------------
A 16-bit sum of the ROM bytes, stored big-endian. No hardware checks it.
The bytes skipped by the sum are 0x14F and 0x150, as existing converted ROMs
were built that way; the textbook definition skips 0x14E-0x14F instead.
Because 0x14E is part of its own sum, a stored global checksum does not in
general verify against a recalculation.

Reference
---------
- https://gbdev.gg8.se/wiki/articles/The_Cartridge_Header#014D_-_Header_Checksum
"""

HEADER_CHECKSUM_START = 0x134
HEADER_CHECKSUM_END = 0x14D  # exclusive
HEADER_CHECKSUM_OFFSET = 0x14D

GLOBAL_CHECKSUM_OFFSET = 0x14E
GLOBAL_CHECKSUM_EXCLUDED = frozenset((0x14F, 0x150))


def header_checksum(data: bytes) -> int:
    """
    Calculate the header checksum over a byte sequence.

    Args:
        data: The header bytes 0x134-0x14C (25 bytes)

    Returns:
        8-bit checksum value

    Example:
        >>> header_checksum(bytes(25))
        231
    """
    checksum = 0
    for b in data:
        checksum = (checksum - b - 1) & 0xFF
    return checksum


def global_checksum(image: bytes) -> int:
    """
    Calculate the global checksum of a ROM image.

    Args:
        image: The complete ROM image

    Returns:
        16-bit checksum value
    """
    checksum = sum(image) & 0xFFFF
    for offset in GLOBAL_CHECKSUM_EXCLUDED:
        if offset < len(image):
            checksum = (checksum - image[offset]) & 0xFFFF
    return checksum


def write_header_checksum(buf: bytearray) -> int:
    """Recalculate the header checksum of buf in place and return it."""
    checksum = header_checksum(buf[HEADER_CHECKSUM_START:HEADER_CHECKSUM_END])
    buf[HEADER_CHECKSUM_OFFSET] = checksum
    return checksum


def write_global_checksum(buf: bytearray) -> int:
    """Recalculate the global checksum of buf in place and return it."""
    checksum = global_checksum(buf)
    buf[GLOBAL_CHECKSUM_OFFSET:GLOBAL_CHECKSUM_OFFSET + 2] = checksum.to_bytes(2, "big")
    return checksum


def verify_header_checksum(image: bytes) -> bool:
    """Check the stored header checksum of a ROM image."""
    if len(image) <= HEADER_CHECKSUM_OFFSET:
        return False
    expected = header_checksum(image[HEADER_CHECKSUM_START:HEADER_CHECKSUM_END])
    return image[HEADER_CHECKSUM_OFFSET] == expected
