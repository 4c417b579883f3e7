"""
Cartridge Size and Type
=======================

Derives the ROM size code (header byte 0x148) and cartridge type (header
byte 0x147) for an output image.

ROM Sizes
---------
    Code    Size        Banks
    ----    ----        -----
    0       32 KiB      none (ROM ONLY)
    1       64 KiB      4
    2       128 KiB     8
    3       256 KiB     16
    4       512 KiB     32
    5       1 MiB       64
    6       2 MiB       128
    7       4 MiB       256
    8       8 MiB       512

Anything larger than 32 KiB needs bank switching, which is signalled with
cartridge type 1 (MBC1). No other mapper is produced.

Reference
---------
- https://gbdev.gg8.se/wiki/articles/The_Cartridge_Header#0148_-_ROM_Size
"""

from dataclasses import dataclass
from enum import IntEnum

from gbs2gb.errors import ImageTooLargeError
from gbs2gb.gbs.header import GBS_HEADER_LENGTH


class CartridgeType(IntEnum):
    """Cartridge type byte values written at 0x147."""
    ROM_ONLY = 0x00
    MBC1 = 0x01


class CartridgeSize(IntEnum):
    """ROM size codes and their capacities in bytes."""
    SIZE_32K = 0
    SIZE_64K = 1
    SIZE_128K = 2
    SIZE_256K = 3
    SIZE_512K = 4
    SIZE_1M = 5
    SIZE_2M = 6
    SIZE_4M = 7
    SIZE_8M = 8

    def to_bytes(self) -> int:
        """Get the capacity in bytes."""
        return 0x8000 << self.value

    def bank_count(self) -> int:
        """Number of 16 KiB banks, 0 for an unbanked 32 KiB ROM."""
        if self.value == 0:
            return 0
        return self.to_bytes() // 0x4000

    def get_description(self) -> str:
        size = self.to_bytes()
        if size >= 0x100000:
            text = f"{size // 0x100000} MiB"
        else:
            text = f"{size // 1024} KiB"
        banks = self.bank_count()
        return f"{text} ({banks} banks)" if banks else f"{text} (no ROM banking)"


MAX_ROM_SIZE = CartridgeSize.SIZE_8M.to_bytes()


@dataclass(frozen=True)
class CartridgeSizeInfo:
    """
    Size information for one output image.

    Attributes:
        size_code: ROM size code for header byte 0x148
        size_bytes: Capacity of the image in bytes
        uses_banking: True for every size above 32 KiB
    """
    size_code: int
    size_bytes: int
    uses_banking: bool

    @property
    def cartridge_type(self) -> CartridgeType:
        """Cartridge type byte for header offset 0x147."""
        return CartridgeType.MBC1 if self.uses_banking else CartridgeType.ROM_ONLY

    @property
    def size(self) -> CartridgeSize:
        return CartridgeSize(self.size_code)


def required_image_length(gbs_length: int, load_address: int) -> int:
    """
    Bytes needed to hold a GBS file relocated to its load address.

    The header is dropped logically: the code that followed it starts at
    load_address, so the end of the file lands at
    load_address + gbs_length - 0x70.
    """
    return gbs_length + load_address - GBS_HEADER_LENGTH


def get_cartridge_size(required_length: int) -> CartridgeSizeInfo:
    """
    Pick the smallest ROM size that holds required_length bytes.

    Args:
        required_length: Minimum image length in bytes

    Returns:
        CartridgeSizeInfo for the chosen tier

    Raises:
        ImageTooLargeError: If required_length exceeds 8 MiB

    Example:
        >>> get_cartridge_size(0x8000)
        CartridgeSizeInfo(size_code=0, size_bytes=32768, uses_banking=False)
        >>> get_cartridge_size(0x8001).size_code
        1
    """
    for size in CartridgeSize:
        if required_length <= size.to_bytes():
            return CartridgeSizeInfo(
                size_code=size.value,
                size_bytes=size.to_bytes(),
                uses_banking=size is not CartridgeSize.SIZE_32K,
            )

    raise ImageTooLargeError(required_length, MAX_ROM_SIZE)
