"""
GBS Header Definitions
======================

This module parses and validates the fixed 0x70-byte header found at the
start of every GBS (Game Boy Sound System) file.

Header Layout
-------------
All multi-byte values are little-endian.

    Offset  Size    Description
    ------  ----    -----------
    0x00    3       Identifier string ("GBS")
    0x03    1       Version (1)
    0x04    1       Number of songs (1-255)
    0x05    1       First song (usually 1)
    0x06    2       Load address ($400-$7FFF)
    0x08    2       Init address ($400-$7FFF)
    0x0A    2       Play address ($400-$7FFF)
    0x0C    2       Stack pointer
    0x0E    1       Timer modulo
    0x0F    1       Timer control
    0x10    32      Title string
    0x30    32      Author string
    0x50    32      Copyright string

Text fields are padded with NUL bytes. The display accessors strip the NUL
padding first and surrounding whitespace second; NULs between printable
characters are left alone.

Reference
---------
- GBS format: https://ocremix.org/info/GBS_Format_Specification
"""

from dataclasses import dataclass, field
import struct

from gbs2gb.errors import IncompatibleLoadAddressError, InvalidHeaderError


# =============================================================================
# Constants
# =============================================================================

GBS_HEADER_LENGTH = 0x70
GBS_IDENTIFIER = "GBS"
GBS_VERSION = 1

# Lowest load address that keeps the relocated file clear of the player.
# The header lands at load - 0x70, which must not overlap the first 0x400
# bytes of the ROM.
MIN_LOAD_ADDRESS = 0x470

# Field offsets inside the header. The patch table points the player at
# these locations inside the relocated file.
OFFSET_NUMBER_OF_SONGS = 0x04
OFFSET_FIRST_SONG = 0x05
OFFSET_LOAD_ADDRESS = 0x06
OFFSET_INIT_ADDRESS = 0x08
OFFSET_PLAY_ADDRESS = 0x0A
OFFSET_STACK_POINTER = 0x0C
OFFSET_TIMER_MODULO = 0x0E
OFFSET_TIMER_CONTROL = 0x0F
OFFSET_TITLE = 0x10
OFFSET_AUTHOR = 0x30
OFFSET_COPYRIGHT = 0x50

# Timer control bit 6: the rip wants timer interrupts instead of v-blank
TIMER_INTERRUPT_FLAG = 0x40

_HEADER_FORMAT = "<3sBBBHHHHBB32s32s32s"


def trim_header_string(data: bytes) -> str:
    """
    Convert a padded header text field to a display string.

    NUL padding is stripped from both ends first, then surrounding
    whitespace. Bytes are decoded as latin-1 so this never fails.

    Example:
        >>> trim_header_string(b"  Title \\x00\\x00")
        'Title'
        >>> trim_header_string(b"\\x00" * 32)
        ''
    """
    return data.decode("latin-1").strip("\x00").strip()


# =============================================================================
# GBS Header
# =============================================================================

@dataclass(frozen=True)
class GBSHeader:
    """
    Parsed GBS file header.

    Instances are immutable; build them with parse_header() or
    GBSHeader.from_bytes().
    """
    identifier_bytes: bytes
    version: int
    number_of_songs: int
    first_song: int
    load_address: int
    init_address: int
    play_address: int
    stack_pointer: int
    timer_modulo: int
    timer_control: int
    title_bytes: bytes = field(repr=False)
    author_bytes: bytes = field(repr=False)
    copyright_bytes: bytes = field(repr=False)

    @classmethod
    def from_bytes(cls, data: bytes) -> "GBSHeader":
        """
        Unpack a header from the first 0x70 bytes of data.

        No semantic checks are made here; see parse_header().

        Raises:
            InvalidHeaderError: If data is shorter than the header
        """
        if len(data) < GBS_HEADER_LENGTH:
            raise InvalidHeaderError(
                f"file too short for a GBS header: need {GBS_HEADER_LENGTH} "
                f"bytes, got {len(data)}"
            )

        fields = struct.unpack(_HEADER_FORMAT, bytes(data[:GBS_HEADER_LENGTH]))
        return cls(*fields)

    def to_bytes(self) -> bytes:
        """Serialize the header back to its 0x70-byte form."""
        return struct.pack(
            _HEADER_FORMAT,
            self.identifier_bytes,
            self.version,
            self.number_of_songs,
            self.first_song,
            self.load_address,
            self.init_address,
            self.play_address,
            self.stack_pointer,
            self.timer_modulo,
            self.timer_control,
            self.title_bytes,
            self.author_bytes,
            self.copyright_bytes,
        )

    # =========================================================================
    # Display Accessors
    # =========================================================================

    @property
    def identifier(self) -> str:
        return trim_header_string(self.identifier_bytes)

    @property
    def title(self) -> str:
        return trim_header_string(self.title_bytes)

    @property
    def author(self) -> str:
        return trim_header_string(self.author_bytes)

    @property
    def copyright(self) -> str:
        return trim_header_string(self.copyright_bytes)

    @property
    def uses_timer_interrupt(self) -> bool:
        """True if the rip drives playback from the timer interrupt."""
        return bool(self.timer_control & TIMER_INTERRUPT_FLAG)

    @property
    def gbs_start(self) -> int:
        """ROM offset where the file (header included) is relocated to."""
        return self.load_address - GBS_HEADER_LENGTH

    def describe(self) -> list[str]:
        """
        Human-readable summary lines for logging and CLI output.

        Example:
            >>> for line in header.describe():
            ...     print(line)
            Title:        Pokemon Red
            ...
        """
        return [
            f"Title:        {self.title}",
            f"Author:       {self.author}",
            f"Copyright:    {self.copyright}",
            f"Songs:        {self.number_of_songs} (first: {self.first_song})",
            f"Load Address: 0x{self.load_address:04X}",
            f"Init Address: 0x{self.init_address:04X}",
            f"Play Address: 0x{self.play_address:04X}",
        ]


# =============================================================================
# Parsing and Validation
# =============================================================================

def parse_header(data: bytes) -> GBSHeader:
    """
    Parse a GBS header and check its identifier and version.

    Args:
        data: At least the first 0x70 bytes of a GBS file

    Returns:
        The parsed header

    Raises:
        InvalidHeaderError: If the data is too short, or the identifier or
            version does not match
    """
    header = GBSHeader.from_bytes(data)

    if header.identifier_bytes != GBS_IDENTIFIER.encode("ascii") or header.version != GBS_VERSION:
        raise InvalidHeaderError("file does not have a valid GBS header")

    return header


def validate_header(header: GBSHeader) -> GBSHeader:
    """
    Check that a parsed header can be converted to a ROM.

    Returns:
        The same header, for chaining

    Raises:
        IncompatibleLoadAddressError: If the load address is below 0x470
    """
    if header.load_address < MIN_LOAD_ADDRESS:
        raise IncompatibleLoadAddressError(header.load_address, MIN_LOAD_ADDRESS)

    return header


def read_header(data: bytes) -> GBSHeader:
    """Parse and validate in one step."""
    return validate_header(parse_header(data))
