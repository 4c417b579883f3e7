"""
GBS File Handling
=================

Parsing and validation of GBS (Game Boy Sound System) file headers.

    >>> from gbs2gb.gbs import read_header
    >>> header = read_header(Path("song.gbs").read_bytes())
    >>> print(header.title)
"""

from gbs2gb.gbs.header import (
    GBS_HEADER_LENGTH,
    GBS_IDENTIFIER,
    GBS_VERSION,
    MIN_LOAD_ADDRESS,
    TIMER_INTERRUPT_FLAG,
    GBSHeader,
    parse_header,
    validate_header,
    read_header,
    trim_header_string,
)

__all__ = [
    "GBS_HEADER_LENGTH",
    "GBS_IDENTIFIER",
    "GBS_VERSION",
    "MIN_LOAD_ADDRESS",
    "TIMER_INTERRUPT_FLAG",
    "GBSHeader",
    "parse_header",
    "validate_header",
    "read_header",
    "trim_header_string",
]
