"""
Shared test fixtures
====================

Synthetic GBS files and a synthetic player ROM, so the tests never need the
real GBSPlay binary.
"""

import struct
from typing import Callable

import pytest


def make_player() -> bytes:
    """
    A 0x400-byte stand-in for the GBS player.

    The byte pattern avoids the values written by the timer interrupt
    patches (0xC3 and 0x05) at their destinations, so those writes are
    visible in comparisons.
    """
    return bytes((i * 5 + 0x11) & 0xFF for i in range(0x400))


def make_gbs(
    load_address: int = 0x0470,
    init_address: int = 0x0480,
    play_address: int = 0x0490,
    stack_pointer: int = 0xDFFF,
    number_of_songs: int = 1,
    first_song: int = 1,
    timer_modulo: int = 0,
    timer_control: int = 0,
    title: bytes = b"Test Song",
    author: bytes = b"Test Author",
    copyright: bytes = b"2024 Test",
    code: bytes = bytes(range(256)) * 4,
    identifier: bytes = b"GBS",
    version: int = 1,
) -> bytes:
    """
    Build GBS file data.

    Layout (little-endian):
    - 3 bytes: "GBS" magic
    - 1 byte: version
    - 1 byte each: song count, first song
    - 2 bytes each: load, init, play, stack pointer
    - 1 byte each: timer modulo, timer control
    - 32 bytes each: title, author, copyright (NUL padded)
    - n bytes: code
    """
    header = struct.pack(
        "<3sBBBHHHHBB32s32s32s",
        identifier,
        version,
        number_of_songs,
        first_song,
        load_address,
        init_address,
        play_address,
        stack_pointer,
        timer_modulo,
        timer_control,
        title,
        author,
        copyright,
    )
    return header + code


@pytest.fixture
def player_data() -> bytes:
    return make_player()


@pytest.fixture
def gbs_data() -> bytes:
    """A minimal valid GBS file loading at 0x470."""
    return make_gbs()


@pytest.fixture
def gbs_factory() -> Callable[..., bytes]:
    """Factory fixture for GBS files with custom header fields."""
    return make_gbs


@pytest.fixture
def player_file(tmp_path, player_data):
    """The synthetic player written to disk."""
    path = tmp_path / "GBSPlay103_Mod.gb"
    path.write_bytes(player_data)
    return path
