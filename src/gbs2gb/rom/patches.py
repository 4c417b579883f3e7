"""
Player Patch Table
==================

The GBS player (GBSPlay 1.03, modified) is assembled for no particular GBS
file. Before it can drive a rip, every absolute address it uses to reach the
rip's header fields and entry points has to be rewritten to where the GBS
file was relocated inside the ROM.

This module describes those rewrites as data. Each table is a tuple of
frozen patch rules; build_patch_plan() resolves them against a relocation
base and apply_patches() writes the result into an image.

Relocation Bases
----------------
    GBS_START   ROM offset of the relocated GBS header (load address - 0x70)
    GBS_CODE    ROM offset of the first code byte (the load address)
    ABSOLUTE    0, for addresses inside the player itself

Patch Order
-----------
 1. RST vector table         8 jumps into the rip's RST handlers
 2. Text pointer table       6 pointers into the title/author/copyright text
 3. Header field pointers    stack pointer, song count, timer registers
 4. EI; HALT                 idle loop opcode pair
 5. Entry sequencing         play and init addresses, song count
 6. Off-by-one fix           single byte
 7. Player check subroutine  two calls into the rip
 8. Timer interrupt          only if the rip sets timer control bit 6
 9. Player revision recoding jump targets moved by the 4-byte larger player

Destinations never overlap, so the order only matters for readability of
the debug log.
"""

from dataclasses import dataclass
from enum import Enum
import logging
from typing import Union

from gbs2gb.gbs.header import (
    GBS_HEADER_LENGTH,
    OFFSET_FIRST_SONG,
    OFFSET_INIT_ADDRESS,
    OFFSET_NUMBER_OF_SONGS,
    OFFSET_PLAY_ADDRESS,
    OFFSET_STACK_POINTER,
    OFFSET_TIMER_CONTROL,
    OFFSET_TIMER_MODULO,
    OFFSET_TITLE,
    TIMER_INTERRUPT_FLAG,
)

# Logger for this module
logger = logging.getLogger(__name__)


# =============================================================================
# Player Layout Constants
# =============================================================================

# Start of the player code that follows the cartridge header
PLAYER_ENTRYPOINT = 0x150

# The player occupies the first 0x400 bytes of the ROM
PLAYER_LENGTH = 0x400

# The player revision shipped here is 4 bytes longer than the one the
# original address map was written for.
PLAYER_REVISION_SHIFT = 4

FIELD_POINTER_REGION = PLAYER_ENTRYPOINT + 0x07
ENTRY_SEQUENCE_REGION = PLAYER_ENTRYPOINT

OPCODE_JP = 0xC3
OPCODE_EI = 0xFB
OPCODE_HALT = 0x76


# =============================================================================
# Patch Rules
# =============================================================================

class RelocationBase(Enum):
    """Which base address a patch value is relative to."""
    ABSOLUTE = "absolute"
    GBS_START = "gbs_start"
    GBS_CODE = "gbs_code"

    def resolve(self, gbs_start: int) -> int:
        if self is RelocationBase.GBS_START:
            return gbs_start
        if self is RelocationBase.GBS_CODE:
            return gbs_start + GBS_HEADER_LENGTH
        return 0


@dataclass(frozen=True)
class PatchEntry:
    """
    A concrete write into the ROM image.

    Attributes:
        offset: ROM offset of the first byte written
        data: Bytes to write
        description: Short label for logs and test failures
    """
    offset: int
    data: bytes
    description: str = ""

    @property
    def end(self) -> int:
        """ROM offset one past the last byte written."""
        return self.offset + len(self.data)

    def apply(self, image: bytearray) -> None:
        image[self.offset:self.end] = self.data


@dataclass(frozen=True)
class AddressPatch:
    """
    Rule that writes a 16-bit little-endian address.

    The written value is base + delta, where base is resolved from the
    relocation of the GBS file.
    """
    offset: int
    base: RelocationBase
    delta: int
    description: str = ""

    def value(self, gbs_start: int) -> int:
        return (self.base.resolve(gbs_start) + self.delta) & 0xFFFF

    def resolve(self, gbs_start: int) -> PatchEntry:
        return PatchEntry(
            offset=self.offset,
            data=self.value(gbs_start).to_bytes(2, "little"),
            description=self.description,
        )


@dataclass(frozen=True)
class BytePatch:
    """Rule that writes fixed bytes regardless of relocation."""
    offset: int
    data: bytes
    description: str = ""

    def resolve(self, gbs_start: int) -> PatchEntry:
        return PatchEntry(offset=self.offset, data=self.data, description=self.description)


PatchRule = Union[AddressPatch, BytePatch]


# =============================================================================
# Patch Tables
# =============================================================================

# Each RST shim at 0x00, 0x08, ... 0x38 is a JP into the matching RST
# handler at the start of the rip's code.
RST_VECTOR_TABLE: tuple[AddressPatch, ...] = tuple(
    AddressPatch(0x01 + i * 8, RelocationBase.GBS_CODE, i * 8, f"rst 0x{i * 8:02X}")
    for i in range(8)
)

# Pointers stored between the RST shims; each addresses 16 characters of
# the title/author/copyright block of the relocated header.
TEXT_POINTER_TABLE: tuple[AddressPatch, ...] = tuple(
    AddressPatch(0x0C + i * 8, RelocationBase.GBS_START, OFFSET_TITLE + i * 16, f"text {i}")
    for i in range(6)
)

FIELD_POINTER_TABLE: tuple[AddressPatch, ...] = (
    AddressPatch(FIELD_POINTER_REGION + 0x00, RelocationBase.GBS_START, OFFSET_STACK_POINTER, "stack pointer"),
    AddressPatch(FIELD_POINTER_REGION + 0x21, RelocationBase.GBS_START, OFFSET_NUMBER_OF_SONGS, "number of songs"),
    AddressPatch(FIELD_POINTER_REGION + 0x2A, RelocationBase.GBS_START, OFFSET_TIMER_CONTROL, "timer control"),
    AddressPatch(FIELD_POINTER_REGION + 0x39, RelocationBase.GBS_START, OFFSET_TIMER_CONTROL, "timer control"),
    AddressPatch(FIELD_POINTER_REGION + 0x44, RelocationBase.GBS_START, OFFSET_TIMER_MODULO, "timer modulo"),
    AddressPatch(FIELD_POINTER_REGION + 0x58, RelocationBase.GBS_START, OFFSET_FIRST_SONG, "first song"),
    AddressPatch(FIELD_POINTER_REGION + 0x72, RelocationBase.GBS_START, OFFSET_TIMER_CONTROL, "timer control"),
)

EI_HALT_PATCH = BytePatch(PLAYER_ENTRYPOINT + 0x92, bytes([OPCODE_EI, OPCODE_HALT]), "ei; halt")

ENTRY_SEQUENCE_TABLE: tuple[AddressPatch, ...] = (
    AddressPatch(ENTRY_SEQUENCE_REGION + 0x99, RelocationBase.GBS_START, OFFSET_PLAY_ADDRESS, "play address"),
    AddressPatch(ENTRY_SEQUENCE_REGION + 0xB8, RelocationBase.GBS_START, OFFSET_NUMBER_OF_SONGS, "number of songs"),
    AddressPatch(ENTRY_SEQUENCE_REGION + 0xC7, RelocationBase.GBS_START, OFFSET_NUMBER_OF_SONGS, "number of songs"),
    AddressPatch(ENTRY_SEQUENCE_REGION + 0x104, RelocationBase.GBS_START, OFFSET_INIT_ADDRESS, "init address"),
)

OFF_BY_ONE_PATCH = BytePatch(PLAYER_ENTRYPOINT + 0x65, bytes([0x64]), "off-by-one fix")

# Operands of the v-blank (0x40) and timer (0x50) interrupt vectors
PLAYER_CHECK_TABLE: tuple[AddressPatch, ...] = (
    AddressPatch(0x41, RelocationBase.GBS_CODE, 0x40, "player check 1"),
    AddressPatch(0x51, RelocationBase.GBS_CODE, 0x48, "player check 2"),
)

TIMER_INTERRUPT_TABLE: tuple[BytePatch, ...] = (
    BytePatch(0x40, bytes([OPCODE_JP]), "v-blank vector jp"),
    BytePatch(0x50, bytes([OPCODE_JP]), "timer vector jp"),
    BytePatch(PLAYER_ENTRYPOINT + 0x38, bytes([0x05]), "interrupt enable"),
    BytePatch(PLAYER_ENTRYPOINT + 0x5A, bytes([0x05]), "interrupt enable"),
)

PLAYER_RECODING_TABLE: tuple[AddressPatch, ...] = (
    AddressPatch(0x9D + PLAYER_REVISION_SHIFT, RelocationBase.ABSOLUTE, PLAYER_ENTRYPOINT + 0x66, "call target"),
    AddressPatch(0xA0 + PLAYER_REVISION_SHIFT, RelocationBase.ABSOLUTE, PLAYER_ENTRYPOINT + 0x10B + 1, "ld de target"),
    AddressPatch(0x102, RelocationBase.ABSOLUTE, PLAYER_ENTRYPOINT, "entry point jump"),
    AddressPatch(PLAYER_ENTRYPOINT + 0x95, RelocationBase.ABSOLUTE, PLAYER_ENTRYPOINT + 0x9E + 1, "jump target"),
    AddressPatch(PLAYER_ENTRYPOINT + 0x100, RelocationBase.ABSOLUTE, PLAYER_ENTRYPOINT + 0x92, "idle loop target"),
)


def get_rules(timer_interrupt: bool) -> list[PatchRule]:
    """
    All patch rules in application order.

    Args:
        timer_interrupt: Include the timer interrupt rewrites
    """
    rules: list[PatchRule] = []
    rules.extend(RST_VECTOR_TABLE)
    rules.extend(TEXT_POINTER_TABLE)
    rules.extend(FIELD_POINTER_TABLE)
    rules.append(EI_HALT_PATCH)
    rules.extend(ENTRY_SEQUENCE_TABLE)
    rules.append(OFF_BY_ONE_PATCH)
    rules.extend(PLAYER_CHECK_TABLE)
    if timer_interrupt:
        rules.extend(TIMER_INTERRUPT_TABLE)
    rules.extend(PLAYER_RECODING_TABLE)
    return rules


def build_patch_plan(gbs_start: int, timer_interrupt: bool = False) -> list[PatchEntry]:
    """
    Resolve every patch rule against a relocation base.

    Args:
        gbs_start: ROM offset of the relocated GBS header
        timer_interrupt: True if timer control bit 6 is set

    Returns:
        Concrete writes in application order

    Example:
        >>> plan = build_patch_plan(0x400)
        >>> plan[0]
        PatchEntry(offset=1, data=b'p\\x04', description='rst 0x00')
    """
    return [rule.resolve(gbs_start) for rule in get_rules(timer_interrupt)]


def apply_patches(image: bytearray, gbs_start: int) -> list[PatchEntry]:
    """
    Patch the player in image to run the GBS file relocated at gbs_start.

    The timer control byte is read from the relocated header inside the
    image, so the GBS file must already be copied in.

    Args:
        image: ROM image holding the player and the relocated GBS file
        gbs_start: ROM offset of the relocated GBS header

    Returns:
        The writes that were applied
    """
    tac = image[gbs_start + OFFSET_TIMER_CONTROL]
    timer_interrupt = bool(tac & TIMER_INTERRUPT_FLAG)
    if timer_interrupt:
        logger.debug(f"timer control 0x{tac:02X}: routing timer interrupt to the rip")

    plan = build_patch_plan(gbs_start, timer_interrupt)
    for entry in plan:
        entry.apply(image)
        logger.debug(f"{entry.description} 0x{entry.offset:04X}: {entry.data.hex().upper()}")

    return plan
