"""
Cartridge Sizing Unit Tests
===========================

Tests for ROM size code and cartridge type derivation.
"""

import pytest

from gbs2gb.rom import (
    MAX_ROM_SIZE,
    CartridgeSize,
    CartridgeSizeInfo,
    CartridgeType,
    get_cartridge_size,
    required_image_length,
)
from gbs2gb.errors import CartridgeError, ImageTooLargeError


class TestCartridgeSize:
    """Tests for the CartridgeSize lookup table."""

    def test_nine_tiers(self):
        assert len(CartridgeSize) == 9

    def test_capacities_double(self):
        sizes = [size.to_bytes() for size in CartridgeSize]
        assert sizes[0] == 32 * 1024
        assert sizes[-1] == 8 * 1024 * 1024
        for smaller, larger in zip(sizes, sizes[1:]):
            assert larger == smaller * 2

    def test_bank_count(self):
        assert CartridgeSize.SIZE_32K.bank_count() == 0
        assert CartridgeSize.SIZE_64K.bank_count() == 4
        assert CartridgeSize.SIZE_8M.bank_count() == 512

    def test_descriptions(self):
        assert CartridgeSize.SIZE_32K.get_description() == "32 KiB (no ROM banking)"
        assert CartridgeSize.SIZE_128K.get_description() == "128 KiB (8 banks)"
        assert CartridgeSize.SIZE_1M.get_description() == "1 MiB (64 banks)"

    def test_max_rom_size(self):
        assert MAX_ROM_SIZE == 0x800000


class TestGetCartridgeSize:
    """Tests for get_cartridge_size()."""

    def test_exact_first_boundary(self):
        info = get_cartridge_size(0x8000)
        assert info == CartridgeSizeInfo(size_code=0, size_bytes=0x8000, uses_banking=False)
        assert info.cartridge_type == CartridgeType.ROM_ONLY

    def test_one_past_first_boundary(self):
        info = get_cartridge_size(0x8001)
        assert info.size_code == 1
        assert info.size_bytes == 0x10000
        assert info.uses_banking
        assert info.cartridge_type == CartridgeType.MBC1

    def test_small_input(self):
        assert get_cartridge_size(1).size_code == 0

    def test_every_tier_boundary(self):
        for code in range(9):
            boundary = 0x8000 << code
            assert get_cartridge_size(boundary).size_code == code
            assert get_cartridge_size(boundary).uses_banking == (code > 0)
            if code < 8:
                assert get_cartridge_size(boundary + 1).size_code == code + 1

    def test_monotonic(self):
        lengths = [0x100, 0x7FFF, 0x8000, 0x8001, 0x20000, 0x123456, 0x7FFFFF, 0x800000]
        codes = [get_cartridge_size(n).size_code for n in lengths]
        assert codes == sorted(codes)

    def test_largest_tier(self):
        info = get_cartridge_size(0x800000)
        assert info.size_code == 8
        assert info.size is CartridgeSize.SIZE_8M

    def test_too_large(self):
        with pytest.raises(ImageTooLargeError) as exc_info:
            get_cartridge_size(0x800001)

        assert exc_info.value.required_length == 0x800001
        assert exc_info.value.maximum == MAX_ROM_SIZE
        assert isinstance(exc_info.value, CartridgeError)


class TestRequiredImageLength:

    def test_header_is_dropped(self):
        assert required_image_length(0x70, 0x470) == 0x470

    def test_typical(self):
        # 16 KiB of code at 0x3E80
        assert required_image_length(0x70 + 0x4000, 0x3E80) == 0x3E80 + 0x4000
