"""Tests for MAC address parsing."""

import pytest

from lanwake.core.address import HardwareAddress, is_valid_mac, parse_mac
from lanwake.core.errors import InvalidAddressFormat, WakeError

EXPECTED = bytes([0x00, 0x1B, 0x44, 0x11, 0x3A, 0xB7])


class TestParseMac:
    """Tests for parse_mac."""

    @pytest.mark.parametrize(
        "text",
        [
            "00:1B:44:11:3A:B7",
            "00-1B-44-11-3A-B7",
            "001B44113AB7",
            "00:1b:44:11:3a:b7",
            "00-1b-44-11-3a-b7",
            "001b44113ab7",
        ],
    )
    def test_all_formats_give_same_octets(self, text: str) -> None:
        """Colon, hyphen and bare forms decode identically, in any case."""
        assert parse_mac(text).octets == EXPECTED

    def test_octet_order_preserved(self) -> None:
        address = parse_mac("01:02:03:04:05:06")
        assert list(address.octets) == [1, 2, 3, 4, 5, 6]

    def test_surrounding_whitespace_ignored(self) -> None:
        assert parse_mac("  00:1B:44:11:3A:B7\n").octets == EXPECTED

    def test_str_is_canonical_colon_form(self) -> None:
        assert str(parse_mac("001b44113ab7")) == "00:1B:44:11:3A:B7"

    @pytest.mark.parametrize(
        "text",
        [
            "00:1B:44:11:3A:ZZ",  # non-hex
            "g01B44113AB7",  # non-hex, bare
            "00:1B:44:11:3A",  # too short
            "00:1B:44:11:3A:B7:00",  # too long
            "001B44113AB",  # 11 digits
            "001B44113AB7FF",  # 14 digits
            "00:1B-44:11:3A:B7",  # mixed delimiters
            "001B:44113AB7",  # misplaced delimiter
            "0:1B:44:11:3A:B7:7",  # wrong grouping
            "00 1B 44 11 3A B7",  # unsupported delimiter
            "00.1B.44.11.3A.B7",
            "",
            "   ",
        ],
    )
    def test_rejects_malformed(self, text: str) -> None:
        with pytest.raises(InvalidAddressFormat):
            parse_mac(text)

    @pytest.mark.parametrize("value", [None, 0x001B44113AB7, b"001B44113AB7"])
    def test_rejects_non_string(self, value: object) -> None:
        with pytest.raises(InvalidAddressFormat):
            parse_mac(value)

    def test_error_carries_offending_value(self) -> None:
        with pytest.raises(InvalidAddressFormat) as excinfo:
            parse_mac("00:1B:44:11:3A:ZZ")
        assert excinfo.value.value == "00:1B:44:11:3A:ZZ"
        assert "00:1B:44:11:3A:ZZ" in str(excinfo.value)

    def test_error_is_value_error_and_wake_error(self) -> None:
        with pytest.raises(ValueError):
            parse_mac("nope")
        with pytest.raises(WakeError):
            parse_mac("nope")


class TestHardwareAddress:
    def test_requires_six_bytes(self) -> None:
        with pytest.raises(InvalidAddressFormat):
            HardwareAddress(b"\x00" * 5)
        with pytest.raises(InvalidAddressFormat):
            HardwareAddress(b"\x00" * 7)

    def test_bytearray_normalised_to_bytes(self) -> None:
        address = HardwareAddress(bytearray(EXPECTED))
        assert isinstance(address.octets, bytes)
        assert bytes(address) == EXPECTED

    def test_equal_regardless_of_source_format(self) -> None:
        assert parse_mac("00-1B-44-11-3A-B7") == parse_mac("001b44113ab7")


class TestIsValidMac:
    def test_valid(self) -> None:
        assert is_valid_mac("AA:BB:CC:DD:EE:FF") is True

    def test_invalid(self) -> None:
        assert is_valid_mac("NOTAMAC") is False
