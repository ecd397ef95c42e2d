"""Hardware (MAC) address parsing."""

import re
from dataclasses import dataclass
from typing import Any

from lanwake.core.errors import InvalidAddressFormat

# Accepted shapes:
#   "AA:BB:CC:DD:EE:FF"   colon-delimited
#   "AA-BB-CC-DD-EE-FF"   hyphen-delimited
#   "AABBCCDDEEFF"        bare
# The backreference forces a single delimiter throughout.
_DELIMITED_RE = re.compile(r"^[0-9A-Fa-f]{2}([:\-])(?:[0-9A-Fa-f]{2}\1){4}[0-9A-Fa-f]{2}$")
_BARE_RE = re.compile(r"^[0-9A-Fa-f]{12}$")

OCTET_COUNT = 6


@dataclass(frozen=True)
class HardwareAddress:
    """A validated 6-byte physical address."""

    octets: bytes

    def __post_init__(self) -> None:
        if not isinstance(self.octets, (bytes, bytearray)) or len(self.octets) != OCTET_COUNT:
            raise InvalidAddressFormat(self.octets, f"expected {OCTET_COUNT} bytes")
        object.__setattr__(self, "octets", bytes(self.octets))

    def __str__(self) -> str:
        return ":".join(f"{b:02X}" for b in self.octets)

    def __bytes__(self) -> bytes:
        return self.octets


def parse_mac(value: Any) -> HardwareAddress:
    """
    Parse a textual MAC address.

    Args:
        value: MAC address such as "00:1B:44:11:3A:B7", "00-1b-44-11-3a-b7"
            or "001B44113AB7"

    Returns:
        HardwareAddress with octets in textual order

    Raises:
        InvalidAddressFormat: For any other shape, a wrong length or
            non-hex characters
    """
    if not isinstance(value, str):
        raise InvalidAddressFormat(value, "expected a string")
    text = value.strip()
    if not (_DELIMITED_RE.match(text) or _BARE_RE.match(text)):
        hex_digits = text.replace(":", "").replace("-", "")
        if len(hex_digits) != 2 * OCTET_COUNT:
            raise InvalidAddressFormat(value, "expected 12 hex digits")
        raise InvalidAddressFormat(value, "malformed hex digits or delimiters")
    return HardwareAddress(bytes.fromhex(text.replace(":", "").replace("-", "")))


def is_valid_mac(value: Any) -> bool:
    """Return True if *value* parses as a MAC address."""
    try:
        parse_mac(value)
    except InvalidAddressFormat:
        return False
    return True
