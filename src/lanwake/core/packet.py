"""Magic packet construction."""

from typing import Union

from wakeonlan import create_magic_packet

from lanwake.core.address import OCTET_COUNT, HardwareAddress
from lanwake.core.errors import InvalidAddressFormat

SYNC_STREAM = b"\xff" * 6
REPETITIONS = 16
PACKET_LENGTH = len(SYNC_STREAM) + OCTET_COUNT * REPETITIONS  # 102


def build_magic_packet(address: Union[HardwareAddress, bytes]) -> bytes:
    """
    Build the Wake-on-LAN magic packet for a hardware address.

    Layout: 6 bytes of 0xFF followed by the 6-byte address repeated 16 times.

    Args:
        address: Parsed HardwareAddress or its 6 raw octets

    Returns:
        The 102-byte payload

    Raises:
        InvalidAddressFormat: If the address is not exactly 6 bytes
    """
    octets = address.octets if isinstance(address, HardwareAddress) else address
    if not isinstance(octets, (bytes, bytearray)) or len(octets) != OCTET_COUNT:
        raise InvalidAddressFormat(address, f"expected {OCTET_COUNT} bytes")
    return create_magic_packet(bytes(octets).hex())


def format_packet(packet: bytes, width: int = 16) -> str:
    """Render a packet as offset-prefixed rows of hex bytes."""
    rows = []
    for offset in range(0, len(packet), width):
        chunk = packet[offset : offset + width]
        rows.append(f"{offset:04x}  " + " ".join(f"{b:02X}" for b in chunk))
    return "\n".join(rows)
