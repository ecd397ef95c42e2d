"""Wake-on-LAN functionality."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from lanwake.core.address import parse_mac
from lanwake.core.errors import WakeError
from lanwake.core.packet import build_magic_packet
from lanwake.core.transport import (
    DEFAULT_BROADCAST,
    DEFAULT_PORT,
    DEFAULT_TIMEOUT,
    send_packet,
    validate_port,
)

Sender = Callable[..., Any]


@dataclass(frozen=True)
class WakeRequest:
    """Parameters for a single magic packet send."""

    mac_address: str
    ip_address: str = DEFAULT_BROADCAST
    port: int = DEFAULT_PORT
    interface: Optional[str] = None


@dataclass(frozen=True)
class WakeResult:
    """
    Outcome of one wake attempt.

    ``success`` means the datagram was accepted for transmission, not that
    the target is now awake.
    """

    mac_address: str
    ip_address: str
    port: Any
    success: bool
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    error: Optional[str] = None
    error_type: Optional[str] = None

    @classmethod
    def failed(cls, request: WakeRequest, exc: WakeError) -> "WakeResult":
        try:
            mac_address = str(parse_mac(request.mac_address))
        except WakeError:
            mac_address = request.mac_address
        return cls(
            mac_address=mac_address,
            ip_address=request.ip_address,
            port=request.port,
            success=False,
            error=str(exc),
            error_type=type(exc).__name__,
        )


def wake(
    mac_address: str,
    ip_address: str = DEFAULT_BROADCAST,
    port: int = DEFAULT_PORT,
    interface: Optional[str] = None,
    timeout: Optional[float] = DEFAULT_TIMEOUT,
    sender: Optional[Sender] = None,
) -> WakeResult:
    """
    Send a Wake-on-LAN magic packet to wake a remote machine.

    The address and port are validated before any socket is opened.

    Args:
        mac_address: MAC address of the target machine (e.g., "AA:BB:CC:DD:EE:FF")
        ip_address: Destination address (default: 255.255.255.255)
        port: UDP port for WOL packet (default: 9)
        interface: Local source IP to send from (optional)
        timeout: Socket timeout in seconds
        sender: Replacement for send_packet (same signature)

    Returns:
        Successful WakeResult

    Raises:
        InvalidAddressFormat: If the MAC address is malformed
        InvalidPort: If the port is outside [1, 65535]
        TransmissionFailed: If the datagram could not be sent
    """
    address = parse_mac(mac_address)
    port = validate_port(port)
    packet = build_magic_packet(address)
    (sender or send_packet)(
        packet, ip_address=ip_address, port=port, interface=interface, timeout=timeout
    )
    return WakeResult(
        mac_address=str(address),
        ip_address=ip_address,
        port=port,
        success=True,
    )


def wake_request(
    request: WakeRequest,
    timeout: Optional[float] = DEFAULT_TIMEOUT,
    sender: Optional[Sender] = None,
) -> WakeResult:
    """Run wake() for a WakeRequest."""
    return wake(
        request.mac_address,
        ip_address=request.ip_address,
        port=request.port,
        interface=request.interface,
        timeout=timeout,
        sender=sender,
    )
