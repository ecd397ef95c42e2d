"""UDP transport for magic packets."""

import ipaddress
import socket
from typing import Any, Optional

from lanwake.core.errors import InvalidPort, TransmissionFailed

DEFAULT_BROADCAST = "255.255.255.255"
DEFAULT_PORT = 9
DEFAULT_TIMEOUT = 5.0


def validate_port(port: Any) -> int:
    """
    Check that *port* is a usable UDP destination port.

    Raises:
        InvalidPort: Unless port is an int (not bool) in [1, 65535]
    """
    if isinstance(port, bool) or not isinstance(port, int) or not 1 <= port <= 65535:
        raise InvalidPort(port)
    return port


def directed_broadcast(ip_address: str) -> str:
    """
    Resolve a CIDR network ("192.168.1.0/24") to its broadcast address.

    Anything without a prefix length is returned unchanged.

    Raises:
        ValueError: For a non-string or empty destination, or a malformed
            or non-IPv4 network
    """
    if not isinstance(ip_address, str) or not ip_address.strip():
        raise ValueError(f"destination must be a non-empty string, got {ip_address!r}")
    if "/" not in ip_address:
        return ip_address
    network = ipaddress.ip_network(ip_address, strict=False)
    if not isinstance(network, ipaddress.IPv4Network):
        raise ValueError(f"directed broadcast requires an IPv4 network, got {ip_address!r}")
    return str(network.broadcast_address)


def send_packet(
    packet: bytes,
    ip_address: str = DEFAULT_BROADCAST,
    port: int = DEFAULT_PORT,
    interface: Optional[str] = None,
    timeout: Optional[float] = DEFAULT_TIMEOUT,
) -> int:
    """
    Send *packet* as a single UDP datagram.

    Success only means the local network stack accepted the datagram. UDP
    has no acknowledgement, so this cannot tell whether the target woke up.

    Args:
        packet: Payload to send (normally the 102-byte magic packet)
        ip_address: Broadcast, unicast, hostname or IPv4 CIDR destination
            (default: 255.255.255.255)
        port: UDP port (default: 9)
        interface: Local source IP to bind before sending (optional)
        timeout: Socket timeout in seconds, None to block

    Returns:
        Number of bytes sent

    Raises:
        InvalidPort: If port is outside [1, 65535]
        TransmissionFailed: On an unusable destination, any socket-level
            error or a short send
    """
    port = validate_port(port)
    try:
        host = directed_broadcast(ip_address)
    except ValueError as exc:
        raise TransmissionFailed(ip_address, port, str(exc)) from exc
    if interface is not None and not isinstance(interface, str):
        raise TransmissionFailed(
            ip_address, port, f"interface must be an address string, got {interface!r}"
        )

    try:
        family, _, _, _, sockaddr = socket.getaddrinfo(host, port, type=socket.SOCK_DGRAM)[0]
        with socket.socket(family, socket.SOCK_DGRAM) as sock:
            if family == socket.AF_INET:
                sock.setsockopt(socket.SOL_SOCKET, socket.SO_BROADCAST, 1)
            sock.settimeout(timeout)
            if interface:
                sock.bind((interface, 0))
            sent = sock.sendto(packet, sockaddr)
    except OSError as exc:
        raise TransmissionFailed(ip_address, port, exc.strerror or str(exc)) from exc

    if sent != len(packet):
        raise TransmissionFailed(ip_address, port, f"short send ({sent} of {len(packet)} bytes)")
    return sent
