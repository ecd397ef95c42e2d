"""Typed failures raised by the Wake-on-LAN core."""

from typing import Any


class WakeError(Exception):
    """Base class for every expected wake failure."""


class InvalidAddressFormat(WakeError, ValueError):
    """Raised when a hardware address does not decode to exactly 6 bytes."""

    def __init__(self, value: Any, detail: str = "") -> None:
        self.value = value
        message = f"Invalid MAC address: {value!r}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class InvalidPort(WakeError, ValueError):
    """Raised when a UDP port is not an integer in [1, 65535]."""

    def __init__(self, port: Any) -> None:
        self.port = port
        super().__init__(f"Invalid port: {port!r} (expected an integer in 1-65535)")


class TransmissionFailed(WakeError):
    """Raised when the local network stack refuses the datagram."""

    def __init__(self, ip_address: str, port: int, reason: str) -> None:
        self.ip_address = ip_address
        self.port = port
        self.reason = reason
        super().__init__(f"Failed to send magic packet to {ip_address}:{port}: {reason}")
