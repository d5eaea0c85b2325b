"""
Hardware Test Transport Layer

Serial and socket channels behind one connect/read/write contract.
"""

from dataclasses import dataclass

from hardware_test.transport.base import (
    BaseTransport,
    ChannelState,
    DialFailure,
    NotConnected,
    ReadFailure,
    TransportError,
    WriteFailure,
)
from hardware_test.transport.serial_link import SerialTransport
from hardware_test.transport.socket_link import SocketTransport


@dataclass(frozen=True)
class SerialEndpoint:
    """Serial line address."""

    path: str
    baud_rate: int = 115200
    read_timeout: float = 5.0


@dataclass(frozen=True)
class SocketEndpoint:
    """TCP address."""

    host: str
    port: int
    dial_timeout: float = 5.0


Endpoint = SerialEndpoint | SocketEndpoint


def create_transport(endpoint: Endpoint) -> BaseTransport:
    """Build the transport variant matching the endpoint."""
    if isinstance(endpoint, SerialEndpoint):
        return SerialTransport(endpoint.path, endpoint.baud_rate, endpoint.read_timeout)
    if isinstance(endpoint, SocketEndpoint):
        return SocketTransport(endpoint.host, endpoint.port, endpoint.dial_timeout)
    raise TypeError(f"unsupported endpoint: {endpoint!r}")


__all__ = [
    "BaseTransport",
    "ChannelState",
    "DialFailure",
    "NotConnected",
    "ReadFailure",
    "TransportError",
    "WriteFailure",
    "SerialTransport",
    "SocketTransport",
    "SerialEndpoint",
    "SocketEndpoint",
    "Endpoint",
    "create_transport",
]
