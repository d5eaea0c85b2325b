"""
Base Transport Interface

Defines the channel contract shared by the serial and socket transports:
connect/disconnect, whole-frame writes, bounded reads, and the per-read
preparation step that differs between the two variants.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any


@dataclass
class TransportError(Exception):
    """Transport-level error."""

    message: str
    code: str = "TRANSPORT_ERROR"
    recoverable: bool = True

    def __str__(self) -> str:
        return f"TransportError[{self.code}]: {self.message}"


class DialFailure(TransportError):
    """Opening the serial port or dialing the socket failed."""

    def __init__(self, message: str) -> None:
        super().__init__(message=message, code="DIAL_FAILED", recoverable=True)


class NotConnected(TransportError):
    """Read or write attempted on a closed channel."""

    def __init__(self, message: str = "not connected") -> None:
        super().__init__(message=message, code="NOT_CONNECTED", recoverable=True)


class WriteFailure(TransportError):
    """Writing a frame failed or was cut short."""

    def __init__(self, message: str) -> None:
        super().__init__(message=message, code="WRITE_FAILED", recoverable=True)


class ReadFailure(TransportError):
    """Reading failed, timed out, or the peer closed the connection."""

    def __init__(self, message: str) -> None:
        super().__init__(message=message, code="READ_FAILED", recoverable=True)


class ChannelState(Enum):
    """Transport channel states."""

    DISCONNECTED = auto()
    CONNECTED = auto()


class BaseTransport(ABC):
    """
    Abstract base class for transport implementations.

    A transport owns at most one OS-level handle at a time. Reads and
    writes on a disconnected transport raise NotConnected without
    touching the OS.
    """

    @abstractmethod
    def connect(self) -> None:
        """
        Open the underlying connection.

        Raises:
            DialFailure: if the port or socket cannot be opened
        """

    @abstractmethod
    def disconnect(self) -> None:
        """Close the connection. Calling it while disconnected is a no-op."""

    @abstractmethod
    def is_connected(self) -> bool:
        """Check if the transport is connected."""

    @abstractmethod
    def write(self, data: bytes) -> int:
        """
        Write a complete frame in a single call.

        Args:
            data: Frame bytes

        Returns:
            Number of bytes written

        Raises:
            NotConnected: if the transport is closed
            WriteFailure: on I/O error or short write
        """

    @abstractmethod
    def read(self, size: int = 256) -> bytes:
        """
        Read up to ``size`` bytes.

        Returns:
            Received bytes, possibly empty when a serial read times out

        Raises:
            NotConnected: if the transport is closed
            ReadFailure: on I/O error or timeout
        """

    def set_read_deadline(self, timeout: float) -> None:
        """Set the timeout for the next read (no-op where fixed at open)."""

    def flush_input(self) -> None:
        """Discard pending input (optional implementation)."""

    def prepare_read(self, timeout: float) -> None:
        """
        Get the transport ready for reading a response.

        Args:
            timeout: Read deadline in seconds, used where settable per call
        """
        self.flush_input()
        self.set_read_deadline(timeout)

    @property
    def state(self) -> ChannelState:
        """Current channel state."""
        return ChannelState.CONNECTED if self.is_connected() else ChannelState.DISCONNECTED

    def get_info(self) -> dict[str, Any]:
        """Get transport information (optional implementation)."""
        return {"type": self.__class__.__name__, "is_connected": self.is_connected()}
