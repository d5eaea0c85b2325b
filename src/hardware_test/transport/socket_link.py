"""
Socket Transport Implementation

TCP channel for devices reached over the network. The dial carries a
fixed connect timeout; each read may get its own deadline through
set_read_deadline().
"""

import socket
from typing import Any

from hardware_test.core.app_logging import get_logger
from hardware_test.transport.base import (
    BaseTransport,
    DialFailure,
    NotConnected,
    ReadFailure,
    WriteFailure,
)

logger = get_logger(__name__)


class SocketTransport(BaseTransport):
    """TCP socket transport."""

    def __init__(self, host: str, port: int, dial_timeout: float = 5.0) -> None:
        self._sock: socket.socket | None = None
        self._host = host
        self._port = port
        self._dial_timeout = dial_timeout

    @property
    def address(self) -> str:
        return f"{self._host}:{self._port}"

    def connect(self) -> None:
        """
        Dial the remote endpoint.

        Raises:
            DialFailure: if the connection cannot be established in time
        """
        if self.is_connected():
            logger.warning("Socket already open, closing first")
            self.disconnect()

        try:
            self._sock = socket.create_connection(
                (self._host, self._port), timeout=self._dial_timeout
            )
        except (OSError, OverflowError) as e:
            logger.error(f"Failed to connect to {self.address}: {e}")
            raise DialFailure(f"socket dial {self.address} failed: {e}") from e

        logger.info(f"Socket connected: {self.address}")

    def disconnect(self) -> None:
        """Close the socket."""
        if self._sock is None:
            return

        try:
            self._sock.close()
            logger.info(f"Socket closed: {self.address}")
        except OSError as e:
            logger.warning(f"Error closing socket: {e}")
        finally:
            self._sock = None

    def is_connected(self) -> bool:
        """Check if the socket is open."""
        return self._sock is not None

    def write(self, data: bytes) -> int:
        """Send one frame."""
        if self._sock is None:
            raise NotConnected()

        try:
            self._sock.sendall(data)
        except OSError as e:
            logger.error(f"Socket write error: {e}")
            raise WriteFailure(f"socket write failed: {e}") from e

        logger.debug(f"TX ({len(data)}): {data.hex()}")
        return len(data)

    def read(self, size: int = 256) -> bytes:
        """Receive up to size bytes within the current deadline."""
        if self._sock is None:
            raise NotConnected()

        try:
            data = self._sock.recv(size)
        except socket.timeout as e:
            raise ReadFailure(f"socket read timed out after {self._sock.gettimeout()}s") from e
        except OSError as e:
            logger.error(f"Socket read error: {e}")
            raise ReadFailure(f"socket read failed: {e}") from e

        if not data:
            raise ReadFailure("connection closed by peer")

        logger.debug(f"RX ({len(data)}): {data.hex()}")
        return data

    def set_read_deadline(self, timeout: float) -> None:
        """Apply a fresh timeout to the next read."""
        if self._sock is not None:
            self._sock.settimeout(timeout)

    def get_info(self) -> dict[str, Any]:
        """Get transport information."""
        return {
            "type": "socket",
            "host": self._host,
            "port": self._port,
            "dial_timeout": self._dial_timeout,
            "is_connected": self.is_connected(),
        }
