"""
Mock Transport Implementation

Scripted in-memory transport for exercising controllers without
hardware. Reads are served from a queue of canned responses; a queued
exception is raised instead of returned, which is how read failures
are simulated.
"""

from collections import deque
from typing import Any

from hardware_test.core.app_logging import get_logger
from hardware_test.transport.base import BaseTransport, DialFailure, NotConnected

logger = get_logger(__name__)


class MockTransport(BaseTransport):
    """Queue-based transport loaded with expected responses and errors."""

    def __init__(self, fail_connect: bool = False) -> None:
        self._connected: bool = False
        self._fail_connect = fail_connect
        self._tx_buffer: list[bytes] = []
        self._rx_buffer: deque[bytes | Exception] = deque()
        self._write_errors: deque[Exception | None] = deque()
        self.read_deadlines: list[float] = []
        self.flush_count: int = 0
        self.connect_count: int = 0
        self.disconnect_count: int = 0

    def connect(self) -> None:
        """Simulate opening the channel."""
        if self._fail_connect:
            raise DialFailure("[MOCK] dial refused")
        logger.info("[MOCK] Connected")
        self._connected = True
        self.connect_count += 1

    def disconnect(self) -> None:
        """Simulate closing the channel."""
        if not self._connected:
            return
        logger.info("[MOCK] Disconnected")
        self._connected = False
        self.disconnect_count += 1

    def is_connected(self) -> bool:
        return self._connected

    def write(self, data: bytes) -> int:
        if not self._connected:
            raise NotConnected()

        if self._write_errors:
            error = self._write_errors.popleft()
            if error is not None:
                raise error

        logger.debug(f"[MOCK] TX ({len(data)}): {data.hex()}")
        self._tx_buffer.append(bytes(data))
        return len(data)

    def read(self, size: int = 256) -> bytes:
        if not self._connected:
            raise NotConnected()

        if not self._rx_buffer:
            return b""

        item = self._rx_buffer.popleft()
        if isinstance(item, Exception):
            raise item

        data = item[:size]
        logger.debug(f"[MOCK] RX ({len(data)}): {data.hex()}")
        return data

    def set_read_deadline(self, timeout: float) -> None:
        self.read_deadlines.append(timeout)

    def flush_input(self) -> None:
        self.flush_count += 1

    def queue_response(self, response: bytes | Exception) -> None:
        """Queue a response (or an error to raise) for the next read call."""
        self._rx_buffer.append(response)

    def queue_write_error(self, error: Exception | None) -> None:
        """Queue the outcome of the next write; None lets it succeed."""
        self._write_errors.append(error)

    @property
    def sent(self) -> list[bytes]:
        """Frames written so far."""
        return list(self._tx_buffer)

    def get_last_sent(self) -> bytes | None:
        """Get the last sent frame (for testing)."""
        return self._tx_buffer[-1] if self._tx_buffer else None

    def get_info(self) -> dict[str, Any]:
        """Get transport information."""
        return {
            "type": "mock",
            "is_connected": self._connected,
            "tx_count": len(self._tx_buffer),
            "rx_pending": len(self._rx_buffer),
        }
