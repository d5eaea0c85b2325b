"""
Serial Transport Implementation

Serial line channel for the lock board and the display panel.

The read timeout is fixed when the port is opened; set_read_deadline()
is therefore a no-op and every read waits at most ``read_timeout``
seconds for the first byte.
"""

from typing import Any

from hardware_test.core.app_logging import get_logger
from hardware_test.transport.base import (
    BaseTransport,
    DialFailure,
    NotConnected,
    ReadFailure,
    TransportError,
    WriteFailure,
)

logger = get_logger(__name__)


class SerialTransport(BaseTransport):
    """
    Serial transport backed by pyserial.

    Reads return as soon as at least one byte has arrived, picking up
    whatever else is already buffered, so a short reply does not block
    until ``size`` bytes are received.
    """

    def __init__(
        self,
        path: str,
        baud_rate: int = 115200,
        read_timeout: float = 5.0,
    ) -> None:
        self._serial: Any = None
        self._path = path
        self._baud_rate = baud_rate
        self._read_timeout = read_timeout

    @property
    def path(self) -> str:
        return self._path

    @property
    def baud_rate(self) -> int:
        return self._baud_rate

    def connect(self) -> None:
        """
        Open the serial port.

        Raises:
            DialFailure: if the port cannot be opened
        """
        try:
            import serial
        except ImportError:
            logger.error("pyserial not installed")
            raise TransportError(
                message="pyserial library not installed",
                code="MISSING_DEPENDENCY",
                recoverable=False,
            )

        if self.is_connected():
            logger.warning("Port already open, closing first")
            self.disconnect()

        try:
            self._serial = serial.Serial(
                port=self._path,
                baudrate=self._baud_rate,
                bytesize=serial.EIGHTBITS,
                parity=serial.PARITY_NONE,
                stopbits=serial.STOPBITS_ONE,
                timeout=self._read_timeout,
                write_timeout=self._read_timeout,
                xonxoff=False,
                rtscts=False,
                dsrdtr=False,
            )
        except (serial.SerialException, OSError, ValueError) as e:
            logger.error(f"Failed to open serial port {self._path}: {e}")
            self._serial = None
            raise DialFailure(f"serial open {self._path} failed: {e}") from e

        logger.info(f"Serial port opened: {self._path} @ {self._baud_rate} baud")

    def disconnect(self) -> None:
        """Close the serial port."""
        if self._serial is None:
            return

        try:
            if self._serial.is_open:
                self._serial.close()
                logger.info(f"Serial port closed: {self._path}")
        except Exception as e:
            logger.warning(f"Error closing serial port: {e}")
        finally:
            self._serial = None

    def is_connected(self) -> bool:
        """Check if serial port is open."""
        return self._serial is not None and self._serial.is_open

    def write(self, data: bytes) -> int:
        """Write one frame to the port."""
        if not self.is_connected():
            raise NotConnected()

        try:
            bytes_written = self._serial.write(data)
            self._serial.flush()
        except Exception as e:
            logger.error(f"Serial write error: {e}")
            raise WriteFailure(f"serial write failed: {e}") from e

        if bytes_written != len(data):
            raise WriteFailure(f"partial write: {bytes_written}/{len(data)} bytes")

        logger.debug(f"TX ({len(data)}): {data.hex()}")
        return bytes_written

    def read(self, size: int = 256) -> bytes:
        """Read up to size bytes; empty when the open-time timeout elapses."""
        if not self.is_connected():
            raise NotConnected()

        try:
            data = self._serial.read(1)
            if data:
                pending = min(self._serial.in_waiting, size - 1)
                if pending > 0:
                    data += self._serial.read(pending)
        except Exception as e:
            logger.error(f"Serial read error: {e}")
            raise ReadFailure(f"serial read failed: {e}") from e

        if data:
            logger.debug(f"RX ({len(data)}): {data.hex()}")
        return data

    def flush_input(self) -> None:
        """Discard bytes waiting in the input buffer."""
        if not self.is_connected():
            return

        try:
            self._serial.reset_input_buffer()
        except Exception as e:
            logger.error(f"Serial input flush error: {e}")
            raise ReadFailure(f"serial input flush failed: {e}") from e

    def get_info(self) -> dict[str, Any]:
        """Get transport information."""
        return {
            "type": "serial",
            "path": self._path,
            "baud_rate": self._baud_rate,
            "read_timeout": self._read_timeout,
            "is_connected": self.is_connected(),
        }
