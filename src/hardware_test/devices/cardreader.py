"""
USB HID Card Reader

Thin wrapper over hidapi: find the reader by VID/PID, capture raw
reports, close. No framing is involved.
"""

from typing import Any

from hardware_test.core.app_logging import get_logger, log_device_action
from hardware_test.devices.base import EmptyResponse
from hardware_test.transport.base import (
    DialFailure,
    NotConnected,
    ReadFailure,
    TransportError,
)

logger = get_logger(__name__)

REPORT_SIZE = 64
DEFAULT_READ_TIMEOUT = 5.0


class CardReader:
    """HID card reader identified by vendor and product id."""

    name = "cardreader"

    def __init__(self, vid: int, pid: int, read_timeout: float = DEFAULT_READ_TIMEOUT) -> None:
        self._vid = vid
        self._pid = pid
        self._read_timeout = read_timeout
        self._device: Any = None
        self._manufacturer: str = ""
        self._product: str = ""
        self._last_error: TransportError | None = None

    @property
    def is_connected(self) -> bool:
        return self._device is not None

    @property
    def manufacturer(self) -> str:
        return self._manufacturer

    @property
    def product(self) -> str:
        return self._product

    @property
    def last_error(self) -> TransportError | None:
        return self._last_error

    def connect(self) -> None:
        """
        Open the first HID device matching VID/PID.

        Raises:
            DialFailure: if the ids are invalid, no device matches, or open fails
        """
        if self._vid == 0 or self._pid == 0:
            raise DialFailure("invalid VID/PID")

        try:
            import hid
        except ImportError:
            raise TransportError(
                message="hidapi library not installed",
                code="MISSING_DEPENDENCY",
                recoverable=False,
            )

        devices = hid.enumerate(self._vid, self._pid)
        if not devices:
            raise DialFailure(
                f"HID device not found (VID: 0x{self._vid:04X}, PID: 0x{self._pid:04X})"
            )

        info = devices[0]
        device = hid.device()
        try:
            device.open_path(info["path"])
        except (OSError, ValueError) as e:
            raise DialFailure(f"open HID device failed: {e}") from e

        self._device = device
        self._manufacturer = info.get("manufacturer_string") or ""
        self._product = info.get("product_string") or ""
        logger.info(
            f"Card reader connected (VID: 0x{self._vid:04X}, PID: 0x{self._pid:04X})"
        )

    def disconnect(self) -> None:
        """Close the device. No-op when already closed."""
        if self._device is None:
            return
        try:
            self._device.close()
        finally:
            self._device = None

    def read(self, timeout: float | None = None) -> str:
        """
        Wait for one report.

        Args:
            timeout: Seconds to wait for data; defaults to the reader's read_timeout

        Returns:
            Report bytes as an upper-case hex string

        Raises:
            NotConnected: if the reader is not open
            ReadFailure: on device error
            EmptyResponse: if nothing arrived within the timeout
        """
        if self._device is None:
            raise NotConnected("card reader not connected")

        if timeout is None:
            timeout = self._read_timeout

        try:
            data = self._device.read(REPORT_SIZE, int(timeout * 1000))
        except (OSError, ValueError) as e:
            raise ReadFailure(f"card reader read failed: {e}") from e

        if not data:
            raise EmptyResponse("no data")

        return bytes(data).hex().upper()

    def test_connection(self) -> bool:
        """Open and close the reader; the card itself is not required."""
        self._last_error = None
        try:
            self.connect()
        except TransportError as e:
            self._last_error = e
            log_device_action("probe", self.name, success=False, error=str(e))
            return False

        try:
            logger.info(f"Device info: {self._product} - {self._manufacturer}")
            log_device_action(
                "probe",
                self.name,
                details={"manufacturer": self._manufacturer, "product": self._product},
            )
            return True
        finally:
            self.disconnect()
