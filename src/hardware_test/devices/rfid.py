"""
RFID Reader Controller

The reader is stopped before every new read and again before the
connection is closed, so it never keeps streaming tags to a socket
nobody is listening on.
"""

from typing import Iterable

from hardware_test.core.app_logging import get_logger, log_device_action
from hardware_test.devices.base import DEFAULT_PROBE_TIMEOUT, DeviceController
from hardware_test.protocols.rfid_codec import (
    RfidCommand,
    query_power_command,
    read_epc_command,
    stop_command,
)
from hardware_test.transport import Endpoint
from hardware_test.transport.base import BaseTransport, TransportError

logger = get_logger(__name__)

RFID_SETTLE_DELAY = 0.1
DEFAULT_ANTENNAS = (1, 2, 3, 4)


class RfidReader(DeviceController):
    """RFID reader controller."""

    name = "rfid"

    def __init__(
        self,
        channel: Endpoint | BaseTransport,
        antennas: Iterable[int] = DEFAULT_ANTENNAS,
        probe_timeout: float = DEFAULT_PROBE_TIMEOUT,
        settle_delay: float = RFID_SETTLE_DELAY,
    ) -> None:
        super().__init__(channel, probe_timeout)
        self._antennas = list(antennas)
        self._settle_delay = settle_delay

    @property
    def antennas(self) -> list[int]:
        return list(self._antennas)

    def probe_command(self) -> bytes:
        return query_power_command()

    def stop(self) -> None:
        """Stop any running inventory."""
        self._send(RfidCommand.STOP, stop_command())

    def start_reading(self) -> None:
        """Stop, wait for the reader to settle, then start a continuous EPC read."""
        self.stop()
        self._settle(self._settle_delay)
        self._send(RfidCommand.READ_EPC, read_epc_command(self._antennas))
        log_device_action("start_reading", self.name, details={"antennas": self._antennas})

    def query_power(self) -> None:
        """Request the reader's power settings."""
        self._send(RfidCommand.QUERY_POWER, query_power_command())

    def _send(self, command: RfidCommand, frame: bytes) -> None:
        logger.debug(f"RFID {command.name} (MID 0x{command.value:02X})")
        self.write(frame)

    def _before_disconnect(self) -> None:
        try:
            self._transport.write(stop_command())
        except TransportError as e:
            logger.warning(f"RFID stop before disconnect failed: {e}")
