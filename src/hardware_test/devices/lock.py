"""
Lock Board Controller

Drives a lock-control board over serial or TCP: connectivity probe,
fire-and-forget lock opening, and a status query of every board.
"""

from hardware_test.core.app_logging import get_logger, log_device_action
from hardware_test.devices.base import DEFAULT_PROBE_TIMEOUT, DeviceController
from hardware_test.devices.board_scan import (
    BOARD_READ_TIMEOUT,
    BOARD_SETTLE_DELAY,
    BoardScanner,
    LockStatus,
)
from hardware_test.protocols.lock_codec import open_command, query_command
from hardware_test.transport import Endpoint
from hardware_test.transport.base import BaseTransport

logger = get_logger(__name__)


class LockController(DeviceController):
    """Lock-control board controller."""

    name = "lock"

    def __init__(
        self,
        channel: Endpoint | BaseTransport,
        probe_timeout: float = DEFAULT_PROBE_TIMEOUT,
        board_read_timeout: float = BOARD_READ_TIMEOUT,
        board_settle_delay: float = BOARD_SETTLE_DELAY,
    ) -> None:
        super().__init__(channel, probe_timeout)
        self._board_read_timeout = board_read_timeout
        self._board_settle_delay = board_settle_delay

    def probe_command(self) -> bytes:
        return query_command()

    def query(self) -> None:
        """Send the global query command."""
        self.write(query_command())

    def open(self, board_address: int, lock_address: int) -> None:
        """Open one lock. The board's reply is not awaited."""
        self.write(open_command(board_address, lock_address))
        logger.info(f"Open lock {lock_address} on board 0x{board_address:02X}")
        log_device_action(
            "open", self.name, details={"board": board_address, "lock": lock_address}
        )

    def query_all(self) -> list[LockStatus]:
        """
        Query boards 1..8 in order.

        Returns:
            Statuses of the boards that answered

        Raises:
            NotConnected: if the controller is not connected
            BoardQueryError: on the first failed board; nothing is returned
        """
        self._require_connected()
        scanner = BoardScanner(
            self._transport,
            settle_delay=self._board_settle_delay,
            read_timeout=self._board_read_timeout,
        )
        return scanner.scan()
