"""
Lock Board Scanner

Polls every lock-control board address in ascending order and collects
the raw status each board returns.

Enumeration is fail-fast: the first write or read error aborts the scan
and the statuses gathered from earlier boards are discarded. A board
that simply does not answer (zero bytes read) is skipped.
"""

import time
from dataclasses import dataclass
from typing import Iterable

from hardware_test.core.app_logging import get_logger, log_device_action
from hardware_test.devices.base import DeviceError
from hardware_test.protocols.lock_codec import (
    MAX_BOARD_ADDRESS,
    MIN_BOARD_ADDRESS,
    query_all_command,
)
from hardware_test.transport.base import BaseTransport, TransportError

logger = get_logger(__name__)

BOARD_SETTLE_DELAY = 0.05
BOARD_READ_TIMEOUT = 2.0
BOARD_READ_SIZE = 256


@dataclass(frozen=True)
class LockStatus:
    """Snapshot of one board's reply to a query-all command."""

    board_address: int
    data: bytes

    @property
    def length(self) -> int:
        return len(self.data)

    def __str__(self) -> str:
        return f"board 0x{self.board_address:02X}: {self.length} bytes {self.data.hex(' ').upper()}"


class BoardQueryError(DeviceError):
    """A board query failed; the whole enumeration is abandoned."""

    def __init__(self, board_address: int, message: str) -> None:
        super().__init__(message, code="BOARD_QUERY_FAILED")
        self.board_address = board_address


class BoardScanner:
    """Sequential query of boards 1..8 over one open transport."""

    def __init__(
        self,
        transport: BaseTransport,
        boards: Iterable[int] | None = None,
        settle_delay: float = BOARD_SETTLE_DELAY,
        read_timeout: float = BOARD_READ_TIMEOUT,
        read_size: int = BOARD_READ_SIZE,
    ) -> None:
        self._transport = transport
        self._boards = sorted(
            boards if boards is not None else range(MIN_BOARD_ADDRESS, MAX_BOARD_ADDRESS + 1)
        )
        for address in self._boards:
            if not MIN_BOARD_ADDRESS <= address <= MAX_BOARD_ADDRESS:
                raise ValueError(f"board address out of range: {address}")
        self._settle_delay = settle_delay
        self._read_timeout = read_timeout
        self._read_size = read_size

    @property
    def boards(self) -> list[int]:
        return list(self._boards)

    def scan(self) -> list[LockStatus]:
        """
        Query every board.

        Returns:
            One LockStatus per responding board, in address order

        Raises:
            BoardQueryError: on the first transport failure
        """
        statuses: list[LockStatus] = []

        logger.info(f"Querying {len(self._boards)} lock boards")

        for address in self._boards:
            status = self._query_board(address)
            if status is None:
                logger.debug(f"Board 0x{address:02X}: no response")
                continue
            statuses.append(status)

        log_device_action(
            "query_all",
            "lock",
            details={
                "queried": len(self._boards),
                "responding": [s.board_address for s in statuses],
            },
        )
        logger.info(f"{len(statuses)}/{len(self._boards)} boards responded")
        return statuses

    def _query_board(self, address: int) -> LockStatus | None:
        try:
            self._transport.write(query_all_command(address))
        except TransportError as e:
            self._abort(address, e)
            raise BoardQueryError(address, f"query board {address} failed: {e}") from e

        time.sleep(self._settle_delay)

        try:
            self._transport.prepare_read(self._read_timeout)
            data = self._transport.read(self._read_size)
        except TransportError as e:
            self._abort(address, e)
            raise BoardQueryError(address, f"read board {address} response failed: {e}") from e

        if not data:
            return None
        return LockStatus(board_address=address, data=bytes(data))

    def _abort(self, address: int, error: TransportError) -> None:
        logger.error(f"Board scan aborted at board 0x{address:02X}: {error}")
        log_device_action(
            "query_all", "lock", success=False, error=str(error), details={"board": address}
        )

