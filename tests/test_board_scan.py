"""
Tests for the fail-fast lock board enumeration.
"""

from unittest.mock import patch

import pytest

from hardware_test.devices.board_scan import BoardQueryError, BoardScanner, LockStatus
from hardware_test.protocols.lock_codec import query_all_command
from hardware_test.transport.base import NotConnected, ReadFailure, WriteFailure
from hardware_test.transport.mock_transport import MockTransport


def board_reply(address: int) -> bytes:
    return bytes([0x80, address, 0x01, 0x00, 0x00])


@pytest.fixture
def scanner(connected_mock_transport: MockTransport) -> BoardScanner:
    """Scanner over the mock transport with no settle delay."""
    return BoardScanner(connected_mock_transport, settle_delay=0)


class TestLockStatus:
    """Tests for LockStatus snapshots."""

    def test_length(self):
        status = LockStatus(board_address=2, data=b"\x01\x02\x03")
        assert status.length == 3

    def test_str(self):
        status = LockStatus(board_address=2, data=b"\xab")
        assert "0x02" in str(status)
        assert "AB" in str(status)


class TestBoardScanner:
    """Tests for BoardScanner."""

    def test_all_boards_respond(self, scanner: BoardScanner, connected_mock_transport: MockTransport):
        for address in range(1, 9):
            connected_mock_transport.queue_response(board_reply(address))

        statuses = scanner.scan()

        assert [s.board_address for s in statuses] == list(range(1, 9))
        assert statuses[0].data == board_reply(1)
        assert connected_mock_transport.sent == [query_all_command(a) for a in range(1, 9)]

    def test_absent_board_is_omitted(self, scanner: BoardScanner, connected_mock_transport: MockTransport):
        """Board 5 reads zero bytes and is skipped without error."""
        for address in range(1, 9):
            connected_mock_transport.queue_response(b"" if address == 5 else board_reply(address))

        statuses = scanner.scan()

        assert len(statuses) == 7
        assert [s.board_address for s in statuses] == [1, 2, 3, 4, 6, 7, 8]

    def test_read_error_discards_earlier_results(
        self, scanner: BoardScanner, connected_mock_transport: MockTransport
    ):
        """Board 4 fails; statuses of boards 1..3 are not returned."""
        for address in range(1, 4):
            connected_mock_transport.queue_response(board_reply(address))
        connected_mock_transport.queue_response(ReadFailure("timeout"))
        for address in range(5, 9):
            connected_mock_transport.queue_response(board_reply(address))

        result = None
        with pytest.raises(BoardQueryError) as exc_info:
            result = scanner.scan()

        assert result is None
        assert exc_info.value.board_address == 4
        assert exc_info.value.code == "BOARD_QUERY_FAILED"
        assert isinstance(exc_info.value.__cause__, ReadFailure)
        # Enumeration stops at the failing board
        assert len(connected_mock_transport.sent) == 4

    def test_write_error_aborts(self, scanner: BoardScanner, connected_mock_transport: MockTransport):
        connected_mock_transport.queue_response(board_reply(1))
        connected_mock_transport.queue_write_error(None)
        connected_mock_transport.queue_write_error(WriteFailure("broken pipe"))

        with pytest.raises(BoardQueryError) as exc_info:
            scanner.scan()

        assert exc_info.value.board_address == 2
        assert isinstance(exc_info.value.__cause__, WriteFailure)
        assert connected_mock_transport.sent == [query_all_command(1)]

    def test_prepares_each_read(self, connected_mock_transport: MockTransport):
        scanner = BoardScanner(connected_mock_transport, settle_delay=0, read_timeout=2.0)
        scanner.scan()

        assert connected_mock_transport.read_deadlines == [2.0] * 8
        assert connected_mock_transport.flush_count == 8

    def test_boards_sorted(self, connected_mock_transport: MockTransport):
        scanner = BoardScanner(connected_mock_transport, boards=[3, 1, 2], settle_delay=0)
        assert scanner.boards == [1, 2, 3]

    def test_board_out_of_range(self, connected_mock_transport: MockTransport):
        with pytest.raises(ValueError):
            BoardScanner(connected_mock_transport, boards=[0, 1])
        with pytest.raises(ValueError):
            BoardScanner(connected_mock_transport, boards=[9])

    def test_disconnected_transport(self, mock_transport: MockTransport):
        scanner = BoardScanner(mock_transport, settle_delay=0)

        with pytest.raises(BoardQueryError) as exc_info:
            scanner.scan()
        assert isinstance(exc_info.value.__cause__, NotConnected)
        assert exc_info.value.board_address == 1

    def test_flush_error_aborts_scan(self, scanner: BoardScanner, connected_mock_transport: MockTransport):
        with patch.object(connected_mock_transport, "flush_input", side_effect=ReadFailure("unplugged")):
            with pytest.raises(BoardQueryError) as exc_info:
                scanner.scan()

        assert exc_info.value.board_address == 1
        assert isinstance(exc_info.value.__cause__, ReadFailure)
