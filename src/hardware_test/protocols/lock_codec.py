"""
Lock Board Command Codec

Frame layout::

    +-----------------------+----------+
    | body (command bytes)  | checksum |
    +-----------------------+----------+

The checksum is the XOR of every body byte.
"""

from hardware_test.protocols.checksum import xor_checksum

QUERY_ALL_OPCODE = 0x80
OPEN_OPCODE = 0x8A
OPEN_ACTION = 0x11

# Board-independent connectivity probe
QUERY_BODY = bytes.fromhex("80010033")

MIN_BOARD_ADDRESS = 1
MAX_BOARD_ADDRESS = 8


def build_lock_frame(body: bytes | str) -> bytes:
    """
    Append the XOR checksum to a command body.

    Args:
        body: Raw body bytes, or the body as a hex string ("800301")

    Returns:
        ``body + checksum``
    """
    if isinstance(body, str):
        body = bytes.fromhex(body)
    if not body:
        raise ValueError("lock command body must not be empty")
    return bytes(body) + bytes([xor_checksum(body)])


def _byte(name: str, value: int) -> int:
    if not 0 <= value <= 0xFF:
        raise ValueError(f"{name} out of range: {value}")
    return value


def query_command() -> bytes:
    """Global query used to probe connectivity."""
    return build_lock_frame(QUERY_BODY)


def query_all_command(board_address: int) -> bytes:
    """Query the lock states of one board."""
    return build_lock_frame(
        bytes([QUERY_ALL_OPCODE, _byte("board_address", board_address), 0x01])
    )


def open_command(board_address: int, lock_address: int) -> bytes:
    """Open one lock on one board."""
    return build_lock_frame(
        bytes(
            [
                OPEN_OPCODE,
                _byte("board_address", board_address),
                _byte("lock_address", lock_address),
                OPEN_ACTION,
            ]
        )
    )
