"""
RFID Reader Command Codec

Frame layout::

    +----------------+-------------+-------------+------------+
    | header (5)     | length (2)  | payload (N) | CRC-16 (2) |
    | 5A 00 00 01 00 | big-endian  |             | big-endian |
    +----------------+-------------+-------------+------------+

The CRC is CRC-16/CCITT-FALSE over header, length and payload.
"""

from enum import IntEnum
from typing import Iterable

from hardware_test.protocols.checksum import crc16_ccitt_false

FRAME_HEADER = bytes([0x5A, 0x00, 0x00, 0x01, 0x00])

MIN_ANTENNA = 1
MAX_ANTENNA = 32

CONTINUOUS_READ = 0x01
READ_PARAM_TID = 0x02
TID_LENGTH = 0x0006


class RfidCommand(IntEnum):
    """Reader command types (MID)."""

    QUERY_POWER = 0x02
    READ_EPC = 0x10
    STOP = 0xFF


def build_rfid_frame(payload: bytes = b"") -> bytes:
    """
    Wrap a payload into a CRC-protected frame.

    Args:
        payload: Command parameters, at most 0xFFFF bytes

    Returns:
        Complete frame ready for transmission
    """
    if len(payload) > 0xFFFF:
        raise ValueError(f"RFID payload too long: {len(payload)} bytes")
    body = FRAME_HEADER + len(payload).to_bytes(2, "big") + payload
    return body + crc16_ccitt_false(body).to_bytes(2, "big")


def antenna_mask(antennas: Iterable[int]) -> int:
    """Bit n-1 set for every antenna n in 1..32; others are ignored."""
    mask = 0
    for antenna in antennas:
        if MIN_ANTENNA <= antenna <= MAX_ANTENNA:
            mask |= 1 << (antenna - 1)
    return mask


def stop_command() -> bytes:
    return build_rfid_frame()


def read_epc_command(antennas: Iterable[int]) -> bytes:
    """Continuous EPC read on the given antennas, also reading 6 words of TID."""
    payload = (
        antenna_mask(antennas).to_bytes(4, "big")
        + bytes([CONTINUOUS_READ, READ_PARAM_TID])
        + TID_LENGTH.to_bytes(2, "big")
    )
    return build_rfid_frame(payload)


def query_power_command() -> bytes:
    return build_rfid_frame()

