"""
Hardware Test Protocols Layer

Pure frame builders for the lock board, display panel and RFID reader.
"""

from hardware_test.protocols.checksum import crc16_ccitt_false, xor_checksum
from hardware_test.protocols.lock_codec import (
    build_lock_frame,
    open_command,
    query_all_command,
    query_command,
)
from hardware_test.protocols.rfid_codec import (
    RfidCommand,
    antenna_mask,
    build_rfid_frame,
    query_power_command,
    read_epc_command,
    stop_command,
)
from hardware_test.protocols.screen_codec import build_screen_frame, clear_command

__all__ = [
    "crc16_ccitt_false",
    "xor_checksum",
    "build_lock_frame",
    "open_command",
    "query_all_command",
    "query_command",
    "RfidCommand",
    "antenna_mask",
    "build_rfid_frame",
    "query_power_command",
    "read_epc_command",
    "stop_command",
    "build_screen_frame",
    "clear_command",
]
