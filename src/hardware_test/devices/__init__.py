"""
Hardware Test Devices

Controllers for the lock board, display panel, RFID reader and USB
card reader.
"""

from hardware_test.devices.base import (
    ControllerState,
    DeviceController,
    DeviceError,
    EmptyResponse,
)
from hardware_test.devices.board_scan import BoardQueryError, BoardScanner, LockStatus
from hardware_test.devices.cardreader import CardReader
from hardware_test.devices.lock import LockController
from hardware_test.devices.rfid import RfidReader
from hardware_test.devices.screen import ScreenController

__all__ = [
    "ControllerState",
    "DeviceController",
    "DeviceError",
    "EmptyResponse",
    "BoardQueryError",
    "BoardScanner",
    "LockStatus",
    "CardReader",
    "LockController",
    "RfidReader",
    "ScreenController",
]
