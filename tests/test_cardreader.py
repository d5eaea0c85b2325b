"""
Tests for the USB HID card reader wrapper.
"""

import sys
from unittest.mock import MagicMock, patch

import pytest

from hardware_test.devices.base import EmptyResponse
from hardware_test.devices.cardreader import CardReader
from hardware_test.transport.base import DialFailure, NotConnected, ReadFailure


@pytest.fixture
def fake_hid():
    """Stand-in for the hidapi module with one matching device."""
    hid = MagicMock()
    hid.enumerate.return_value = [
        {
            "path": b"/dev/hidraw0",
            "manufacturer_string": "ACME",
            "product_string": "Card Reader",
        }
    ]
    with patch.dict(sys.modules, {"hid": hid}):
        yield hid


class TestCardReader:
    """Tests for CardReader."""

    def test_connect_opens_first_match(self, fake_hid):
        reader = CardReader(0x1A86, 0xE000)
        reader.connect()

        fake_hid.enumerate.assert_called_once_with(0x1A86, 0xE000)
        fake_hid.device.return_value.open_path.assert_called_once_with(b"/dev/hidraw0")
        assert reader.is_connected
        assert reader.manufacturer == "ACME"
        assert reader.product == "Card Reader"

    def test_device_not_found(self, fake_hid):
        fake_hid.enumerate.return_value = []

        with pytest.raises(DialFailure) as exc_info:
            CardReader(0x1234, 0x5678).connect()
        assert "0x1234" in exc_info.value.message

    def test_open_failure(self, fake_hid):
        fake_hid.device.return_value.open_path.side_effect = OSError("open failed")

        reader = CardReader(0x1A86, 0xE000)
        with pytest.raises(DialFailure):
            reader.connect()
        assert not reader.is_connected

    def test_invalid_ids(self):
        with pytest.raises(DialFailure):
            CardReader(0, 0xE000).connect()

    def test_read_returns_hex(self, fake_hid):
        fake_hid.device.return_value.read.return_value = [0x12, 0xAB, 0x00]
        reader = CardReader(0x1A86, 0xE000)
        reader.connect()

        assert reader.read(timeout=0.5) == "12AB00"
        fake_hid.device.return_value.read.assert_called_once_with(64, 500)

    def test_read_empty(self, fake_hid):
        fake_hid.device.return_value.read.return_value = []
        reader = CardReader(0x1A86, 0xE000)
        reader.connect()

        with pytest.raises(EmptyResponse):
            reader.read()

    def test_read_error(self, fake_hid):
        fake_hid.device.return_value.read.side_effect = OSError("read error")
        reader = CardReader(0x1A86, 0xE000)
        reader.connect()

        with pytest.raises(ReadFailure):
            reader.read()

    def test_read_not_connected(self):
        with pytest.raises(NotConnected):
            CardReader(0x1A86, 0xE000).read()

    def test_disconnect_twice(self, fake_hid):
        reader = CardReader(0x1A86, 0xE000)
        reader.connect()

        reader.disconnect()
        reader.disconnect()
        fake_hid.device.return_value.close.assert_called_once()

    def test_test_connection(self, fake_hid):
        reader = CardReader(0x1A86, 0xE000)

        assert reader.test_connection() is True
        assert not reader.is_connected

    def test_test_connection_failure(self, fake_hid):
        fake_hid.enumerate.return_value = []
        reader = CardReader(0x1A86, 0xE000)

        assert reader.test_connection() is False
        assert isinstance(reader.last_error, DialFailure)

    def test_read_uses_configured_timeout(self, fake_hid):
        fake_hid.device.return_value.read.return_value = [0x01]
        reader = CardReader(0x1A86, 0xE000, read_timeout=1.5)
        reader.connect()

        reader.read()
        fake_hid.device.return_value.read.assert_called_once_with(64, 1500)
