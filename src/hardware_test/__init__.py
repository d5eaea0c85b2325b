"""
Hardware Test - peripheral connectivity diagnostics

Opens a serial or TCP channel to a lock-control board, a display panel
or an RFID reader, sends a device-specific framed command and checks
the reply. A USB HID card reader can be probed as well.
"""

__version__ = "0.1.0"
__author__ = "Hardware Test Contributors"
