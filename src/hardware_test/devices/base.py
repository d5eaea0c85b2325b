"""
Device Controller Base

Shared lifecycle for the lock board, display panel and RFID reader:
open the transport, write framed commands, read responses within a
deadline, and always release the transport when a probe is done.
"""

import time
from abc import ABC, abstractmethod
from enum import Enum, auto
from typing import Any

from hardware_test.core.app_logging import get_logger, log_device_action
from hardware_test.transport import Endpoint, create_transport
from hardware_test.transport.base import BaseTransport, NotConnected, TransportError

logger = get_logger(__name__)

DEFAULT_PROBE_TIMEOUT = 3.0
DEFAULT_READ_SIZE = 256


class DeviceError(TransportError):
    """Device-level error."""

    def __init__(self, message: str, code: str = "DEVICE_ERROR") -> None:
        super().__init__(message=message, code=code, recoverable=True)


class EmptyResponse(DeviceError):
    """A response was required but zero bytes were read."""

    def __init__(self, message: str = "no response") -> None:
        super().__init__(message, code="EMPTY_RESPONSE")


class ControllerState(Enum):
    """Controller lifecycle states."""

    DISCONNECTED = auto()
    CONNECTING = auto()
    CONNECTED = auto()
    DISCONNECTING = auto()


class DeviceController(ABC):
    """
    Base class for framed-command device controllers.

    A controller exclusively owns its transport. A failed connect leaves
    it DISCONNECTED and raises the transport error; read and write
    failures while CONNECTED are raised to the caller without changing
    state.
    """

    name = "device"

    def __init__(
        self,
        channel: Endpoint | BaseTransport,
        probe_timeout: float = DEFAULT_PROBE_TIMEOUT,
    ) -> None:
        """
        Initialize the controller.

        Args:
            channel: Endpoint to connect to, or a ready-made transport
            probe_timeout: Read deadline for test_connection()
        """
        if isinstance(channel, BaseTransport):
            self._transport = channel
        else:
            self._transport = create_transport(channel)
        self._probe_timeout = probe_timeout
        self._state = ControllerState.DISCONNECTED
        self._last_error: TransportError | None = None
        self._last_response: bytes | None = None

    @property
    def state(self) -> ControllerState:
        """Current controller state."""
        return self._state

    @property
    def transport(self) -> BaseTransport:
        return self._transport

    @property
    def is_connected(self) -> bool:
        return self._state == ControllerState.CONNECTED

    @property
    def last_error(self) -> TransportError | None:
        """Error behind the last failed test_connection()."""
        return self._last_error

    @property
    def last_response(self) -> bytes | None:
        """Bytes returned by the last successful probe."""
        return self._last_response

    def connect(self) -> None:
        """
        Open the transport.

        Raises:
            DialFailure: if the transport cannot be opened
        """
        if self._state == ControllerState.CONNECTED:
            logger.warning(f"{self.name}: already connected")
            return

        self._set_state(ControllerState.CONNECTING)
        try:
            self._transport.connect()
        except TransportError as e:
            self._set_state(ControllerState.DISCONNECTED)
            log_device_action("connect", self.name, success=False, error=str(e))
            raise

        self._set_state(ControllerState.CONNECTED)
        log_device_action("connect", self.name, details=self._transport.get_info())

    def disconnect(self) -> None:
        """Release the transport. Safe to call when already disconnected."""
        if self._state == ControllerState.DISCONNECTED:
            return

        self._set_state(ControllerState.DISCONNECTING)
        try:
            self._before_disconnect()
        finally:
            self._transport.disconnect()
            self._set_state(ControllerState.DISCONNECTED)

    def write(self, frame: bytes) -> int:
        """Write one complete frame."""
        self._require_connected()
        return self._transport.write(frame)

    def read(self, size: int = DEFAULT_READ_SIZE) -> bytes:
        """Read up to size bytes."""
        self._require_connected()
        return self._transport.read(size)

    @abstractmethod
    def probe_command(self) -> bytes:
        """Frame sent by test_connection()."""

    def test_connection(self) -> bool:
        """
        Connect, send the probe, wait for a reply, then disconnect.

        Returns:
            True if at least one byte came back; otherwise False with
            the cause available as ``last_error``
        """
        self._last_error = None
        self._last_response = None

        try:
            self.connect()
        except TransportError as e:
            self._last_error = e
            return False

        try:
            # Stale input goes before the write; the reply may land during _after_probe()
            self._transport.flush_input()
            self.write(self.probe_command())
            self._after_probe()
            self._transport.set_read_deadline(self._probe_timeout)

            response = self.read()
            if not response:
                raise EmptyResponse()

            self._last_response = response
            logger.info(f"{self.name} response: {response.hex().upper()}")
            log_device_action(
                "probe", self.name, details={"response": response.hex(), "length": len(response)}
            )
            return True

        except TransportError as e:
            self._last_error = e
            log_device_action("probe", self.name, success=False, error=str(e))
            return False

        finally:
            self.disconnect()

    def _after_probe(self) -> None:
        """Hook run between writing the probe and reading the reply."""

    def _before_disconnect(self) -> None:
        """Hook run while DISCONNECTING, before the transport is closed."""

    def _require_connected(self) -> None:
        if self._state != ControllerState.CONNECTED:
            raise NotConnected(f"{self.name} not connected")

    def _settle(self, seconds: float) -> None:
        if seconds > 0:
            time.sleep(seconds)

    def _set_state(self, new_state: ControllerState) -> None:
        old_state = self._state
        self._state = new_state
        if old_state != new_state:
            logger.debug(f"{self.name} state: {old_state.name} -> {new_state.name}")

    def __enter__(self) -> "DeviceController":
        self.connect()
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.disconnect()
