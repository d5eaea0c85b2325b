"""
Display Panel Controller
"""

from hardware_test.core.app_logging import get_logger
from hardware_test.devices.base import DEFAULT_PROBE_TIMEOUT, DeviceController
from hardware_test.protocols.screen_codec import build_screen_frame, clear_command
from hardware_test.transport import Endpoint
from hardware_test.transport.base import BaseTransport

logger = get_logger(__name__)

SCREEN_SETTLE_DELAY = 0.1


class ScreenController(DeviceController):
    """Display panel controller; commands are text assignments such as t0.txt="..."."""

    name = "screen"

    def __init__(
        self,
        channel: Endpoint | BaseTransport,
        probe_timeout: float = DEFAULT_PROBE_TIMEOUT,
        settle_delay: float = SCREEN_SETTLE_DELAY,
    ) -> None:
        super().__init__(channel, probe_timeout)
        self._settle_delay = settle_delay

    def probe_command(self) -> bytes:
        return clear_command()

    def send_command(self, cmd_id: int | str, text: str) -> None:
        """Send one text command."""
        frame = build_screen_frame(cmd_id, text)
        self.write(frame)
        logger.debug(f"Screen command {cmd_id!r}: {text}")

    def _after_probe(self) -> None:
        self._settle(self._settle_delay)
