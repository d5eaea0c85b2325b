"""
Application Configuration

Default connection parameters and timeouts for the hardware test tool.
Values can be overridden from a YAML/JSON file; the tool only ever reads
configuration, it never writes it back.
"""

import json
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from platformdirs import user_config_dir

from hardware_test.core.app_logging import get_logger

logger = get_logger(__name__)

APP_NAME = "hardware_test"

DEFAULT_BAUD_RATE = 115200
DEFAULT_ANTENNAS = [1, 2, 3, 4]
DEFAULT_CARDREADER_VID = 0x1A86
DEFAULT_CARDREADER_PID = 0xE000


def default_serial_path() -> str:
    """Platform default serial device node."""
    if sys.platform.startswith("win"):
        return "COM1"
    return "/dev/ttyS0"


@dataclass
class SerialConfig:
    """Serial line parameters."""

    path: str = field(default_factory=default_serial_path)
    baud_rate: int = DEFAULT_BAUD_RATE
    read_timeout: float = 5.0  # fixed at open time


@dataclass
class TimeoutConfig:
    """Timeouts and settle delays, in seconds."""

    connect: float = 5.0
    board_poll: float = 2.0
    probe: float = 3.0
    board_settle: float = 0.05
    rfid_settle: float = 0.1
    screen_settle: float = 0.1


@dataclass
class RfidConfig:
    """RFID reader parameters."""

    antennas: list[int] = field(default_factory=lambda: list(DEFAULT_ANTENNAS))


@dataclass
class CardReaderConfig:
    """USB HID card reader parameters."""

    vid: int = DEFAULT_CARDREADER_VID
    pid: int = DEFAULT_CARDREADER_PID
    read_timeout: float = 5.0


@dataclass
class LoggingConfig:
    """Logging-related configuration."""

    log_level: str = "INFO"
    log_dir: str = "./logs"


@dataclass
class AppConfig:
    """Main application configuration."""

    serial: SerialConfig = field(default_factory=SerialConfig)
    timeouts: TimeoutConfig = field(default_factory=TimeoutConfig)
    rfid: RfidConfig = field(default_factory=RfidConfig)
    cardreader: CardReaderConfig = field(default_factory=CardReaderConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "serial": {
                "path": self.serial.path,
                "baud_rate": self.serial.baud_rate,
                "read_timeout": self.serial.read_timeout,
            },
            "timeouts": {
                "connect": self.timeouts.connect,
                "board_poll": self.timeouts.board_poll,
                "probe": self.timeouts.probe,
                "board_settle": self.timeouts.board_settle,
                "rfid_settle": self.timeouts.rfid_settle,
                "screen_settle": self.timeouts.screen_settle,
            },
            "rfid": {
                "antennas": list(self.rfid.antennas),
            },
            "cardreader": {
                "vid": self.cardreader.vid,
                "pid": self.cardreader.pid,
                "read_timeout": self.cardreader.read_timeout,
            },
            "logging": {
                "log_level": self.logging.log_level,
                "log_dir": self.logging.log_dir,
            },
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AppConfig":
        """Create configuration from dictionary."""
        config = cls()

        if "serial" in data:
            ser = data["serial"] or {}
            config.serial = SerialConfig(
                path=ser.get("path", default_serial_path()),
                baud_rate=int(ser.get("baud_rate", DEFAULT_BAUD_RATE)),
                read_timeout=float(ser.get("read_timeout", 5.0)),
            )

        if "timeouts" in data:
            tmo = data["timeouts"] or {}
            defaults = TimeoutConfig()
            config.timeouts = TimeoutConfig(
                connect=float(tmo.get("connect", defaults.connect)),
                board_poll=float(tmo.get("board_poll", defaults.board_poll)),
                probe=float(tmo.get("probe", defaults.probe)),
                board_settle=float(tmo.get("board_settle", defaults.board_settle)),
                rfid_settle=float(tmo.get("rfid_settle", defaults.rfid_settle)),
                screen_settle=float(tmo.get("screen_settle", defaults.screen_settle)),
            )

        if "rfid" in data:
            rfid = data["rfid"] or {}
            config.rfid = RfidConfig(
                antennas=[int(a) for a in rfid.get("antennas", DEFAULT_ANTENNAS)],
            )

        if "cardreader" in data:
            reader = data["cardreader"] or {}
            config.cardreader = CardReaderConfig(
                vid=_parse_int(reader.get("vid", DEFAULT_CARDREADER_VID)),
                pid=_parse_int(reader.get("pid", DEFAULT_CARDREADER_PID)),
                read_timeout=float(reader.get("read_timeout", 5.0)),
            )

        if "logging" in data:
            log = data["logging"] or {}
            config.logging = LoggingConfig(
                log_level=log.get("log_level", "INFO"),
                log_dir=log.get("log_dir", "./logs"),
            )

        return config


def _parse_int(value: Any) -> int:
    """Accept ints and numeric strings such as "0x1A86"."""
    if isinstance(value, str):
        return int(value, 0)
    return int(value)


def get_config_path() -> Path:
    """Get the default configuration file path."""
    return Path(user_config_dir(APP_NAME)) / "config.yaml"


def load_config(path: Path | None = None) -> AppConfig:
    """
    Load configuration from file.

    Args:
        path: Path to configuration file (default: user config dir)

    Returns:
        Loaded configuration, or defaults if the file is missing or invalid
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        logger.debug(f"No configuration file found at {config_path}, using defaults")
        return AppConfig()

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            if config_path.suffix in (".yaml", ".yml"):
                data = yaml.safe_load(f)
            else:
                data = json.load(f)

        config = AppConfig.from_dict(data or {})
        logger.info(f"Configuration loaded from {config_path}")
        return config

    except (OSError, ValueError, TypeError, yaml.YAMLError) as e:
        logger.error(f"Failed to load configuration: {e}")
        return AppConfig()
