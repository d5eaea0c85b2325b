"""
Structured Logging System

Provides console output plus JSONL structured logging of every device
operation, so a hardware test run leaves an audit trail behind it.
"""

import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any

# Module-level logger cache
_loggers: dict[str, logging.Logger] = {}
_log_dir: Path | None = None
_session_id: str = datetime.now().strftime("%Y%m%d_%H%M%S")

ROOT_LOGGER = "hardware_test"


class JSONLFormatter(logging.Formatter):
    """Formatter that outputs logs as JSON lines."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "session": _session_id,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Structured fields passed through ``extra=``
        for key in ["action", "device", "success", "error", "details"]:
            if hasattr(record, key):
                log_data[key] = getattr(record, key)

        return json.dumps(log_data, default=str)


class ConsoleFormatter(logging.Formatter):
    """Colored console formatter for human-readable output."""

    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, "")
        timestamp = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")
        return f"{color}[{timestamp}] {record.levelname:8}{self.RESET} {record.name}: {record.getMessage()}"


def setup_logging(log_dir: Path | None = None, debug: bool = False) -> None:
    """
    Initialize the logging system.

    Args:
        log_dir: Directory for log files (default: ./logs)
        debug: Enable debug-level logging (includes raw TX/RX frames)
    """
    global _log_dir, _session_id

    _log_dir = log_dir or Path("./logs")
    _log_dir.mkdir(parents=True, exist_ok=True)

    _session_id = datetime.now().strftime("%Y%m%d_%H%M%S")

    root_logger = logging.getLogger(ROOT_LOGGER)
    root_logger.setLevel(logging.DEBUG if debug else logging.INFO)

    # Close handlers from a previous setup before replacing them
    for handler in list(root_logger.handlers):
        handler.close()
    root_logger.handlers.clear()

    # Console handler goes to stderr so stdout stays the test report
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.DEBUG if debug else logging.INFO)
    console_handler.setFormatter(ConsoleFormatter())
    root_logger.addHandler(console_handler)

    log_file = _log_dir / f"session_{_session_id}.jsonl"
    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(JSONLFormatter())
    root_logger.addHandler(file_handler)

    root_logger.info(
        f"Logging initialized: session={_session_id}, log_file={log_file}"
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for the given name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logger instance
    """
    if name not in _loggers:
        if not name.startswith(ROOT_LOGGER):
            name = f"{ROOT_LOGGER}.{name}"

        logger = logging.getLogger(name)
        _loggers[name] = logger

    return _loggers[name]


def get_session_id() -> str:
    """Get the current session ID."""
    return _session_id


def get_log_dir() -> Path:
    """Get the log directory."""
    return _log_dir or Path("./logs")


def log_device_action(
    action: str,
    device: str | None = None,
    success: bool = True,
    error: str | None = None,
    details: dict[str, Any] | None = None,
) -> None:
    """
    Log a device operation with structured data.

    Args:
        action: Action performed (e.g., "connect", "probe", "query_all")
        device: Device name ("lock", "screen", "rfid", "cardreader")
        success: Whether the action succeeded
        error: Error message if failed
        details: Additional details
    """
    logger = get_logger("device")
    log_data = {
        "action": action,
        "device": device,
        "success": success,
        "error": error,
        "details": details or {},
    }

    if success:
        logger.info(f"Device action: {device} {action}", extra=log_data)
    else:
        logger.error(f"Device action failed: {device} {action} - {error}", extra=log_data)
