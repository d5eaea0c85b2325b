"""
Hardware Test Core Package

Contains logging and configuration shared by transports and devices.
"""

from hardware_test.core.app_logging import get_logger, setup_logging, log_device_action
from hardware_test.core.config import AppConfig, load_config

__all__ = [
    "get_logger",
    "setup_logging",
    "log_device_action",
    "AppConfig",
    "load_config",
]
