"""
Pytest configuration and fixtures for hardware test tool tests.
"""

import pytest
from pathlib import Path

from hardware_test.core.config import AppConfig
from hardware_test.transport.mock_transport import MockTransport


@pytest.fixture
def app_config() -> AppConfig:
    """Create test application configuration."""
    return AppConfig()


@pytest.fixture
def mock_transport() -> MockTransport:
    """Create mock transport."""
    return MockTransport()


@pytest.fixture
def connected_mock_transport(mock_transport: MockTransport) -> MockTransport:
    """Create an already connected mock transport."""
    mock_transport.connect()
    return mock_transport


@pytest.fixture
def temp_dir(tmp_path: Path) -> Path:
    """Create temporary directory for test files."""
    return tmp_path
