"""
Tests for logging functionality.
"""

import json
from pathlib import Path

from hardware_test.core.app_logging import (
    get_log_dir,
    get_logger,
    get_session_id,
    log_device_action,
    setup_logging,
)


class TestLogging:
    """Tests for logging system."""

    def test_setup_logging(self, temp_dir: Path):
        """Test logging setup."""
        log_dir = temp_dir / "logs"
        setup_logging(log_dir=log_dir, debug=True)

        assert log_dir.exists()

    def test_get_logger(self, temp_dir: Path):
        """Test getting a logger."""
        setup_logging(log_dir=temp_dir, debug=False)

        logger = get_logger("test")
        assert logger.name.startswith("hardware_test")

    def test_get_session_id(self, temp_dir: Path):
        """Test session ID generation."""
        setup_logging(log_dir=temp_dir, debug=False)

        session_id = get_session_id()
        assert "_" in session_id

    def test_log_device_action(self, temp_dir: Path):
        """Test structured device action records."""
        setup_logging(log_dir=temp_dir, debug=True)

        log_device_action("probe", "lock", details={"response": "80"})

        log_files = list(temp_dir.glob("*.jsonl"))
        assert len(log_files) > 0

        with open(log_files[0], "r", encoding="utf-8") as f:
            records = [json.loads(line) for line in f if line.strip()]
        probe = [r for r in records if r.get("action") == "probe"]
        assert probe
        assert probe[0]["device"] == "lock"
        assert probe[0]["details"] == {"response": "80"}

    def test_failed_action_logged(self, temp_dir: Path):
        """Test failed device actions are logged."""
        setup_logging(log_dir=temp_dir, debug=True)

        log_device_action("connect", "rfid", success=False, error="dial refused")

        log_files = list(temp_dir.glob("*.jsonl"))
        with open(log_files[0], "r", encoding="utf-8") as f:
            content = f.read()
        assert "dial refused" in content

    def test_log_format_jsonl(self, temp_dir: Path):
        """Test log entries are valid JSONL."""
        setup_logging(log_dir=temp_dir, debug=True)

        get_logger("test_jsonl").info("Test message")

        log_files = list(temp_dir.glob("*.jsonl"))
        with open(log_files[0], "r", encoding="utf-8") as f:
            for line in f:
                if line.strip():
                    data = json.loads(line)
                    assert "timestamp" in data
                    assert "level" in data
                    assert "message" in data

    def test_get_log_dir_after_setup(self, temp_dir: Path):
        """Test log directory after setup."""
        log_dir = temp_dir / "custom_logs"
        setup_logging(log_dir=log_dir, debug=False)

        assert get_log_dir() == log_dir
