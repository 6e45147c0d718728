"""Tests for the standalone listener entry point."""

import asyncio
import socket
from unittest.mock import AsyncMock, patch

import pytest

from blendrelay import main as entry
from blendrelay.config.settings import Settings
from blendrelay.exceptions import InvalidConfigError


class TestLogEvent:
    """Tests for the standalone event sink callback."""

    def test_logs_payload(self):
        """Each event is logged with its payload."""
        with patch.object(entry, "logger") as logger:
            entry.log_event("udp-message", "hello")

        logger.info.assert_called_once_with(
            "udp_message", event_name="udp-message", payload="hello"
        )


class TestRun:
    """Tests for run()."""

    @pytest.mark.asyncio
    async def test_run_delegates_to_command(self, test_settings):
        """run() starts the listener command with a logging sink."""
        with patch.object(entry, "start_udp_listener", new_callable=AsyncMock) as start:
            await entry.run(test_settings)

        start.assert_awaited_once()
        _, settings = start.call_args.args
        assert settings is test_settings
        assert start.call_args.kwargs["listener"] is not None


class TestMain:
    """Tests for main()."""

    def test_bind_failure_exit_code(self):
        """An occupied listener port exits non-zero."""
        blocker = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        blocker.bind(("127.0.0.1", 0))
        settings = Settings(
            _env_file=None,
            listener_port=blocker.getsockname()[1],
            log_json=False,
        )
        try:
            with patch.object(entry, "get_settings", return_value=settings):
                assert entry.main() == 1
        finally:
            blocker.close()

    def test_clean_exit(self, test_settings):
        """A listener that stops normally exits zero."""
        with patch.object(entry, "get_settings", return_value=test_settings):
            with patch.object(entry, "run", new_callable=AsyncMock) as run:
                assert entry.main() == 0

        run.assert_awaited_once_with(test_settings)

    def test_invalid_environment_exit_code(self, monkeypatch):
        """A bad environment value is reported as a config error."""
        monkeypatch.setenv("LISTENER_HOST", "localhost")

        with patch.object(entry, "get_settings", side_effect=lambda: Settings(_env_file=None)):
            with patch.object(entry, "logger") as logger:
                assert entry.main() == 1

        logger.error.assert_called_once()
        kwargs = logger.error.call_args.kwargs
        assert logger.error.call_args.args[0] == "blendrelay_failed"
        assert kwargs["type"] == "InvalidConfigError"
        assert kwargs["details"]["config_key"] == "listener_host"


class TestLoadSettings:
    """Tests for load_settings()."""

    def test_validation_error_mapped(self, monkeypatch):
        """Pydantic validation failures become InvalidConfigError."""
        monkeypatch.setenv("RECV_BUFFER_SIZE", "0")

        with patch.object(entry, "get_settings", side_effect=lambda: Settings(_env_file=None)):
            with pytest.raises(InvalidConfigError) as exc_info:
                entry.load_settings()

        assert exc_info.value.details["config_key"] == "recv_buffer_size"
        assert exc_info.value.details["value"] == "0"
