"""Unit tests for configuration module."""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from wgkeys.config import Settings, settings
from wgkeys.constants import DEFAULT_WG_COMMAND, ENCODED_KEY_LENGTH, KEY_SIZE


class TestSettings:
    """Tests for Settings configuration."""

    def test_project_name_default(self):
        assert settings.PROJECT_NAME == "wgkeys"

    def test_tool_defaults(self):
        """Reference tool defaults: platform command, 10s run, 5s probe."""
        with patch.dict(os.environ, {}, clear=True):
            fresh = Settings(_env_file=None)
        assert fresh.WG_TOOL_COMMAND == DEFAULT_WG_COMMAND
        assert fresh.WG_TOOL_TIMEOUT == 10.0
        assert fresh.WG_TOOL_VERSION_TIMEOUT == 5.0

    def test_strict_key_length_by_default(self):
        assert Settings(_env_file=None).STRICT_KEY_LENGTH is True

    def test_default_backend(self):
        assert Settings(_env_file=None).KEY_BACKEND == "ladder"

    def test_env_overrides(self):
        """Settings pick up environment variables."""
        env = {
            "WG_TOOL_COMMAND": "/usr/local/bin/wg",
            "WG_TOOL_TIMEOUT": "3.5",
            "KEY_BACKEND": "Sodium",
            "STRICT_KEY_LENGTH": "false",
            "LOG_LEVEL": "debug",
        }
        with patch.dict(os.environ, env):
            fresh = Settings(_env_file=None)
        assert fresh.WG_TOOL_COMMAND == "/usr/local/bin/wg"
        assert fresh.WG_TOOL_TIMEOUT == 3.5
        assert fresh.KEY_BACKEND == "sodium"
        assert fresh.STRICT_KEY_LENGTH is False
        assert fresh.LOG_LEVEL == "DEBUG"

    def test_rejects_unknown_backend(self):
        with pytest.raises(ValidationError, match="KEY_BACKEND"):
            Settings(_env_file=None, KEY_BACKEND="rot13")

    def test_rejects_non_positive_timeout(self):
        with pytest.raises(ValidationError, match="positive"):
            Settings(_env_file=None, WG_TOOL_TIMEOUT=0)

    def test_rejects_empty_command(self):
        with pytest.raises(ValidationError, match="WG_TOOL_COMMAND"):
            Settings(_env_file=None, WG_TOOL_COMMAND="  ")


class TestConstants:
    """Key format constants."""

    def test_key_sizes(self):
        assert KEY_SIZE == 32
        assert ENCODED_KEY_LENGTH == 44
