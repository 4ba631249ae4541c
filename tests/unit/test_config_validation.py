#  Restate MCP Server - Config Validation Tests
#
#  Tests for cfg() lookup and validate_config() startup checks.
#
#  Depends on: restate_mcp/config.py
#  Used by:    pytest

import logging
from unittest.mock import patch

import pytest

from restate_mcp.config import ConfigError, cfg, validate_config


class TestCfg:
    def test_dot_path_lookup(self):
        with patch("restate_mcp.config._config", {"admin": {"base_url": "http://restate:9070"}}):
            assert cfg("admin.base_url") == "http://restate:9070"

    def test_missing_path_returns_default(self):
        with patch("restate_mcp.config._config", {"admin": {}}):
            assert cfg("admin.timeout", 30) == 30
            assert cfg("server.name.nested", "x") == "x"


class TestValidateConfig:
    def test_default_passes(self):
        with patch("restate_mcp.config.ADMIN_API_BASE", "http://localhost:9070"), \
             patch("restate_mcp.config.ADMIN_TIMEOUT", None), \
             patch("restate_mcp.config.LOG_FORMAT", "json"):
            assert validate_config() == "http://localhost:9070"

    def test_raises_on_non_http_url(self):
        with patch("restate_mcp.config.ADMIN_API_BASE", "localhost:9070"):
            with pytest.raises(ConfigError, match="must start with http:// or https://"):
                validate_config()

    def test_raises_on_non_string_url(self):
        with patch("restate_mcp.config.ADMIN_API_BASE", 9070):
            with pytest.raises(ConfigError, match="must be a string"):
                validate_config()

    @pytest.mark.parametrize("timeout", [0, -5, "30", True])
    def test_raises_on_bad_timeout(self, timeout):
        with patch("restate_mcp.config.ADMIN_API_BASE", "http://localhost:9070"), \
             patch("restate_mcp.config.ADMIN_TIMEOUT", timeout):
            with pytest.raises(ConfigError, match="admin.timeout"):
                validate_config()

    def test_positive_timeout_passes(self):
        with patch("restate_mcp.config.ADMIN_API_BASE", "https://restate.internal:9070"), \
             patch("restate_mcp.config.ADMIN_TIMEOUT", 2.5), \
             patch("restate_mcp.config.LOG_FORMAT", "text"):
            assert validate_config() == "https://restate.internal:9070"

    def test_raises_on_unknown_log_format(self):
        with patch("restate_mcp.config.ADMIN_API_BASE", "http://localhost:9070"), \
             patch("restate_mcp.config.ADMIN_TIMEOUT", None), \
             patch("restate_mcp.config.LOG_FORMAT", "xml"):
            with pytest.raises(ConfigError, match="log_format"):
                validate_config()

    def test_trailing_slash_stripped_with_warning(self, caplog):
        with patch("restate_mcp.config.ADMIN_API_BASE", "http://localhost:9070/"), \
             patch("restate_mcp.config.ADMIN_TIMEOUT", None), \
             patch("restate_mcp.config.LOG_FORMAT", "json"):
            with caplog.at_level(logging.WARNING):
                assert validate_config() == "http://localhost:9070"
        assert "trailing slash" in caplog.text
