#  Restate MCP Server - Configuration
#
#  Loads config.json (optional) and provides typed access to all settings.
#  Dot-notation path lookup: cfg("admin.base_url")
#  RESTATE_API_BASE in the environment overrides admin.base_url.
#
#  Depends on: config.json
#  Used by:    container.py, server.py, run.py

import json
import logging
import os
from pathlib import Path

# ---------------------------------------------------------------------------
# Path resolution
# ---------------------------------------------------------------------------

PROJECT_ROOT = Path(__file__).parent.parent
CONFIG_PATH = Path(os.environ.get("RESTATE_MCP_CONFIG", PROJECT_ROOT / "config.json"))

DEFAULT_ADMIN_BASE = "http://localhost:9070"

# ---------------------------------------------------------------------------
# Load config
# ---------------------------------------------------------------------------

_config: dict = {}


def _load_config(path: Path | None = None):
    """Load configuration from a JSON file (internal, called once at import time).

    Module-level constants below are snapshots from _config.
    """
    global _config
    config_path = path or CONFIG_PATH
    with open(config_path) as f:
        _config = json.load(f)


# No config.json means all defaults
if CONFIG_PATH.exists():
    _load_config()


def cfg(path: str, default=None):
    """Get a config value by dot-notation path.

    Example: cfg("admin.base_url") -> "http://localhost:9070"
    """
    keys = path.split(".")
    val = _config
    for key in keys:
        if isinstance(val, dict) and key in val:
            val = val[key]
        else:
            return default
    return val


# ---------------------------------------------------------------------------
# Convenience constants
# ---------------------------------------------------------------------------

# Restate admin API
ADMIN_API_BASE = os.environ.get("RESTATE_API_BASE") or cfg("admin.base_url", DEFAULT_ADMIN_BASE)
ADMIN_TIMEOUT = cfg("admin.timeout", None)
USER_AGENT = "restate-mcp-server/0.0.1"

# MCP server
SERVER_NAME = cfg("server.name", "restate")
SERVER_VERSION = "0.0.1"
LOG_LEVEL = os.environ.get("RESTATE_MCP_LOG_LEVEL") or cfg("server.log_level", "INFO")
LOG_FORMAT = cfg("server.log_format", "json")


# ---------------------------------------------------------------------------
# Startup validation
# ---------------------------------------------------------------------------

def validate_config() -> str:
    """Validate critical config values. Call during startup (not at import time).

    Returns the normalized admin base URL. Raises ConfigError for fatal
    issues, logs warnings for non-fatal ones.
    """
    _logger = logging.getLogger("restate_mcp.config")

    # Fatal: the admin URL must be an absolute http(s) URL
    if not isinstance(ADMIN_API_BASE, str):
        raise ConfigError(f"admin.base_url must be a string, got {type(ADMIN_API_BASE).__name__}")
    if not ADMIN_API_BASE.startswith(("http://", "https://")):
        raise ConfigError(
            f"admin.base_url must start with http:// or https://, got '{ADMIN_API_BASE}'"
        )

    # Fatal: timeout is either disabled (null) or positive
    if ADMIN_TIMEOUT is not None and (
        isinstance(ADMIN_TIMEOUT, bool)
        or not isinstance(ADMIN_TIMEOUT, (int, float))
        or ADMIN_TIMEOUT <= 0
    ):
        raise ConfigError(f"admin.timeout must be null or > 0, got {ADMIN_TIMEOUT}")

    if LOG_FORMAT not in ("json", "text"):
        raise ConfigError(f"server.log_format must be 'json' or 'text', got '{LOG_FORMAT}'")

    base_url = ADMIN_API_BASE
    if base_url.endswith("/"):
        _logger.warning("admin.base_url has a trailing slash, stripping it: %s", base_url)
        base_url = base_url.rstrip("/")

    return base_url


class ConfigError(Exception):
    """Raised when critical configuration is invalid."""
