#  Restate MCP Server - Logging Configuration
#
#  Configures structured logging with JSON or text format.
#  Provides a context variable for tool_call_id propagation.
#  Always writes to stderr: stdout carries the MCP stdio protocol.
#
#  Depends on: (none)
#  Used by:    run.py, server.py, tools/registry.py

import contextvars
import json
import logging
import sys
import time

# Context variable for per-call tracing
tool_call_id_var: contextvars.ContextVar[str | None] = contextvars.ContextVar("tool_call_id", default=None)


def set_tool_call_id(cid: str | None):
    return tool_call_id_var.set(cid)


class JSONFormatter(logging.Formatter):
    """Emit log records as single-line JSON with context variables."""

    converter = time.gmtime

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S") + f".{int(record.msecs):03d}Z",
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        cid = tool_call_id_var.get(None)
        if cid:
            entry["tool_call_id"] = cid
        if record.exc_info and record.exc_info[0] is not None:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


_TEXT_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"


def setup_logging(level: str = "INFO", fmt: str = "json"):
    """Configure logging for the MCP server.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR).
        fmt: Log format, "json" for structured output, "text" for human-readable.
    """
    root = logging.getLogger("restate_mcp")
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        if fmt == "json":
            handler.setFormatter(JSONFormatter())
        else:
            handler.setFormatter(logging.Formatter(_TEXT_FORMAT, datefmt="%H:%M:%S"))
        root.addHandler(handler)

    # Quiet noisy libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
