#  Restate MCP Server - Custom Exceptions
#
#  Typed exception hierarchy for everything that can go wrong between a
#  tool call and the Restate admin API. Every tool failure surfaces to the
#  agent as one of these.
#
#  Depends on: (none)
#  Used by:    models/schemas.py, gateway.py, admin_client.py, tools/*

class AdminApiError(Exception):
    """Base exception for all admin API translation errors."""


class SchemaValidationError(AdminApiError):
    """Tool arguments or a runtime response did not match the declared schema.

    `errors` holds one {"loc", "msg", "type"} dict per offending field.
    """

    def __init__(self, message: str, errors: list[dict] | None = None):
        super().__init__(message)
        self.errors = errors or []


class TransportError(AdminApiError):
    """The runtime could not be reached."""


class RemoteError(AdminApiError):
    """The runtime answered with a non-2xx status."""

    def __init__(self, message: str, status_code: int, reason: str, detail: str):
        super().__init__(message)
        self.status_code = status_code
        self.reason = reason
        self.detail = detail


class DecodeError(AdminApiError):
    """A 2xx response body was not the JSON the caller needed."""


class ToolNotFoundError(AdminApiError):
    """No tool is registered under the requested name."""
