#  Restate MCP Server - Test Fixtures
#
#  Shared fixtures for the test suite.
#  Simulated Restate runtimes are httpx MockTransports driven by a handler
#  function, so every test exercises the real gateway code path.
#
#  Depends on: restate_mcp/gateway.py, restate_mcp/admin_client.py, restate_mcp/tools/registry.py
#  Used by:    all test files

import copy

import httpx
import pytest

BASE_URL = "http://restate.test:9070"


# ---------------------------------------------------------------------------
# Sample payloads (as the admin API returns them)
# ---------------------------------------------------------------------------

_HTTP_DEPLOYMENT = {
    "id": "dp_11pXug0mWsff2NOoRBZbOcV",
    "services": [{"name": "Greeter", "revision": 1}],
    "uri": "http://svc:9080/",
    "protocol_type": "BidiStream",
    "http_version": "HTTP/2.0",
    "created_at": "2025-04-01T10:00:00.000Z",
    "min_protocol_version": 1,
    "max_protocol_version": 5,
    "additional_headers": {"x-env": "test"},
}

_LAMBDA_DEPLOYMENT = {
    "id": "dp_14LsPzLz9HBxXZ7FoLBmQEN",
    "services": [{"name": "Checkout", "revision": 3}],
    "arn": "arn:aws:lambda:eu-central-1:123456789012:function:checkout:7",
    "assume_role_arn": None,
    "created_at": "2025-04-02T08:30:00.000Z",
    "min_protocol_version": 1,
    "max_protocol_version": 5,
}

_SERVICE = {
    "name": "Greeter",
    "handlers": [
        {
            "name": "greet",
            "input_description": "one of [\"none\", \"value with content-type 'application/json'\"]",
            "output_description": "value with content-type 'application/json'",
            "input_json_schema": {"type": "string"},
        },
        {
            "name": "count",
            "ty": "Shared",
            "documentation": None,
            "input_description": "none",
            "output_description": "value with content-type 'application/json'",
        },
    ],
    "ty": "VirtualObject",
    "deployment_id": "dp_11pXug0mWsff2NOoRBZbOcV",
    "revision": 1,
    "public": True,
    "idempotency_retention": "1day",
    "workflow_completion_retention": None,
    "inactivity_timeout": "1m",
    "abort_timeout": "10m",
}


@pytest.fixture
def http_deployment():
    return copy.deepcopy(_HTTP_DEPLOYMENT)


@pytest.fixture
def lambda_deployment():
    return copy.deepcopy(_LAMBDA_DEPLOYMENT)


@pytest.fixture
def service_metadata():
    return copy.deepcopy(_SERVICE)


# ---------------------------------------------------------------------------
# Simulated runtime
# ---------------------------------------------------------------------------

class RuntimeStub:
    """Answers requests through `handler` and records every request seen."""

    def __init__(self, handler):
        self.handler = handler
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
async def runtime():
    """Factory: runtime(handler) -> (stub, AdminGateway) pointed at BASE_URL."""
    from restate_mcp.gateway import AdminGateway

    clients: list[httpx.AsyncClient] = []

    def _make(handler):
        stub = RuntimeStub(handler)
        http = httpx.AsyncClient(transport=httpx.MockTransport(stub))
        clients.append(http)
        return stub, AdminGateway(BASE_URL, http_client=http)

    yield _make

    for http in clients:
        await http.aclose()


@pytest.fixture
def admin(runtime):
    """Factory: admin(handler) -> (stub, AdminClient)."""
    from restate_mcp.admin_client import AdminClient

    def _make(handler):
        stub, gateway = runtime(handler)
        return stub, AdminClient(gateway)

    return _make


@pytest.fixture
def registry(admin):
    """Factory: registry(handler) -> (stub, ToolRegistry) over a simulated runtime."""
    from restate_mcp.tools.registry import ToolRegistry

    def _make(handler):
        stub, client = admin(handler)
        return stub, ToolRegistry(client)

    return _make
