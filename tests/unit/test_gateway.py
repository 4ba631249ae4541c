#  Restate MCP Server - Gateway Tests
#
#  Tests for AdminGateway: identity header, empty-body short-circuit,
#  error-body extraction, and failure wrapping.
#
#  Depends on: restate_mcp/gateway.py
#  Used by:    pytest

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from restate_mcp.config import USER_AGENT
from restate_mcp.exceptions import DecodeError, RemoteError, TransportError
from restate_mcp.gateway import AdminGateway, extract_error_detail

BASE_URL = "http://restate.test:9070"


# ---------------------------------------------------------------------------
# extract_error_detail
# ---------------------------------------------------------------------------

class TestExtractErrorDetail:
    def test_json_message_used(self):
        assert extract_error_detail('{"message": "service not found"}') == "service not found"

    def test_plain_text_verbatim(self):
        assert extract_error_detail("upstream exploded") == "upstream exploded"

    def test_json_without_message_falls_back_to_text(self):
        body = '{"code": "META0004"}'
        assert extract_error_detail(body) == body

    def test_non_string_message_falls_back_to_text(self):
        body = '{"message": 42}'
        assert extract_error_detail(body) == body

    def test_json_array_falls_back_to_text(self):
        assert extract_error_detail("[1, 2]") == "[1, 2]"


# ---------------------------------------------------------------------------
# Headers and URLs
# ---------------------------------------------------------------------------

class TestRequestShape:
    async def test_identity_header_attached(self, runtime):
        stub, gateway = runtime(lambda req: httpx.Response(200, json={}))
        await gateway.request(gateway.url("/deployments"))
        assert stub.last.headers["User-Agent"] == USER_AGENT

    async def test_caller_header_wins(self, runtime):
        stub, gateway = runtime(lambda req: httpx.Response(200, json={}))
        await gateway.request(gateway.url("/deployments"), headers={"user-agent": "custom/1.0"})
        assert stub.last.headers.get_list("User-Agent") == ["custom/1.0"]

    async def test_json_body_and_method(self, runtime):
        stub, gateway = runtime(lambda req: httpx.Response(200, json={"ok": True}))
        await gateway.request(
            gateway.url("/deployments"),
            method="POST",
            headers={"Content-Type": "application/json"},
            body={"uri": "http://svc:9080"},
        )
        assert stub.last.method == "POST"
        assert stub.last.headers["Content-Type"] == "application/json"
        assert stub.last.content == b'{"uri": "http://svc:9080"}'

    async def test_no_body_sends_no_content(self, runtime):
        stub, gateway = runtime(lambda req: httpx.Response(200, json=[]))
        await gateway.request(gateway.url("/services"))
        assert stub.last.content == b""

    def test_url_joins_base(self):
        gateway = AdminGateway("http://localhost:9070/")
        assert gateway.url("/services") == "http://localhost:9070/services"


# ---------------------------------------------------------------------------
# Success responses
# ---------------------------------------------------------------------------

class TestSuccess:
    async def test_json_parsed(self, runtime):
        _, gateway = runtime(lambda req: httpx.Response(200, json={"services": []}))
        assert await gateway.request(gateway.url("/services")) == {"services": []}

    async def test_204_returns_none(self, runtime):
        _, gateway = runtime(lambda req: httpx.Response(204))
        assert await gateway.request(gateway.url("/deployments/dep_1"), method="DELETE") is None

    async def test_zero_content_length_returns_none(self, runtime):
        _, gateway = runtime(
            lambda req: httpx.Response(200, headers={"Content-Length": "0"}),
        )
        assert await gateway.request(gateway.url("/deployments/dep_1"), method="DELETE") is None

    async def test_invalid_json_is_decode_error(self, runtime):
        _, gateway = runtime(lambda req: httpx.Response(200, text="<html>oops</html>"))
        url = gateway.url("/services")
        with pytest.raises(DecodeError, match=f"Failed to fetch {url}"):
            await gateway.request(url)


# ---------------------------------------------------------------------------
# Failures
# ---------------------------------------------------------------------------

class TestFailures:
    async def test_remote_error_with_json_message(self, runtime):
        _, gateway = runtime(
            lambda req: httpx.Response(404, json={"message": "Cannot find service 'Nope'"}),
        )
        with pytest.raises(RemoteError) as exc:
            await gateway.request(gateway.url("/services/Nope"))
        text = str(exc.value)
        assert "404" in text
        assert "Not Found" in text
        assert "Cannot find service 'Nope'" in text
        assert exc.value.status_code == 404
        assert exc.value.detail == "Cannot find service 'Nope'"

    async def test_remote_error_with_text_body(self, runtime):
        _, gateway = runtime(lambda req: httpx.Response(502, text="upstream exploded"))
        with pytest.raises(RemoteError) as exc:
            await gateway.request(gateway.url("/services"))
        assert "502 Bad Gateway: upstream exploded" in str(exc.value)

    async def test_remote_error_on_204_like_failure_not_swallowed(self, runtime):
        _, gateway = runtime(
            lambda req: httpx.Response(409, headers={"Content-Length": "0"}),
        )
        with pytest.raises(RemoteError, match="409 Conflict"):
            await gateway.request(gateway.url("/deployments"), method="POST", body={})

    async def test_connect_error_is_transport_error(self, runtime):
        def refuse(request):
            raise httpx.ConnectError("Connection refused", request=request)

        _, gateway = runtime(refuse)
        url = gateway.url("/deployments")
        with pytest.raises(TransportError, match=f"Failed to fetch {url}: Connection refused"):
            await gateway.request(url)

    async def test_remote_error_logged(self, runtime, caplog):
        import logging

        _, gateway = runtime(lambda req: httpx.Response(500, text="boom"))
        with caplog.at_level(logging.WARNING, logger="restate_mcp.gateway"):
            with pytest.raises(RemoteError):
                await gateway.request(gateway.url("/services"))
        assert "Admin API error 500" in caplog.text


# ---------------------------------------------------------------------------
# Ephemeral client
# ---------------------------------------------------------------------------

class TestEphemeralClient:
    async def test_without_shared_client(self):
        mock_resp = MagicMock()
        mock_resp.is_success = True
        mock_resp.status_code = 200
        mock_resp.headers = httpx.Headers({"Content-Type": "application/json"})
        mock_resp.json.return_value = {"services": []}

        mock_client = AsyncMock()
        mock_client.request = AsyncMock(return_value=mock_resp)
        mock_client.__aenter__ = AsyncMock(return_value=mock_client)
        mock_client.__aexit__ = AsyncMock(return_value=False)

        with patch("restate_mcp.gateway.httpx.AsyncClient", return_value=mock_client) as cls:
            gateway = AdminGateway(BASE_URL, timeout=5.0)
            result = await gateway.request(gateway.url("/services"))

        assert result == {"services": []}
        cls.assert_called_once_with(timeout=5.0)
        mock_client.request.assert_awaited_once()
        assert mock_client.request.call_args.args == ("GET", f"{BASE_URL}/services")
