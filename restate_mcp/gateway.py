#  Restate MCP Server - Admin HTTP Gateway
#
#  The single outbound-request helper for the Restate admin API.
#  Attaches the client identity header, short-circuits empty bodies,
#  and turns every failure into a typed AdminApiError.
#
#  Depends on: config.py, exceptions.py
#  Used by:    admin_client.py, container.py

import json
import logging
from typing import Any

import httpx

from restate_mcp.config import USER_AGENT
from restate_mcp.exceptions import DecodeError, RemoteError, TransportError

logger = logging.getLogger("restate_mcp.gateway")


def extract_error_detail(text: str) -> str:
    """Best-effort human-readable message from a non-2xx body.

    Uses the `message` field when the body is a JSON object carrying a
    non-empty string there; otherwise the raw text, verbatim.
    """
    try:
        payload = json.loads(text)
    except ValueError:
        return text
    if isinstance(payload, dict):
        message = payload.get("message")
        if isinstance(message, str) and message:
            return message
    return text


class AdminGateway:
    """HTTP access to one Restate admin endpoint.

    The base URL is fixed at construction. An optional httpx.AsyncClient
    can be injected (tests use one with a MockTransport); otherwise each
    request uses a short-lived client, so nothing is pooled between calls.
    """

    def __init__(
        self,
        base_url: str,
        http_client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._http = http_client
        self._timeout = timeout

    def url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    async def send(
        self,
        method: str,
        url: str,
        headers: dict[str, str] | None = None,
        body: Any = None,
    ) -> httpx.Response:
        """Issue one request and return the raw response.

        Caller-supplied headers win over the default identity header.
        Only network-level failures raise here (TransportError).
        """
        merged = httpx.Headers({"User-Agent": USER_AGENT})
        merged.update(headers or {})
        content = json.dumps(body) if body is not None else None

        try:
            if self._http:
                resp = await self._http.request(method, url, headers=merged, content=content)
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    resp = await client.request(method, url, headers=merged, content=content)
        except httpx.HTTPError as e:
            raise TransportError(f"Failed to fetch {url}: {e}") from e

        logger.debug("%s %s -> %d", method, url, resp.status_code)
        return resp

    async def request(
        self,
        url: str,
        method: str = "GET",
        headers: dict[str, str] | None = None,
        body: Any = None,
    ) -> Any | None:
        """Send a request and return the parsed JSON body, or None for empty bodies."""
        resp = await self.send(method, url, headers=headers, body=body)

        if not resp.is_success:
            detail = extract_error_detail(resp.text)
            logger.warning("Admin API error %d for %s %s", resp.status_code, method, url)
            raise RemoteError(
                f"Failed to fetch {url}: {resp.status_code} {resp.reason_phrase}: {detail}",
                status_code=resp.status_code,
                reason=resp.reason_phrase,
                detail=detail,
            )

        if resp.status_code == 204 or resp.headers.get("Content-Length") == "0":
            return None

        try:
            return resp.json()
        except ValueError as e:
            logger.warning("Undecodable response body from %s %s", method, url)
            raise DecodeError(f"Failed to fetch {url}: {e}") from e
