#  Restate MCP Server - Admin API Client
#
#  One method per Restate admin capability. Each builds the target URL,
#  makes exactly one gateway call, and validates the result through the
#  matching schema before returning it.
#
#  Depends on: gateway.py, models/schemas.py, exceptions.py
#  Used by:    container.py, tools/*

import json
import logging
from datetime import datetime, timezone
from typing import Any
from urllib.parse import quote

from restate_mcp.exceptions import DecodeError, RemoteError, TransportError
from restate_mcp.gateway import AdminGateway
from restate_mcp.models.schemas import (
    DeploymentAdapter,
    HttpRegisterDeploymentRequest,
    LambdaRegisterDeploymentRequest,
    ListDeploymentsResponse,
    ListInvocationsResponse,
    ListServicesResponse,
    ModifyServiceRequest,
    QueryRequest,
    RegisterDeploymentResponse,
    ServiceMetadata,
    parse,
    to_wire,
)

logger = logging.getLogger("restate_mcp.admin_client")

JSON_HEADERS = {"Content-Type": "application/json"}

# Matched case-sensitively by the runtime
RUNNING_INVOCATIONS_QUERY = "SELECT * FROM sys_invocation WHERE status = 'Running'"

INVALID_JSON_PREVIEW_CHARS = 50


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _segment(value: str) -> str:
    return quote(value, safe="")


def invocation_from_row(row: dict) -> dict:
    """Reshape one sys_invocation row into the invocation projection.

    Missing or empty columns fall back to "" / "Running" / now / null;
    object_key is left out entirely when the row has none.
    """
    summary = {
        "id": row.get("id") or "",
        "service": row.get("service_name") or "",
        "handler": row.get("handler_name") or "",
        "status": row.get("status") or "Running",
        "started_at": row.get("started_at") or _utc_now_iso(),
        "completed_at": row.get("completed_at") or None,
    }
    if row.get("object_key"):
        summary["object_key"] = row["object_key"]
    return summary


class AdminClient:
    """Typed operations over the Restate admin API."""

    def __init__(self, gateway: AdminGateway):
        self._gateway = gateway

    # -- Deployments --------------------------------------------------------

    async def list_deployments(self) -> ListDeploymentsResponse:
        data = await self._gateway.request(self._gateway.url("/deployments"))
        return parse(ListDeploymentsResponse, data, "deployment list")

    async def get_deployment(self, deployment_id: str):
        data = await self._gateway.request(
            self._gateway.url(f"/deployments/{_segment(deployment_id)}"),
        )
        return parse(DeploymentAdapter, data, "deployment")

    async def create_deployment(
        self,
        request: HttpRegisterDeploymentRequest | LambdaRegisterDeploymentRequest,
    ) -> RegisterDeploymentResponse:
        logger.info("Registering %s deployment", request.kind)
        data = await self._gateway.request(
            self._gateway.url("/deployments"),
            method="POST",
            headers=JSON_HEADERS,
            body=to_wire(request),
        )
        return parse(RegisterDeploymentResponse, data, "registration response")

    async def delete_deployment(self, deployment_id: str, force: bool = True) -> None:
        logger.info("Deleting deployment %s (force=%s)", deployment_id, force)
        await self._gateway.request(
            self._gateway.url(
                f"/deployments/{_segment(deployment_id)}?force={str(force).lower()}"
            ),
            method="DELETE",
        )

    # -- Services -----------------------------------------------------------

    async def list_services(self) -> ListServicesResponse:
        data = await self._gateway.request(self._gateway.url("/services"))
        return parse(ListServicesResponse, data, "service list")

    async def get_service(self, service_name: str) -> ServiceMetadata:
        data = await self._gateway.request(
            self._gateway.url(f"/services/{_segment(service_name)}"),
        )
        return parse(ServiceMetadata, data, "service")

    async def modify_service(
        self,
        service_name: str,
        public: bool | None = None,
        idempotency_retention: str | None = None,
    ) -> ServiceMetadata:
        """PATCH a service. Only the options actually given end up in the body."""
        changes = {}
        if public is not None:
            changes["public"] = public
        if idempotency_retention is not None:
            changes["idempotency_retention"] = idempotency_retention
        patch = parse(ModifyServiceRequest, changes, "service modification")

        logger.info("Modifying service %s: %s", service_name, sorted(changes))
        data = await self._gateway.request(
            self._gateway.url(f"/services/{_segment(service_name)}"),
            method="PATCH",
            headers=JSON_HEADERS,
            body=to_wire(patch),
        )
        return parse(ServiceMetadata, data, "service")

    # -- Introspection ------------------------------------------------------

    async def list_invocations(self) -> ListInvocationsResponse:
        result = await self.run_query(RUNNING_INVOCATIONS_QUERY)
        rows = (result.get("rows") if isinstance(result, dict) else None) or []
        invocations = [invocation_from_row(row) for row in rows if isinstance(row, dict)]
        return parse(ListInvocationsResponse, {"invocations": invocations}, "invocation list")

    async def run_query(self, query: str) -> Any:
        """Run a read-only SQL introspection query and return the decoded JSON.

        Non-JSON content types are rejected rather than coerced; undecodable
        bodies are reported with a short preview only.
        """
        url = self._gateway.url("/query")
        body = to_wire(QueryRequest(query=query))
        try:
            resp = await self._gateway.send(
                "POST", url, headers={**JSON_HEADERS, "Accept": "application/json"}, body=body,
            )
        except TransportError as e:
            raise TransportError(f"SQL query error: {e}") from e

        if not resp.is_success:
            logger.warning("SQL query failed: %s %s", resp.status_code, resp.reason_phrase)
            raise RemoteError(
                f"SQL query error: Server error: {resp.status_code} {resp.reason_phrase} - {resp.text}",
                status_code=resp.status_code,
                reason=resp.reason_phrase,
                detail=resp.text,
            )

        content_type = resp.headers.get("Content-Type")
        if content_type and "application/json" not in content_type:
            logger.warning("SQL query returned unexpected content type: %s", content_type)
            raise DecodeError(f"SQL query error: Unexpected response type: {content_type}")

        text = resp.text
        try:
            return json.loads(text)
        except ValueError as e:
            preview = text[:INVALID_JSON_PREVIEW_CHARS]
            logger.warning("SQL query returned invalid JSON: %s", e)
            raise DecodeError(f"SQL query error: Invalid JSON response: {preview}...") from e
