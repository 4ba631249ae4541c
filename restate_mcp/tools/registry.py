#  Restate MCP Server - Tool Registry
#
#  Injectable registry binding each admin tool to its external name.
#  Tools are instantiated and registered when the registry is created;
#  every call is stateless and maps to exactly one AdminClient operation.
#
#  Depends on: tools/base.py, tools/*, admin_client.py, logging_config.py
#  Used by:    container.py, server.py

import logging
import uuid

from restate_mcp.admin_client import AdminClient
from restate_mcp.exceptions import AdminApiError, ToolNotFoundError
from restate_mcp.logging_config import set_tool_call_id, tool_call_id_var
from restate_mcp.tools.base import Tool
from restate_mcp.tools.deployments import (
    CreateDeploymentTool,
    DeleteDeploymentTool,
    GetDeploymentTool,
    ListDeploymentsTool,
)
from restate_mcp.tools.invocations import ListInvocationsTool, QueryTool
from restate_mcp.tools.services import GetServiceTool, ListServicesTool, ModifyServiceTool

logger = logging.getLogger("restate_mcp.tools.registry")

DEFAULT_TOOLS: list[type[Tool]] = [
    ListDeploymentsTool,
    GetDeploymentTool,
    CreateDeploymentTool,
    DeleteDeploymentTool,
    ListServicesTool,
    GetServiceTool,
    ModifyServiceTool,
    ListInvocationsTool,
    QueryTool,
]


class ToolRegistry:
    """Registry of admin tools, keyed by their external name."""

    def __init__(self, client: AdminClient):
        self._tools: dict[str, Tool] = {}
        for tool_cls in DEFAULT_TOOLS:
            self.register(tool_cls(client))
        logger.info("Registered %d tools", len(self._tools))

    def register(self, tool: Tool):
        if tool.name in self._tools:
            raise ValueError(f"Duplicate tool name: {tool.name}")
        self._tools[tool.name] = tool

    def get(self, name: str) -> Tool | None:
        return self._tools.get(name)

    def all_names(self) -> list[str]:
        return list(self._tools.keys())

    def definitions(self) -> list[dict]:
        return [tool.to_mcp_tool() for tool in self._tools.values()]

    async def call(self, name: str, arguments: dict | None = None) -> str:
        """Run one tool call and return its text payload.

        Failures are logged and re-raised for the transport to report.
        """
        tool = self._tools.get(name)
        if tool is None:
            raise ToolNotFoundError(f"Unknown tool: {name}")

        token = set_tool_call_id(uuid.uuid4().hex[:12])
        try:
            logger.info("Calling tool %s", name)
            return await tool.execute(arguments)
        except AdminApiError as e:
            logger.warning("Tool %s failed: %s", name, e)
            raise
        except Exception:
            logger.warning("Tool %s failed unexpectedly", name, exc_info=True)
            raise
        finally:
            tool_call_id_var.reset(token)
