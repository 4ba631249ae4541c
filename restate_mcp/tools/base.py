#  Restate MCP Server - Tool Base Class
#
#  Abstract base class for the admin tools exposed to MCP clients.
#  Each tool declares a pydantic argument model (its published JSON
#  Schema) and wraps exactly one AdminClient call.
#
#  Depends on: admin_client.py, models/schemas.py
#  Used by:    tools/registry.py, tools/*

import json
from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel

from restate_mcp.admin_client import AdminClient
from restate_mcp.models.schemas import parse, to_wire


class NoArgs(BaseModel):
    """Argument model for tools that take no parameters."""


def as_text(result: Any) -> str:
    """Pretty-printed JSON text for a client result."""
    if isinstance(result, BaseModel):
        result = to_wire(result)
    return json.dumps(result, indent=2, ensure_ascii=False)


class Tool(ABC):
    """Base class for tools that MCP clients can call."""

    name: str = ""
    description: str = ""
    args_model: type[BaseModel] = NoArgs

    def __init__(self, client: AdminClient):
        self._client = client

    @property
    def parameters(self) -> dict:
        """JSON Schema for input, generated from args_model (camelCase names)."""
        return self.args_model.model_json_schema(by_alias=True)

    async def execute(self, params: dict | None) -> str:
        """Validate raw arguments, run the tool and return a text result."""
        args = parse(self.args_model, params or {}, f"arguments for {self.name}")
        return await self.run(args)

    @abstractmethod
    async def run(self, args: BaseModel) -> str:
        ...

    def to_mcp_tool(self) -> dict:
        """Convert to MCP tool definition format."""
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.parameters,
        }
