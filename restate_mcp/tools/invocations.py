#  Restate MCP Server - Introspection Tools
#
#  list-invocations (running invocations) and query (free-form SQL
#  against the runtime's introspection tables).
#
#  Depends on: tools/base.py
#  Used by:    tools/registry.py

from pydantic import BaseModel, Field

from restate_mcp.tools.base import Tool, as_text


class QueryArgs(BaseModel):
    query: str = Field(
        description=(
            "SQL query to execute against the introspection tables, e.g. "
            "\"SELECT * FROM state WHERE service_name = 'greeter'\""
        ),
    )


class ListInvocationsTool(Tool):
    name = "list-invocations"
    description = "List all running service invocations"

    async def run(self, args) -> str:
        return as_text(await self._client.list_invocations())


class QueryTool(Tool):
    name = "query"
    description = (
        "Run a read-only SQL query against Restate's introspection tables. "
        "Use 'state' for service KV state (columns: service_name, service_key, "
        "key, value_utf8) and 'sys_invocation' for invocations."
    )
    args_model = QueryArgs

    async def run(self, args: QueryArgs) -> str:
        return as_text(await self._client.run_query(args.query))
