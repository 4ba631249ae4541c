#  Restate MCP Server - Service Tools
#
#  list-services, get-service, modify-service.
#
#  Depends on: tools/base.py
#  Used by:    tools/registry.py

from pydantic import BaseModel, ConfigDict, Field

from restate_mcp.tools.base import Tool, as_text


class ServiceNameArgs(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    service_name: str = Field(alias="serviceName", description="Fully qualified service name")


class ModifyServiceArgs(ServiceNameArgs):
    is_public: bool | None = Field(
        default=None, alias="isPublic", description="Make service publicly accessible",
    )
    idempotency_retention: str | None = Field(
        default=None, alias="idempotencyRetention",
        description="Idempotency retention duration, e.g. '1day' or '12h'",
    )


class ListServicesTool(Tool):
    name = "list-services"
    description = "List all registered services in the Restate server"

    async def run(self, args) -> str:
        return as_text(await self._client.list_services())


class GetServiceTool(Tool):
    name = "get-service"
    description = "Get a specific service by name"
    args_model = ServiceNameArgs

    async def run(self, args: ServiceNameArgs) -> str:
        return as_text(await self._client.get_service(args.service_name))


class ModifyServiceTool(Tool):
    name = "modify-service"
    description = "Modify a registered service configuration"
    args_model = ModifyServiceArgs

    async def run(self, args: ModifyServiceArgs) -> str:
        result = await self._client.modify_service(
            args.service_name,
            public=args.is_public,
            idempotency_retention=args.idempotency_retention,
        )
        return as_text(result)
