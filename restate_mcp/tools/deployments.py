#  Restate MCP Server - Deployment Tools
#
#  list-deployments, get-deployment, create-deployment, delete-deployment.
#
#  Depends on: tools/base.py, models/schemas.py
#  Used by:    tools/registry.py

from pydantic import BaseModel, ConfigDict, Field, model_validator

from restate_mcp.models.schemas import RegisterDeploymentRequestAdapter, parse
from restate_mcp.tools.base import Tool, as_text


class DeploymentIdArgs(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    deployment_id: str = Field(alias="deploymentId", description="Deployment identifier")


class CreateDeploymentArgs(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    uri: str | None = Field(default=None, description="URI of an HTTP deployment to register")
    arn: str | None = Field(default=None, description="ARN of a Lambda function to register")
    assume_role_arn: str | None = Field(
        default=None, alias="assumeRoleArn",
        description="Role to assume when invoking the Lambda (Lambda only)",
    )
    additional_headers: dict[str, str] | None = Field(
        default=None, alias="additionalHeaders",
        description="Optional additional headers sent with every request to the deployment",
    )
    use_http_11: bool | None = Field(
        default=None, alias="useHttp11", description="Use HTTP/1.1 instead of HTTP/2 (HTTP only)",
    )
    force: bool | None = Field(default=None, description="Force registration even if deployment exists")
    dry_run: bool | None = Field(
        default=None, alias="dryRun", description="Validate the deployment without registering it",
    )

    @model_validator(mode="after")
    def _one_endpoint(self):
        if (self.uri is None) == (self.arn is None):
            raise ValueError("Provide exactly one of 'uri' or 'arn'")
        if self.arn is not None and self.use_http_11 is not None:
            raise ValueError("'useHttp11' only applies to HTTP deployments")
        if self.uri is not None and self.assume_role_arn is not None:
            raise ValueError("'assumeRoleArn' only applies to Lambda deployments")
        return self

    def to_request(self):
        """Registration request body; unset options fall back to the request defaults."""
        fields = self.model_dump(exclude_none=True)
        return parse(RegisterDeploymentRequestAdapter, fields, "registration request")


class DeleteDeploymentArgs(DeploymentIdArgs):
    force: bool = Field(default=True, description="Force delete the deployment")


class ListDeploymentsTool(Tool):
    name = "list-deployments"
    description = "List all registered Restate deployments"

    async def run(self, args) -> str:
        return as_text(await self._client.list_deployments())


class GetDeploymentTool(Tool):
    name = "get-deployment"
    description = "Get a specific Restate deployment by ID"
    args_model = DeploymentIdArgs

    async def run(self, args: DeploymentIdArgs) -> str:
        return as_text(await self._client.get_deployment(args.deployment_id))


class CreateDeploymentTool(Tool):
    name = "create-deployment"
    description = (
        "Register a new deployment with the Restate server. Provide either the "
        "URI of an HTTP service endpoint or the ARN of a Lambda function."
    )
    args_model = CreateDeploymentArgs

    async def run(self, args: CreateDeploymentArgs) -> str:
        return as_text(await self._client.create_deployment(args.to_request()))


class DeleteDeploymentTool(Tool):
    name = "delete-deployment"
    description = "Delete a deployment from the Restate server"
    args_model = DeleteDeploymentArgs

    async def run(self, args: DeleteDeploymentArgs) -> str:
        await self._client.delete_deployment(args.deployment_id, args.force)
        return f"Successfully deleted deployment: {args.deployment_id}"
