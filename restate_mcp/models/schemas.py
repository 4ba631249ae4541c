#  Restate MCP Server - Pydantic Schemas
#
#  Request/response models for the Restate admin API, used to validate
#  tool-built request bodies and every response before it reaches the agent.
#
#  The wire format carries no tag telling HTTP and Lambda deployments apart,
#  so the deployment unions reconstruct one from field presence ("uri" vs
#  "arn") once, at validation time. Each variant then exposes it as `kind`.
#
#  Optional fields keep three states (absent / null / value): WireModel only
#  serializes a None-default field when it was present in the input.
#
#  Depends on: models/enums.py, exceptions.py
#  Used by:    admin_client.py, tools/*

from typing import Annotated, Any, ClassVar, Union

from pydantic import (
    BaseModel,
    Discriminator,
    Field,
    SerializerFunctionWrapHandler,
    StrictBool,
    StrictInt,
    Tag,
    TypeAdapter,
    ValidationError,
    model_serializer,
)

from restate_mcp.exceptions import SchemaValidationError
from restate_mcp.models.enums import HandlerType, ProtocolType, ServiceType

Revision = Annotated[int, Field(strict=True, ge=0)]


class WireModel(BaseModel):
    """Base for everything that crosses the admin API boundary."""

    @model_serializer(mode="wrap")
    def _omit_unsent(self, handler: SerializerFunctionWrapHandler) -> dict:
        data = handler(self)
        for name, field in type(self).model_fields.items():
            if field.default is None and name not in self.model_fields_set:
                data.pop(name, None)
        return data


def _endpoint_kind(value: Any) -> str | None:
    """Discriminator for deployment unions: exactly one of uri/arn must be present."""
    if isinstance(value, dict):
        has_uri, has_arn = "uri" in value, "arn" in value
        if has_uri and not has_arn:
            return "http"
        if has_arn and not has_uri:
            return "lambda"
        return None
    return getattr(value, "kind", None)


def _endpoint_union(http_model: type, lambda_model: type):
    return Annotated[
        Union[
            Annotated[http_model, Tag("http")],
            Annotated[lambda_model, Tag("lambda")],
        ],
        Discriminator(
            _endpoint_kind,
            custom_error_type="endpoint_kind",
            custom_error_message="Expected exactly one of 'uri' (HTTP) or 'arn' (Lambda)",
        ),
    ]


# ---------------------------------------------------------------------------
# Deployments
# ---------------------------------------------------------------------------

class ServiceNameRevision(WireModel):
    name: str
    revision: Revision


class HttpDeployment(WireModel):
    kind: ClassVar[str] = "http"

    id: str
    services: list[ServiceNameRevision]
    uri: str
    protocol_type: ProtocolType
    http_version: str
    created_at: str
    min_protocol_version: StrictInt
    max_protocol_version: StrictInt
    additional_headers: dict[str, str] | None = None


class LambdaDeployment(WireModel):
    kind: ClassVar[str] = "lambda"

    id: str
    services: list[ServiceNameRevision]
    arn: str
    assume_role_arn: str | None = None
    created_at: str
    min_protocol_version: StrictInt
    max_protocol_version: StrictInt
    additional_headers: dict[str, str] | None = None


Deployment = _endpoint_union(HttpDeployment, LambdaDeployment)
DeploymentAdapter: TypeAdapter = TypeAdapter(Deployment)


class ListDeploymentsResponse(WireModel):
    deployments: list[Deployment]


# ---------------------------------------------------------------------------
# Services
# ---------------------------------------------------------------------------

class HandlerMetadata(WireModel):
    name: str
    ty: HandlerType | None = None  # Absent on stateless services
    documentation: str | None = None
    metadata: dict[str, str] | None = None
    input_description: str
    output_description: str
    input_json_schema: Any = None
    output_json_schema: Any = None


class ServiceMetadata(WireModel):
    name: str
    handlers: list[HandlerMetadata]
    ty: ServiceType
    documentation: str | None = None
    metadata: dict[str, str] | None = None
    deployment_id: str
    revision: Revision
    public: StrictBool
    idempotency_retention: str
    # Only reported for VirtualObject / Workflow
    workflow_completion_retention: str | None = None
    inactivity_timeout: str | None = None
    abort_timeout: str | None = None


class ListServicesResponse(WireModel):
    services: list[ServiceMetadata]


class ModifyServiceRequest(WireModel):
    """PATCH body: only fields the caller supplied are sent."""
    public: StrictBool | None = None
    idempotency_retention: str | None = None


# ---------------------------------------------------------------------------
# Registration
# ---------------------------------------------------------------------------

class HttpRegisterDeploymentRequest(WireModel):
    kind: ClassVar[str] = "http"

    uri: str
    additional_headers: dict[str, str] | None = None
    use_http_11: StrictBool = False
    force: StrictBool = True
    dry_run: StrictBool = False


class LambdaRegisterDeploymentRequest(WireModel):
    kind: ClassVar[str] = "lambda"

    arn: str
    assume_role_arn: str | None = None
    additional_headers: dict[str, str] | None = None
    force: StrictBool = True
    dry_run: StrictBool = False


RegisterDeploymentRequest = _endpoint_union(
    HttpRegisterDeploymentRequest, LambdaRegisterDeploymentRequest,
)
RegisterDeploymentRequestAdapter: TypeAdapter = TypeAdapter(RegisterDeploymentRequest)


def _registered_service_kind(value: Any) -> str:
    """Discriminator for registration results: metadata fields pick the full model."""
    if isinstance(value, dict):
        return "metadata" if "handlers" in value or "ty" in value else "pair"
    return "metadata" if isinstance(value, ServiceMetadata) else "pair"


class RegisterDeploymentResponse(WireModel):
    id: str
    # The runtime reports full metadata; older runtimes only name/revision
    services: list[
        Annotated[
            Union[
                Annotated[ServiceMetadata, Tag("metadata")],
                Annotated[ServiceNameRevision, Tag("pair")],
            ],
            Discriminator(_registered_service_kind),
        ]
    ]


# ---------------------------------------------------------------------------
# Introspection
# ---------------------------------------------------------------------------

class QueryRequest(WireModel):
    query: str


class InvocationSummary(WireModel):
    """Projection of one sys_invocation row. Rows are schemaless, so values pass through."""
    id: Any
    service: Any
    handler: Any
    status: Any
    started_at: Any
    completed_at: Any
    object_key: Any = None


class ListInvocationsResponse(WireModel):
    invocations: list[InvocationSummary]


# ---------------------------------------------------------------------------
# Validation boundary
# ---------------------------------------------------------------------------

def _format_loc(loc: tuple) -> str:
    return ".".join(str(part) for part in loc) or "<root>"


def parse(schema: type[BaseModel] | TypeAdapter, data: Any, what: str):
    """Validate `data` against a model or adapter.

    Raises SchemaValidationError naming every offending field path.
    """
    try:
        if isinstance(schema, TypeAdapter):
            return schema.validate_python(data)
        return schema.model_validate(data)
    except ValidationError as e:
        errors = [
            {"loc": _format_loc(err["loc"]), "msg": err["msg"], "type": err["type"]}
            for err in e.errors()
        ]
        details = "; ".join(f"{err['loc']}: {err['msg']}" for err in errors)
        raise SchemaValidationError(f"Invalid {what}: {details}", errors=errors) from e


def to_wire(value: BaseModel) -> dict:
    """JSON-ready dict, preserving absent vs null on optional fields."""
    return value.model_dump(mode="json")
