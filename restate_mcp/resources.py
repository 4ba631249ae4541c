#  Restate MCP Server - Documentation Resources
#
#  Read-only markdown documents published as MCP resources so an agent
#  can learn the Restate model and the tool surface before calling tools.
#
#  Depends on: (none)
#  Used by:    server.py

from dataclasses import dataclass


@dataclass(frozen=True)
class DocResource:
    uri: str
    name: str
    description: str
    text: str
    mime_type: str = "text/markdown"


OVERVIEW = """# Restate Architecture Overview

Restate is a distributed runtime for reliable, stateful services.

## Key Concepts

- **Deployments**: Services are registered via deployments that provide an HTTP endpoint or Lambda ARN
- **Services**: Individual services exposed by a deployment that can be invoked
- **Handlers**: Functions within a service that can be called
- **Service Types**:
  - *Service*: Stateless service
  - *VirtualObject*: Stateful service with exclusive access to state
  - *Workflow*: Long-running, restartable service flow

## API Structure

- **/deployments**: Register, list, and manage service deployments
- **/services**: View and configure services
- **/services/{service}/handlers**: View service handlers and their metadata
- **/query**: Run SQL over the runtime's introspection tables
"""

TOOLS_GUIDE = """# Restate Management Tools

This MCP server provides tools to interact with a Restate admin API.

## Available Tools

- **list-deployments**: List all registered service deployments
- **get-deployment**: Get details of a specific deployment by ID
- **create-deployment**: Register a new deployment (HTTP endpoint or Lambda)
- **delete-deployment**: Remove a deployment from Restate
- **list-services**: List all available services
- **get-service**: Get details of a specific service
- **modify-service**: Configure a service (visibility, idempotency retention)
- **list-invocations**: List all running service invocations
- **query**: Query introspection tables (KV state, invocations) using SQL

## Common Operations

### Registering a Deployment
Use `create-deployment` with a service URI to register a new deployment:
```
{
  "uri": "http://localhost:9080",
  "force": true
}
```

For a Lambda function, pass `arn` (and optionally `assumeRoleArn`) instead of `uri`.

### Configuring Service Visibility
Use `modify-service` to change service accessibility:
```
{
  "serviceName": "my-service",
  "isPublic": true
}
```

### Listing Running Invocations
Use `list-invocations` to see all currently running service invocations:
```
{}
```

### Querying Service State
Use `query` to read a service's key-value state using SQL:
```
{
  "query": "SELECT * FROM state WHERE service_name = 'greeter'"
}
```

The `state` table has these common columns:
- service_name: Name of the service
- service_key: Virtual object key
- key: The KV state key
- value_utf8: String representation of the value
- value: Binary representation of the value
- partition_key: Internal Restate partition identifier

Examples:
```
// Query specific object key's state
"query": "SELECT * FROM state WHERE service_name = 'greeter' AND service_key = 'world'"

// Query by specific value
"query": "SELECT * FROM state WHERE key = 'count' AND value_utf8 = '2'"

// Inspect invocations
"query": "SELECT id, target, status FROM sys_invocation LIMIT 10"
```
"""

DOCUMENTS = [
    DocResource(
        uri="restate://docs/overview",
        name="restate-overview",
        description="Overview of Restate architecture and concepts",
        text=OVERVIEW,
    ),
    DocResource(
        uri="restate://docs/tools",
        name="restate-tools-guide",
        description="Documentation for using Restate management tools",
        text=TOOLS_GUIDE,
    ),
]


def get_document(uri: str) -> DocResource:
    for doc in DOCUMENTS:
        if doc.uri == uri:
            return doc
    raise ValueError(f"Unknown resource: {uri}")
