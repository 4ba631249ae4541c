#  Restate MCP Server - Enums
#
#  Wire-level enumerations of the Restate admin API data model.
#  Values match the runtime's JSON spelling exactly.
#
#  Depends on: (none)
#  Used by:    models/schemas.py

from enum import Enum


class ProtocolType(str, Enum):
    REQUEST_RESPONSE = "RequestResponse"
    BIDI_STREAM = "BidiStream"


class ServiceType(str, Enum):
    SERVICE = "Service"              # Stateless
    VIRTUAL_OBJECT = "VirtualObject"  # Keyed, exclusive access to state
    WORKFLOW = "Workflow"            # Run-once per key


class HandlerType(str, Enum):
    EXCLUSIVE = "Exclusive"
    SHARED = "Shared"
    WORKFLOW = "Workflow"
