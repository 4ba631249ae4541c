#  Restate MCP Server - Dependency Injection Container
#
#  DeclarativeContainer wiring config -> gateway -> client -> tool registry.
#  The admin base URL is a provider so it can be set once at startup
#  (after validation) or overridden per test.
#
#  Depends on: config.py, gateway.py, admin_client.py, tools/registry.py
#  Used by:    server.py

from dependency_injector import containers, providers

from restate_mcp.admin_client import AdminClient
from restate_mcp.config import ADMIN_API_BASE, ADMIN_TIMEOUT
from restate_mcp.gateway import AdminGateway
from restate_mcp.tools.registry import ToolRegistry


class Container(containers.DeclarativeContainer):
    """DI container for the Restate MCP server.

    All services are Singletons, one instance per server process.
    Tests override them via container.xxx.override(providers.Object(mock)).
    """

    # --- Config ---
    base_url = providers.Object(ADMIN_API_BASE)
    timeout = providers.Object(ADMIN_TIMEOUT)

    # --- Core ---
    gateway = providers.Singleton(AdminGateway, base_url=base_url, timeout=timeout)
    admin_client = providers.Singleton(AdminClient, gateway=gateway)
    tool_registry = providers.Singleton(ToolRegistry, client=admin_client)
