#  Restate MCP Server - Entry Point
#
#  Launches the MCP server over stdio.
#
#  Depends on: restate_mcp/server.py
#  Used by:    (run directly, or via the restate-mcp console script)

from restate_mcp.server import main

if __name__ == "__main__":
    main()
