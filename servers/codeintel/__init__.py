"""Code intelligence MCP server."""
