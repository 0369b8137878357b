"""MCP server definitions: storage locations and validation."""
