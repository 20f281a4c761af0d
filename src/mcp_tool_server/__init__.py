"""MCP Tool Server - JSON-RPC dispatcher for schema-described tools."""

__version__ = "1.0.0"
