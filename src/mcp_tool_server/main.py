"""MCP Tool Server - command line entry point.

Serves the built-in calculator and text tools over STDIO, one JSON-RPC
message per line.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from mcp_tool_server import __version__
from mcp_tool_server.config import ConfigLoadError, ServerConfig, load_config
from mcp_tool_server.plugins import builtin_plugins
from mcp_tool_server.protocol.transport import StdioTransport
from mcp_tool_server.server import MCPServer
from mcp_tool_server.tools.registry import ToolRegistry

logger = logging.getLogger("mcp_tool_server")


def configure_logging(level: str) -> None:
    """Send log records to stderr; stdout carries protocol traffic only."""
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def create_server(config: ServerConfig) -> MCPServer:
    """Build the tool registry and the server around it."""
    registry = ToolRegistry(builtin_plugins())
    return MCPServer(registry, config)


def serve(server: MCPServer, transport: StdioTransport) -> None:
    """Process messages until the transport reaches EOF."""
    while True:
        message = transport.read_message()
        if message is None:
            logger.info("EOF received, shutting down")
            return

        response = server.handle_raw(message)
        if response is not None:
            transport.write_message(response)


def main(argv: list[str] | None = None) -> int:
    """Run the MCP server.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    parser = argparse.ArgumentParser(description="MCP Tool Server")
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        help="Path to configuration YAML file (defaults apply when omitted)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Override the configured log level",
    )
    parser.add_argument(
        "--version",
        "-v",
        action="version",
        version=f"mcp-tool-server {__version__}",
    )
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config) if args.config else ServerConfig()
    except ConfigLoadError as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return 1

    configure_logging(args.log_level or config.log_level)

    with create_server(config) as server:
        logger.info(
            "MCP Tool Server started with %d tools (%s)",
            len(server.registry),
            ", ".join(tool.name for tool in server.registry),
        )
        try:
            serve(server, StdioTransport())
        except KeyboardInterrupt:
            logger.info("Interrupted, shutting down")
            return 130  # Standard exit code for SIGINT
        except OSError as e:
            logger.error("Transport failure: %s", e)
            return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
