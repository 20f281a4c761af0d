"""Allow running the server with ``python -m mcp_tool_server``."""

import sys

from mcp_tool_server.main import main

sys.exit(main())
