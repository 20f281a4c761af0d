"""STDIO transport layer for MCP communication.

Reads newline-delimited JSON-RPC messages from stdin and writes envelopes
to stdout. Nothing else may be written to stdout; diagnostics go through
``logging`` to stderr.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

logger = logging.getLogger(__name__)


class StdioTransport:
    """Line-oriented STDIO transport."""

    def __init__(self, stdin: TextIO | None = None, stdout: TextIO | None = None) -> None:
        """Initialize the transport.

        Args:
            stdin: Input stream (defaults to sys.stdin).
            stdout: Output stream (defaults to sys.stdout).
        """
        self._stdin = stdin or sys.stdin
        self._stdout = stdout or sys.stdout

    def read_message(self) -> str | None:
        """Read the next non-empty line from stdin.

        Lines that are not valid text in the stream's encoding are logged
        and skipped.

        Returns:
            Message string (stripped), or None on EOF or a broken stream.
        """
        while True:
            try:
                line = self._stdin.readline()
            except UnicodeDecodeError as e:
                logger.error("Skipping undecodable input line: %s", e)
                continue
            except (OSError, ValueError) as e:
                logger.warning("Failed to read from stdin: %s", e)
                return None

            if not line:  # EOF
                return None

            line = line.strip()
            if line:
                return line

    def write_message(self, message: str) -> None:
        """Write a message to stdout.

        Args:
            message: JSON string to write.
        """
        self._stdout.write(message + "\n")
        self._stdout.flush()
