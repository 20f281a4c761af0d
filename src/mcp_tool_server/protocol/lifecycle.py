"""MCP lifecycle tracking.

Handles the initialize/initialized handshake and records connection state.
The state is advisory: no request is rejected because the handshake has
not completed yet.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)

# Protocol version advertised in the initialize result
MCP_PROTOCOL_VERSION = "2024-11-05"


class LifecycleState(Enum):
    """MCP connection lifecycle states."""

    UNINITIALIZED = "uninitialized"
    INITIALIZED = "initialized"


@dataclass
class LifecycleTracker:
    """Tracks MCP handshake progress.

    ``initialize`` always returns the same capability payload and never
    moves the state; only the client's ``notifications/initialized``
    does.
    """

    server_info: dict[str, str] = field(
        default_factory=lambda: {"name": "mcp-tool-server", "version": "1.0.0"}
    )
    protocol_version: str = MCP_PROTOCOL_VERSION
    state: LifecycleState = LifecycleState.UNINITIALIZED
    client_info: dict[str, Any] | None = None
    initialize_count: int = 0
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    @property
    def is_initialized(self) -> bool:
        """Check whether the client completed the handshake."""
        return self.state == LifecycleState.INITIALIZED

    def initialize_result(self) -> dict[str, Any]:
        """Return the fixed initialize payload."""
        return {
            "protocolVersion": self.protocol_version,
            "capabilities": {"tools": {}},
            "serverInfo": dict(self.server_info),
        }

    def handle_initialize(self, params: Any) -> dict[str, Any]:
        """Handle initialize request.

        Args:
            params: Initialize request parameters (recorded for diagnostics).

        Returns:
            Initialize response result, identical on every call.
        """
        with self._lock:
            self.initialize_count += 1
            if isinstance(params, dict) and isinstance(params.get("clientInfo"), dict):
                self.client_info = params["clientInfo"]

        logger.info(
            "initialize received (state=%s, client=%s, count=%d)",
            self.state.value,
            self.client_info,
            self.initialize_count,
        )
        return self.initialize_result()

    def handle_initialized(self) -> bool:
        """Handle initialized notification.

        Returns:
            True if this call moved the state to INITIALIZED.
        """
        with self._lock:
            if self.state == LifecycleState.INITIALIZED:
                return False
            self.state = LifecycleState.INITIALIZED

        logger.info("Client initialized")
        return True
