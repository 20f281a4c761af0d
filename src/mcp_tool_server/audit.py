"""Tool call audit trail.

Each tools/call produces two JSON Lines records: a ``request`` record with
the (redacted) arguments and a ``response`` record with the outcome and
how long the call took. Records sharing a ``request_id`` belong together.
"""

from __future__ import annotations

import json
import re
import threading
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, TextIO

REDACTED = "[REDACTED]"

SENSITIVE_KEY = re.compile(r"password|secret|api[_-]?key|token|credential", re.IGNORECASE)


def redact_arguments(value: Any) -> Any:
    """Return a copy of ``value`` with secrets under sensitive keys masked.

    Mappings are walked at any depth, including mappings nested in lists.
    """
    if isinstance(value, dict):
        return {
            key: REDACTED if SENSITIVE_KEY.search(str(key)) else redact_arguments(item)
            for key, item in value.items()
        }
    if isinstance(value, list):
        return [redact_arguments(item) for item in value]
    return value


class AuditLogger:
    """Appends tool call records to a JSON Lines file.

    Safe to share between threads; every record is flushed as soon as it is
    written.
    """

    def __init__(self, log_path: Path) -> None:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        self.path = log_path
        self._stream: TextIO = log_path.open("a", encoding="utf-8")
        self._lock = threading.Lock()

    def _append(self, record_type: str, **fields: Any) -> None:
        stamp = datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")
        line = json.dumps({"type": record_type, "timestamp": stamp, **fields}, default=str)
        with self._lock:
            self._stream.write(line + "\n")
            self._stream.flush()

    def log_request(self, request_id: Any, tool_name: Any, arguments: Any) -> None:
        """Record an incoming tool call; sensitive argument values are masked."""
        self._append(
            "request",
            request_id=request_id,
            tool_name=tool_name,
            arguments=redact_arguments(arguments),
        )

    def log_response(
        self, request_id: Any, status: str, duration_ms: float, error_code: int | None = None
    ) -> None:
        """Record how a tool call ended.

        Args:
            request_id: JSON-RPC id of the call.
            status: ``success`` or ``error``.
            duration_ms: Wall time spent handling the call.
            error_code: JSON-RPC error code, for failed calls only.
        """
        extra = {} if error_code is None else {"error_code": error_code}
        self._append(
            "response",
            request_id=request_id,
            result_status=status,
            execution_time_ms=duration_ms,
            **extra,
        )

    def close(self) -> None:
        with self._lock:
            if not self._stream.closed:
                self._stream.close()

    def __enter__(self) -> AuditLogger:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
