"""Structured JSON logging configuration.

Configures Python logging to emit JSON-formatted log entries with required
fields: request_id, level, timestamp. Request fields are added contextually
(method, url, status_code, duration_ms, attempt for transport lines;
error_code, error_reason for failures).

SECURITY: Never logs access/refresh tokens, passwords or Authorization headers.
"""

from __future__ import annotations

import json
import logging
import re
from datetime import datetime, timezone

# Patterns that should be redacted from log output
_SENSITIVE_PATTERNS = re.compile(
    r"(access.?token|refresh.?token|auth_token|password|secret|authorization)"
    r"[\"']?[\s]*[=:]\s*[\"']?[^\s,\"'}]+",
    re.IGNORECASE,
)
_BEARER_PATTERN = re.compile(r"Bearer\s+[A-Za-z0-9\-._~+/]+=*", re.IGNORECASE)

_CONTEXT_FIELDS = (
    "method",
    "url",
    "status_code",
    "duration_ms",
    "attempt",
    "error_code",
)


class JsonFormatter(logging.Formatter):
    """Formats log records as JSON with structured fields.

    Each entry contains at minimum: request_id, level, timestamp, message.
    Additional fields can be attached via the ``extra`` dict on log calls.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": self._sanitize(record.getMessage()),
            "request_id": getattr(record, "request_id", None),
        }

        for name in _CONTEXT_FIELDS:
            if hasattr(record, name):
                entry[name] = getattr(record, name)

        if hasattr(record, "error_reason"):
            entry["error_reason"] = self._sanitize(str(getattr(record, "error_reason")))

        if record.exc_info and record.exc_info[1]:
            entry["exception"] = self._sanitize(self.formatException(record.exc_info))

        return json.dumps(entry, default=str, ensure_ascii=False)

    @staticmethod
    def _sanitize(text: str) -> str:
        """Remove sensitive values from log text."""
        text = _BEARER_PATTERN.sub("Bearer [REDACTED]", text)
        return _SENSITIVE_PATTERNS.sub("[REDACTED]", text)


def configure_logging(level: str = "INFO", json_format: bool = True) -> None:
    """Configure the root logger.

    Parameters
    ----------
    level:
        Log level string (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    json_format:
        Emit JSON lines; otherwise a plain ``asctime level name message`` format.
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Remove existing handlers to avoid duplicates
    root.handlers.clear()

    handler = logging.StreamHandler()
    if json_format:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    root.addHandler(handler)
