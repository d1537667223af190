"""Structured JSON logging for mailexport with redaction of message content.

What:
  A small facade over text streams so every component emits single-line JSON
  records with the same core fields.

Why:
  Export runs process private mail. Diagnostics must be machine-readable and
  must never leak subjects, addresses or bodies, even when a caller passes a
  whole field map as context. Records go to ``stderr`` because ``stdout``
  carries exported data.

How:
  :class:`JsonLogger` builds ``ts``/``lvl``/``msg``/``component`` and merges a
  recursively redacted copy of the caller's context before serialising with
  :mod:`json`.

Interfaces:
  :class:`JsonLogger`, :func:`get_logger`.

Invariants & Safety:
  - Sensitive keys are replaced with ``[redacted]`` at any nesting depth,
    including inside lists.
  - The stream is flushed after every record.
"""
from __future__ import annotations

import json
import sys
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional


REDACTED = "[redacted]"
SENSITIVE_KEYS = frozenset(
    {
        "subject",
        "snippet",
        "body_text",
        "body_html",
        "from_name",
        "from_email",
        "to",
        "cc",
        "bcc",
        "reply_to",
        "delivered_to",
    }
)


@dataclass
class JsonLogger:
    """Structured JSON logger with automatic redaction.

    What:
      Emits one JSON object per line carrying a UTC timestamp, an uppercase
      level, the message, the component label and any extra context.

    Why:
      One logger type keeps the record schema uniform for tests and log
      tooling, and keeps the redaction rules in a single place.

    How:
      :meth:`log` does the work; :meth:`info`, :meth:`warning` and
      :meth:`error` forward keyword arguments as context.
    """

    stream: Any = field(default_factory=lambda: sys.stderr)
    component: str = "mailexport"

    def log(self, level: str, message: str, *, extra: Optional[Dict[str, Any]] = None) -> None:
        """Serialise one record to the stream and flush it."""

        payload = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "lvl": level.upper(),
            "msg": message,
            "component": self.component,
        }
        if extra:
            payload.update(self._redact(extra))
        json.dump(payload, self.stream, separators=(",", ":"), default=str)
        self.stream.write("\n")
        self.stream.flush()

    def info(self, message: str, **kwargs: Any) -> None:
        self.log("INFO", message, extra=kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self.log("WARN", message, extra=kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self.log("ERROR", message, extra=kwargs)

    @staticmethod
    def _redact(data: Any) -> Any:
        """Return a copy of ``data`` with sensitive keys masked.

        Dictionaries are walked recursively and lists are walked element by
        element, so a list of field maps is scrubbed as thoroughly as a single
        one.
        """

        if isinstance(data, dict):
            return {
                key: REDACTED if key in SENSITIVE_KEYS else JsonLogger._redact(value)
                for key, value in data.items()
            }
        if isinstance(data, (list, tuple)):
            return [JsonLogger._redact(item) for item in data]
        return data


def get_logger(component: str) -> JsonLogger:
    """Return a :class:`JsonLogger` bound to ``component`` writing to ``stderr``."""

    return JsonLogger(component=component)
