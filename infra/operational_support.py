"""
Support tooling for batch runs: a per-run trace id carried in a ContextVar,
a log filter that stamps it on every record, and a JSONL event log whose
payloads are scrubbed of credentials, e-mail addresses and bill rates.
"""
from __future__ import annotations

import json
import logging
import os
import re
import sys
import traceback
import uuid
from contextlib import contextmanager, suppress
from contextvars import ContextVar
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from pathlib import Path
from threading import Lock
from typing import Any, Iterator, Mapping

from infra.path import user_data_dir
from infra.version import get_app_version

logger = logging.getLogger(__name__)

REDACTED = "<redacted>"
REDACTED_EMAIL = "<redacted-email>"
EVENTS_FILE_NAME = "support-events.jsonl"
MAX_REDACT_DEPTH = 8

_TRACE_ID_CTX: ContextVar[str | None] = ContextVar("pw_trace_id", default=None)

# Matched against normalized (lower, snake) keys as substrings.
_SENSITIVE_KEYS = ("password", "token", "secret", "api_key", "authorization", "bill_rate", "rate_override")

_EMAIL = re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b")
_SECRET_PAIR = re.compile(r"(?i)\b(password|token|secret|api[_-]?key)\b\s*[:=]\s*([^\s,;]+)")
_BEARER = re.compile(r"(?i)\bbearer\s+[A-Za-z0-9._\-~=+/]+")


# ------------------------------------------------------------------
# Trace ids
# ------------------------------------------------------------------

def create_trace_id(prefix: str = "run") -> str:
    stamp = datetime.now(timezone.utc).strftime("%Y%m%d%H%M%S")
    return f"{prefix}-{stamp}-{uuid.uuid4().hex[:8]}"


def current_trace_id() -> str | None:
    value = (_TRACE_ID_CTX.get() or "").strip()
    return value or None


@contextmanager
def bind_trace_id(trace_id: str | None) -> Iterator[str]:
    """Bind ``trace_id`` (or a fresh one) for the duration of a batch."""
    bound = (trace_id or "").strip() or create_trace_id()
    token = _TRACE_ID_CTX.set(bound)
    try:
        yield bound
    finally:
        _TRACE_ID_CTX.reset(token)


class TraceIdLogFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.trace_id = current_trace_id() or "-"
        return True


# ------------------------------------------------------------------
# Redaction
# ------------------------------------------------------------------

def _is_sensitive_key(key: str) -> bool:
    normalized = key.strip().lower().replace("-", "_")
    return any(part in normalized for part in _SENSITIVE_KEYS)


def redact_text(value: str) -> str:
    text = _EMAIL.sub(REDACTED_EMAIL, str(value or ""))
    text = _SECRET_PAIR.sub(lambda m: f"{m.group(1)}={REDACTED}", text)
    return _BEARER.sub(f"Bearer {REDACTED}", text)


def redact_value(value: Any, *, _depth: int = 0) -> Any:
    """JSON-safe copy of ``value`` with sensitive keys and text scrubbed."""
    if _depth >= MAX_REDACT_DEPTH:
        return "<max-depth>"
    if value is None or isinstance(value, (bool, int, float)):
        return value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Mapping):
        return {
            str(k): REDACTED if _is_sensitive_key(str(k)) else redact_value(v, _depth=_depth + 1)
            for k, v in value.items()
        }
    if isinstance(value, (list, tuple)):
        return [redact_value(item, _depth=_depth + 1) for item in value]
    return redact_text(str(value))


# ------------------------------------------------------------------
# Event log
# ------------------------------------------------------------------

@dataclass(frozen=True)
class SupportEvent:
    event_type: str
    message: str
    trace_id: str
    level: str = "INFO"
    data: Mapping[str, Any] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "timestamp_utc": datetime.now(timezone.utc).isoformat(),
            "event_type": self.event_type,
            "level": self.level,
            "trace_id": self.trace_id,
            "message": redact_text(self.message),
            "app_version": get_app_version(),
            "pid": os.getpid(),
        }
        if self.data:
            payload["data"] = redact_value(dict(self.data))
        return payload


class OperationalSupport:
    """Append-only JSONL log of support events for export runs."""

    def __init__(self, events_path: str | Path | None = None) -> None:
        self._events_path = Path(events_path or user_data_dir() / "logs" / EVENTS_FILE_NAME)
        self._events_path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = Lock()

    @property
    def events_path(self) -> Path:
        return self._events_path

    def emit_event(
        self,
        *,
        event_type: str,
        message: str,
        level: str = "INFO",
        trace_id: str | None = None,
        data: Mapping[str, Any] | None = None,
    ) -> str:
        """Write one event; returns the trace id it was filed under."""
        event = SupportEvent(
            event_type=(event_type or "").strip() or "support.event",
            message=message or "",
            trace_id=(trace_id or current_trace_id() or create_trace_id()).strip(),
            level=(level or "INFO").strip().upper(),
            data=data or {},
        )
        line = json.dumps(event.as_dict(), ensure_ascii=True, sort_keys=True)
        with self._lock, self._events_path.open("a", encoding="utf-8") as handle:
            handle.write(line + "\n")
        return event.trace_id

    def capture_exception(
        self,
        *,
        exc_type: type[BaseException],
        exc_value: BaseException,
        exc_traceback: Any,
        context: str,
        trace_id: str | None = None,
    ) -> str:
        return self.emit_event(
            event_type="app.crash",
            level="ERROR",
            trace_id=trace_id,
            message=f"Unhandled exception in {context}: {exc_value}",
            data={
                "context": context,
                "exception_type": getattr(exc_type, "__name__", str(exc_type)),
                "stacktrace": "".join(traceback.format_exception(exc_type, exc_value, exc_traceback)),
            },
        )

    def _iter_events(self) -> Iterator[dict[str, Any]]:
        if not self._events_path.exists():
            return
        with self._events_path.open(encoding="utf-8", errors="ignore") as handle:
            for line in handle:
                if not line.strip():
                    continue
                try:
                    payload = json.loads(line)
                except json.JSONDecodeError:
                    logger.warning("Skipping unreadable support event line in %s", self._events_path)
                    continue
                if isinstance(payload, dict):
                    yield payload

    def read_events(
        self,
        *,
        trace_id: str | None = None,
        event_type: str | None = None,
    ) -> list[dict[str, Any]]:
        wanted_trace = (trace_id or "").strip()
        return [
            payload
            for payload in self._iter_events()
            if (not wanted_trace or payload.get("trace_id") == wanted_trace)
            and (not event_type or payload.get("event_type") == event_type)
        ]


_GLOBAL_SUPPORT: OperationalSupport | None = None
_HOOKS_INSTALLED = False


def get_operational_support() -> OperationalSupport:
    global _GLOBAL_SUPPORT
    if _GLOBAL_SUPPORT is None:
        _GLOBAL_SUPPORT = OperationalSupport()
    return _GLOBAL_SUPPORT


def install_global_exception_hooks(support: OperationalSupport | None = None) -> None:
    """Record uncaught exceptions from the CLI as crash events."""
    global _HOOKS_INSTALLED
    if _HOOKS_INSTALLED:
        return

    recorder = support or get_operational_support()
    previous_hook = sys.excepthook

    def _hook(exc_type: type[BaseException], exc_value: BaseException, exc_tb: Any) -> None:
        with suppress(OSError):
            recorder.capture_exception(
                exc_type=exc_type,
                exc_value=exc_value,
                exc_traceback=exc_tb,
                context="cli",
            )
        previous_hook(exc_type, exc_value, exc_tb)

    sys.excepthook = _hook
    _HOOKS_INSTALLED = True


__all__ = [
    "EVENTS_FILE_NAME",
    "OperationalSupport",
    "REDACTED",
    "REDACTED_EMAIL",
    "SupportEvent",
    "TraceIdLogFilter",
    "bind_trace_id",
    "create_trace_id",
    "current_trace_id",
    "get_operational_support",
    "install_global_exception_hooks",
    "redact_text",
    "redact_value",
]
