import base64
import json
import os
import sys
import time
import traceback
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Iterable, Optional, TextIO

LEVELS = {"debug": 10, "info": 20, "warn": 30, "warning": 30, "error": 40}
_REDACT_KEYS = {"api_key", "llm_api_key", "authorization", "password", "secret", "token", "access_token"}


def _safe_default(o: Any) -> Any:
    """Fallback serializer for non-JSON-serializable types."""
    if isinstance(o, Enum):
        return o.value
    if isinstance(o, (datetime, date)):
        return o.isoformat()
    if isinstance(o, (bytes, bytearray)):
        try:
            return o.decode("utf-8")
        except UnicodeDecodeError:
            return {"__b64__": base64.b64encode(bytes(o)).decode("ascii")}
    if isinstance(o, (set, frozenset)):
        return list(o)
    if isinstance(o, Exception):
        return {"type": o.__class__.__name__, "message": str(o)}
    return str(o)


def _scrub(obj: Any, redact_keys: Iterable[str]) -> Any:
    """Recursively scrub sensitive fields by key name (case-insensitive)."""
    if isinstance(obj, dict):
        out: Dict[str, Any] = {}
        for k, v in obj.items():
            if isinstance(k, str) and k.lower() in redact_keys:
                out[k] = "[REDACTED]"
            else:
                out[k] = _scrub(v, redact_keys)
        return out
    if isinstance(obj, (list, tuple)):
        return [_scrub(v, redact_keys) for v in obj]
    return obj


class JsonLogger:
    """Event logger writing one JSON object per line.

    Call sites pass a dotted event name plus keyword fields, e.g.
    ``logger.info("summarize.fallback_used", reason="no_api_key")``.
    """

    def __init__(self, level: str = "info", service: str = "docsum", stream: Optional[TextIO] = None) -> None:
        self.level = LEVELS.get(level.lower(), 20)
        self.service = service
        self._stream = stream
        self._pid = os.getpid()

    def set_level(self, level: str) -> None:
        self.level = LEVELS.get(level.lower(), 20)

    def _emit(self, level_name: str, event: str, **fields: Any) -> None:
        if LEVELS.get(level_name, 20) < self.level:
            return
        rec: Dict[str, Any] = {
            "ts": int(time.time() * 1000),
            "event": event,
            "level": level_name.upper(),
            "svc": self.service,
            "pid": self._pid,
        }
        rec.update(fields)
        rec = _scrub(rec, _REDACT_KEYS)

        # Resolved per call so test capture of sys.stdout sees the output
        stream = self._stream or sys.stdout
        try:
            stream.write(json.dumps(rec, default=_safe_default, ensure_ascii=False) + "\n")
            stream.flush()
        except (TypeError, ValueError, OSError) as e:
            fallback = {
                "ts": rec.get("ts"),
                "event": "logger.error",
                "level": "ERROR",
                "orig_event": event,
                "error": str(e),
            }
            stream.write(json.dumps(fallback, default=str) + "\n")
            stream.flush()

    def debug(self, event: str, **fields: Any) -> None:
        self._emit("debug", event, **fields)

    def info(self, event: str, **fields: Any) -> None:
        self._emit("info", event, **fields)

    def warn(self, event: str, **fields: Any) -> None:
        self._emit("warn", event, **fields)

    # compatibility with std logging API
    def warning(self, event: str, **fields: Any) -> None:
        self._emit("warn", event, **fields)

    def error(self, event: str, **fields: Any) -> None:
        self._emit("error", event, **fields)

    def exception(self, event: str, **fields: Any) -> None:
        """Log at error level with the active traceback folded onto one line."""
        tb = traceback.format_exc()
        fields.setdefault("traceback", " | ".join(line.strip() for line in tb.splitlines() if line.strip()))
        self._emit("error", event, **fields)


logger = JsonLogger(os.environ.get("LOG_LEVEL", "info"))
__all__ = ["logger", "JsonLogger", "LEVELS"]
