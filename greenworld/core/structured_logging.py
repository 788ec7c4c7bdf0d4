"""Structured logging helpers (PII-safe)."""

import logging
from typing import Any


LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

# Keys build_log_context may set; rendered after the message when present
CONTEXT_FIELDS = ("request_id", "method", "route", "status_code", "duration_ms", "user_id", "role")


class ContextFormatter(logging.Formatter):
    """Appends `key=value` pairs for context passed through `extra=`."""

    def formatMessage(self, record: logging.LogRecord) -> str:
        line = super().formatMessage(record)
        pairs = [
            f"{field}={getattr(record, field)}"
            for field in CONTEXT_FIELDS
            if getattr(record, field, None) is not None
        ]
        if not pairs:
            return line
        return f"{line} {' '.join(pairs)}"


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once for the API process."""
    handler = logging.StreamHandler()
    handler.setFormatter(ContextFormatter(LOG_FORMAT))
    logging.basicConfig(level=level.upper(), handlers=[handler])


def build_log_context(
    *,
    user_id: int | None = None,
    role: str | None = None,
    request_id: str | None = None,
    route: str | None = None,
    method: str | None = None,
    status_code: int | None = None,
    duration_ms: int | None = None,
) -> dict[str, Any]:
    """Return a log context dict. Never includes emails or names."""
    context: dict[str, Any] = {}
    if user_id is not None:
        context["user_id"] = user_id
    if role:
        context["role"] = role
    if request_id:
        context["request_id"] = request_id
    if route:
        context["route"] = route
    if method:
        context["method"] = method
    if status_code is not None:
        context["status_code"] = status_code
    if duration_ms is not None:
        context["duration_ms"] = duration_ms
    return context
