"""Tests for log context rendering."""
import logging

from greenworld.core.structured_logging import LOG_FORMAT, ContextFormatter, build_log_context


def _record(msg: str, **extra) -> logging.LogRecord:
    return logging.makeLogRecord({"name": "greenworld.main", "levelname": "INFO", "msg": msg, **extra})


def test_context_is_rendered_after_message():
    context = build_log_context(
        request_id="abc123", route="/api/ping", method="GET", status_code=200, duration_ms=3
    )

    line = ContextFormatter(LOG_FORMAT).format(_record("request completed", **context))

    assert line.endswith(
        "request completed request_id=abc123 method=GET route=/api/ping status_code=200 duration_ms=3"
    )


def test_plain_records_are_unchanged():
    formatter = ContextFormatter("%(message)s")
    assert formatter.format(_record("Sentry initialized")) == "Sentry initialized"


def test_context_never_carries_email():
    context = build_log_context(user_id=7, role="ngo")
    assert context == {"user_id": 7, "role": "ngo"}
