"""Structured logging utilities with trace propagation."""

from __future__ import annotations

import json
import os
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, IO, Iterator
from uuid import uuid4

from loguru import logger

if TYPE_CHECKING:
    from loguru import Logger

_TRACE_ID_VAR: ContextVar[str | None] = ContextVar("etfpulse_trace_id", default=None)
_CONTEXT_VAR: ContextVar[dict[str, Any]] = ContextVar("etfpulse_log_context", default={})

_RESERVED_KEYS = {"trace_id", "error_code", "source"}


def _ensure_trace_id() -> str:
    trace_id = _TRACE_ID_VAR.get()
    if trace_id is None:
        trace_id = uuid4().hex
        _TRACE_ID_VAR.set(trace_id)
    return trace_id


def _patch_record(record: dict[str, Any]) -> None:
    extra = record.setdefault("extra", {})
    if not extra.get("trace_id"):
        extra["trace_id"] = _ensure_trace_id()

    for key, value in _CONTEXT_VAR.get({}).items():
        if extra.get(key) is None:
            extra[key] = value

    extra.setdefault("source", None)
    extra.setdefault("error_code", None)


def _json_default(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


def _format_payload(record: dict[str, Any]) -> dict[str, Any]:
    extra = record.get("extra", {})
    context = {k: v for k, v in extra.items() if k not in _RESERVED_KEYS}
    level_value = record.get("level")
    level_name = getattr(level_value, "name", None) or "INFO"
    timestamp = record["time"] if "time" in record else datetime.now(UTC)
    payload: dict[str, Any] = {
        "timestamp": timestamp.isoformat(),
        "level": level_name,
        "message": record.get("message"),
        "trace_id": extra.get("trace_id"),
        "error_code": extra.get("error_code"),
        "source": extra.get("source"),
    }
    if context:
        payload["context"] = context
    exception = record.get("exception")
    if exception:
        payload["exception"] = str(exception)
    return payload


class _StreamJsonSink:
    """Sink writing structured JSON payloads to a text stream."""

    def __init__(self, stream: IO[str]) -> None:
        self._stream = stream

    def __call__(self, message: Any) -> None:
        payload = _format_payload(message.record)
        self._stream.write(json.dumps(payload, default=_json_default, ensure_ascii=False))
        self._stream.write("\n")
        self._stream.flush()


class _FileJsonSink:
    """Sink persisting JSON lines to a file path."""

    def __init__(self, path: str) -> None:
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        self._path = path

    def __call__(self, message: Any) -> None:
        payload = _format_payload(message.record)
        with open(self._path, "a", encoding="utf-8") as file:
            file.write(json.dumps(payload, default=_json_default, ensure_ascii=False))
            file.write("\n")


def configure_logging(
    level: str = "INFO",
    *,
    stream: IO[str] | None = None,
    file_path: str | None = None,
) -> None:
    """Route JSON log lines to ``stream`` (stderr by default) and optionally a file.

    The CLI keeps stdout for its own output, so the console sink never uses it.
    """

    level = level.upper()
    handlers: list[dict[str, Any]] = [{"sink": _StreamJsonSink(stream or sys.stderr), "level": level}]
    if file_path:
        handlers.append({"sink": _FileJsonSink(file_path), "level": level})
    logger.configure(handlers=handlers, patcher=_patch_record)


def get_logger(name: str | None = None) -> Logger:
    """Return a logger optionally bound to ``name``."""

    if name:
        return logger.bind(logger_name=name)
    return logger


@contextmanager
def log_context(*, trace_id: str | None = None, **extra: Any) -> Iterator[str]:
    """Context manager that propagates trace ids and additional metadata."""

    previous_context = _CONTEXT_VAR.get({})
    context_token = _CONTEXT_VAR.set({**previous_context, **extra})

    active_trace = trace_id or uuid4().hex
    trace_token = _TRACE_ID_VAR.set(active_trace)

    try:
        yield active_trace
    finally:
        _TRACE_ID_VAR.reset(trace_token)
        _CONTEXT_VAR.reset(context_token)


def current_trace_id() -> str:
    """Return the currently active trace id, generating one if required."""

    return _ensure_trace_id()


configure_logging()


__all__ = [
    "configure_logging",
    "current_trace_id",
    "get_logger",
    "log_context",
    "logger",
]
