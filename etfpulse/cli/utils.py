"""Output and error helpers for the quote command."""

from __future__ import annotations

import json
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TextIO

import typer

from etfpulse.core.exceptions import (
    ErrorCode,
    EtfPulseError,
    InvalidRequestError,
    ProviderError,
    format_error_response,
)

from .constants import PROVIDER_EXIT_CODE, SYSTEM_EXIT_CODE, VALIDATION_EXIT_CODE
from .formatters import OutputFormatter, create_formatter


def exit_code_for(error: EtfPulseError) -> int:
    """Map an error to the process exit code."""
    if isinstance(error, InvalidRequestError):
        return VALIDATION_EXIT_CODE
    if isinstance(error, ProviderError):
        return PROVIDER_EXIT_CODE
    return SYSTEM_EXIT_CODE


def emit_error(error: EtfPulseError) -> None:
    """Print ``error`` to stderr in the same shape the HTTP API returns."""
    try:
        code = ErrorCode(error.error_code)
    except ValueError:
        code = ErrorCode.GENERAL_ERROR
    payload = format_error_response(code, message=error.message)
    details = {
        key: value
        for key, value in error.details.items()
        if value is None or isinstance(value, (str, int, float, bool))
    }
    if details:
        payload["details"] = details
    typer.echo(json.dumps(payload, ensure_ascii=False), err=True)


@contextmanager
def open_output(ctx: typer.Context) -> Iterator[tuple[OutputFormatter, TextIO]]:
    """Yield the formatter and stream selected by the global options.

    Raises:
        EtfPulseError: with ``OUTPUT_ERROR`` when the output file cannot be opened.
    """
    options = ctx.find_root().obj or {}
    formatter = create_formatter(str(options.get("format", "table")), no_color=bool(options.get("no_color")))
    path = options.get("output_path")
    if path is None:
        yield formatter, sys.stdout
        return

    try:
        stream = open(path, "w", encoding="utf-8")
    except OSError as exc:
        raise EtfPulseError(
            f"Unable to write output to {path}: {exc.strerror or exc}",
            ErrorCode.OUTPUT_ERROR.value,
            {"path": str(path)},
        ) from exc
    with stream:
        yield formatter, stream


__all__ = ["emit_error", "exit_code_for", "open_output"]
