"""Quote command: print reconciled ETF valuations."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Sequence
from pathlib import Path

import typer

from etfpulse import get_valuations_async
from etfpulse.core.exceptions import EtfPulseError, InvalidRequestError
from etfpulse.core.logging import log_context
from etfpulse.core.models import ValuationResult
from etfpulse.core.services.valuation import parse_codes

from .utils import emit_error, exit_code_for, open_output

ValuationRunner = Callable[[Sequence[str]], Awaitable[ValuationResult]]

DEFAULT_COLUMNS = [
    "code",
    "name",
    "nav",
    "navDate",
    "price",
    "priceFrom",
    "premiumPct",
    "premiumFrom",
    "diff",
    "priceChgPct",
    "volume",
    "note",
]


def register(app: typer.Typer) -> None:
    """Register the quote command on the provided application."""

    app.command("quote")(quote_command)


def get_valuation_runner() -> ValuationRunner:
    """Factory hook for obtaining the coroutine that fetches valuations."""

    return get_valuations_async


def quote_command(
    ctx: typer.Context,
    codes: list[str] | None = typer.Argument(
        None,
        metavar="CODES...",
        help="Fund codes, space or comma separated (e.g. 0050,00878).",
    ),
    codes_from: Path | None = typer.Option(
        None,
        "--codes-from",
        help="Read newline-delimited fund codes from a file.",
    ),
) -> None:
    """Fetch NAV, price and premium/discount for the given fund codes."""

    runner = get_valuation_runner()
    try:
        collected = parse_codes([*(codes or []), *_read_codes_file(codes_from)])
        if not collected:
            raise InvalidRequestError("No fund codes supplied.")
        with log_context(command="quote"):
            result = asyncio.run(runner(collected))
        rows = [record.to_payload() for record in result.items]
        with open_output(ctx) as (formatter, stream):
            formatter.render(rows, stream=stream, columns=DEFAULT_COLUMNS)
    except EtfPulseError as error:
        emit_error(error)
        raise typer.Exit(code=exit_code_for(error)) from error


def _read_codes_file(path: Path | None) -> list[str]:
    if path is None:
        return []
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise InvalidRequestError(
            f"Codes file '{path}' could not be read: {exc.strerror or exc}",
            details={"path": str(path)},
        ) from exc
    return [line.strip() for line in text.splitlines() if line.strip()]
