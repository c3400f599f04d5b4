"""Main entry point for the etfpulse command line interface."""

from __future__ import annotations

from pathlib import Path

import typer

from etfpulse.core.logging import configure_logging

from .formatters import create_formatter
from .quote import register as register_quote_command


def create_app() -> typer.Typer:
    """Create a Typer application instance for etfpulse."""

    app = typer.Typer(add_completion=False, help="etfpulse command line interface")

    @app.callback()
    def main(
        ctx: typer.Context,
        format: str = typer.Option(
            "table",
            "--format",
            "-f",
            help="Output format (table or jsonl).",
            show_default=True,
        ),
        output: Path | None = typer.Option(
            None,
            "--output",
            "-o",
            help="Write output to a file instead of stdout.",
        ),
        log_level: str = typer.Option(
            "WARNING",
            "--log-level",
            help="Logging level for structured logs on stderr.",
            show_default=True,
        ),
        no_color: bool = typer.Option(
            False,
            "--no-color",
            help="Disable colorized output for table format.",
        ),
    ) -> None:
        ctx.ensure_object(dict)
        normalized_format = format.strip().lower()
        try:
            create_formatter(normalized_format, no_color=no_color)
        except ValueError as exc:
            raise typer.BadParameter(str(exc), param_hint="--format") from exc

        ctx.obj.update(
            {
                "format": normalized_format,
                "output_path": output,
                "log_level": log_level.upper(),
                "no_color": no_color,
            }
        )
        configure_logging(log_level.upper())

    register_quote_command(app)
    return app


app = create_app()
