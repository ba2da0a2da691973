"""Main entry point for the goldprice command line interface."""

from __future__ import annotations

from pathlib import Path

import typer

from goldprice.core.config import GoldPriceConfig, load_config
from goldprice.core.exceptions import ConfigurationError
from goldprice.core.logging import configure_logging

from .constants import CONFIG_EXIT_CODE
from .formatters import create_formatter
from .prices import register as register_price_commands
from .tools import register as register_tool_commands
from .utils import fail_with


def create_app() -> typer.Typer:
    """Create a Typer application instance for goldprice."""

    app = typer.Typer(add_completion=False, help="Gold price tracker command line interface")

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
        log_level: str | None = typer.Option(
            None,
            "--log-level",
            help="Log level; defaults to the configured level.",
        ),
        no_color: bool = typer.Option(
            False,
            "--no-color",
            help="Disable colorized output for table format.",
        ),
        config_path: Path | None = typer.Option(
            None,
            "--config",
            "-c",
            help="TOML configuration file.",
        ),
    ) -> None:
        ctx.ensure_object(dict)
        normalized_format = format.strip().lower()
        try:
            create_formatter(normalized_format, no_color=no_color)
        except ValueError as exc:
            raise typer.BadParameter(str(exc), param_hint="--format") from exc

        try:
            config = load_config(config_path)
        except ConfigurationError as error:
            fail_with(error, CONFIG_EXIT_CODE)

        ctx.obj.update(
            {
                "format": normalized_format,
                "output_path": output,
                "no_color": no_color,
                "config": config,
            }
        )
        try:
            _configure_logging(config, log_level)
        except ValueError as exc:
            raise typer.BadParameter(str(exc), param_hint="--log-level") from exc

    register_price_commands(app)
    register_tool_commands(app)
    return app


def _configure_logging(config: GoldPriceConfig, level_override: str | None) -> None:
    settings = config.logging
    configure_logging(
        level=(level_override or settings.level).upper(),
        console_output=settings.console_output,
        file_output=settings.file_output,
        file_path=str(settings.file_path) if settings.file_path else None,
    )


app = create_app()
