"""pdf-hebrew command group."""

from __future__ import annotations

from pathlib import Path

import click
from rich.console import Console

from pdf_hebrew import __version__
from pdf_hebrew.cli.commands import fonts, fragments, render, sanitize
from pdf_hebrew.config import LOG_LEVELS, Config
from pdf_hebrew.exceptions import ConfigError
from pdf_hebrew.log import get_logger, setup_logging

console = Console(stderr=True)
logger = get_logger("cli")


@click.group()
@click.version_option(__version__, prog_name="pdf-hebrew")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML configuration file",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    help="Logging level (overrides the config file)",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None, log_level: str | None) -> None:
    """Render mixed Hebrew/English text into PDF boxes."""
    ctx.ensure_object(dict)
    try:
        config = Config.load(config_path).with_overrides(log_level=log_level)
    except (ConfigError, FileNotFoundError) as e:
        console.print(f"[red]Error loading config:[/red] {e}")
        raise SystemExit(1) from e

    level = config.log_level.upper()
    setup_logging(level)
    logger.debug("Using config: %s", config)
    ctx.obj["config"] = config
    ctx.obj["log_level"] = level


cli.add_command(render)
cli.add_command(fragments)
cli.add_command(sanitize)
cli.add_command(fonts)


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
