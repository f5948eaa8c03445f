"""Fragments command - show the segmenter's output for a piece of text."""

from __future__ import annotations

import json
from collections.abc import Sequence

import click
from rich.console import Console
from rich.table import Table

from pdf_hebrew.cli.commands._input import read_text_argument
from pdf_hebrew.exceptions import ConfigError
from pdf_hebrew.text import segment_to_fragments

console = Console()


@click.command()
@click.argument("text")
@click.option("--size", type=float, help="Font size (config default if omitted)")
@click.option("--style", "styles", multiple=True, help="Style tag (repeatable): bold, italic")
@click.option("--rtl-font", help="Font for Hebrew runs")
@click.option("--ltr-font", help="Font for other text")
@click.option("--json", "as_json", is_flag=True, help="Print fragments as JSON")
@click.pass_context
def fragments(
    ctx: click.Context,
    text: str,
    size: float | None,
    styles: Sequence[str],
    rtl_font: str | None,
    ltr_font: str | None,
    as_json: bool,
) -> None:
    """Print the fragments TEXT is split into, in placement order.

    TEXT: Input text, or "-" to read from stdin.
    """
    try:
        config = ctx.obj["config"].with_overrides(
            font_size=size, rtl_font=rtl_font, ltr_font=ltr_font
        )
    except ConfigError as e:
        raise click.UsageError(str(e)) from e

    result = segment_to_fragments(
        read_text_argument(text),
        config.font_size,
        styles or None,
        config.rtl_font,
        config.ltr_font,
        config=config,
    )

    if as_json:
        click.echo(json.dumps([f.to_dict() for f in result], ensure_ascii=False, indent=2))
        return

    table = Table(title=f"{len(result)} fragments")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Text", style="cyan")
    table.add_column("Font", style="green")
    table.add_column("Size", style="yellow")
    table.add_column("Dir", style="magenta")
    table.add_column("Styles", style="dim")

    for idx, fragment in enumerate(result):
        table.add_row(
            str(idx),
            repr(fragment.text),
            fragment.font or "",
            f"{fragment.size:g}" if fragment.size is not None else "",
            fragment.direction or "",
            ",".join(fragment.styles),
        )
    console.print(table)
