"""Render command - draw a directional text box into a PDF."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import click
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen.canvas import Canvas
from rich.console import Console

from pdf_hebrew.cli.commands._input import read_text_argument
from pdf_hebrew.config import FIT_STRATEGIES
from pdf_hebrew.exceptions import HebrewPDFError
from pdf_hebrew.fonts import FontRegistry
from pdf_hebrew.render import BoxOptions, Direction, Overflow, ReportLabRenderer, render_directional_box
from pdf_hebrew.text import contains_rtl

console = Console()


def _parse_font_specs(specs: Sequence[str]) -> dict[str, Path]:
    fonts: dict[str, Path] = {}
    for spec in specs:
        name, sep, path = spec.partition("=")
        if not sep or not name or not path:
            raise click.BadParameter(f"expected NAME=PATH, got {spec!r}", param_hint="--font")
        fonts[name.strip()] = Path(path.strip())
    return fonts


@click.command()
@click.argument("text")
@click.option("--output", "-o", type=click.Path(path_type=Path), required=True, help="Output PDF file")
@click.option("--at", nargs=2, type=float, default=(50.0, 780.0), show_default=True, help="Top-left corner X Y")
@click.option("--width", type=float, default=300.0, show_default=True, help="Box width")
@click.option("--height", type=float, default=100.0, show_default=True, help="Box height")
@click.option("--size", type=float, help="Font size (config default if omitted)")
@click.option("--style", "styles", multiple=True, help="Style tag (repeatable): bold, italic")
@click.option("--rtl-font", help="Font for Hebrew runs")
@click.option("--ltr-font", help="Font for other text")
@click.option("--font", "font_specs", multiple=True, metavar="NAME=PATH", help="Register a TTF font (repeatable)")
@click.option(
    "--direction",
    type=click.Choice([d.value for d in Direction]),
    default=Direction.AUTO.value,
    show_default=True,
)
@click.option("--rotate", "rotation", type=float, default=0.0, help="Rotation in degrees")
@click.option("--character-spacing", type=float, default=0.0, help="Extra space per character")
@click.option("--leading", type=float, default=0.0, help="Extra space between lines")
@click.option(
    "--overflow",
    type=click.Choice([o.value for o in Overflow]),
    default=Overflow.TRUNCATE.value,
    show_default=True,
)
@click.option("--min-font-size", type=float, help="Smallest size for shrink_to_fit")
@click.option("--strategy", type=click.Choice(FIT_STRATEGIES), help="Fit strategy for shrink_to_fit")
@click.option("--border", is_flag=True, help="Stroke the box outline")
@click.pass_context
def render(
    ctx: click.Context,
    text: str,
    output: Path,
    at: tuple[float, float],
    width: float,
    height: float,
    size: float | None,
    styles: Sequence[str],
    rtl_font: str | None,
    ltr_font: str | None,
    font_specs: Sequence[str],
    direction: str,
    rotation: float,
    character_spacing: float,
    leading: float,
    overflow: str,
    min_font_size: float | None,
    strategy: str | None,
    border: bool,
) -> None:
    """Render TEXT into a box on an A4 page.

    TEXT: Input text, or "-" to read from stdin.
    """
    config = ctx.obj["config"]
    content = read_text_argument(text)

    options = BoxOptions(
        at=at,
        width=width,
        height=height,
        size=size,
        style=styles,
        rtl_font=rtl_font,
        ltr_font=ltr_font,
        direction=Direction(direction),
        rotation=rotation,
        character_spacing=character_spacing,
        leading=leading,
        overflow=Overflow(overflow),
        min_font_size=min_font_size,
        strategy=strategy,
    ).resolve(config)

    canvas = Canvas(str(output), pagesize=A4)
    try:
        registry = FontRegistry(_parse_font_specs(font_specs))
        host = ReportLabRenderer(canvas, registry=registry, config=config)
        registry.register(options.ltr_font)
        if contains_rtl(content) or options.direction == Direction.RTL:
            registry.register(options.rtl_font)
        result = render_directional_box(content, options, host=host, config=config)
    except HebrewPDFError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1) from e

    if border:
        x, y = options.at
        canvas.rect(x, y - height, width, height)
    canvas.showPage()
    canvas.save()

    size_note = f"{result.size:g}" if result.size is not None else "host-chosen"
    console.print(f"[green]Wrote[/green] {output} [dim](size {size_note}, {result.strategy})[/dim]")
