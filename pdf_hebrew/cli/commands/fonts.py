"""Fonts command - font file utilities."""

from __future__ import annotations

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from pdf_hebrew.exceptions import FontNotFoundError
from pdf_hebrew.fonts import FontRegistry, hebrew_coverage

console = Console()


@click.group()
def fonts() -> None:
    """Font management commands."""
    pass


@fonts.command("check")
@click.argument("font_files", nargs=-1, required=True, type=click.Path(exists=True, path_type=Path))
def check_fonts(font_files: tuple[Path, ...]) -> None:
    """Report how much of the Hebrew alphabet each font file covers."""
    table = Table(title="Hebrew coverage")
    table.add_column("Font", style="cyan")
    table.add_column("Coverage", style="yellow", justify="right")
    table.add_column("Usable", style="green")

    failed = False
    for font_file in font_files:
        try:
            coverage = hebrew_coverage(font_file)
        except FontNotFoundError as e:
            table.add_row(str(font_file), "-", f"[red]{e.reason}[/red]")
            failed = True
            continue
        usable = "[green]yes[/green]" if coverage >= 1.0 else "[red]no[/red]"
        table.add_row(str(font_file), f"{coverage:.0%}", usable)

    console.print(table)
    if failed:
        raise SystemExit(1)


@fonts.command("dirs")
def list_dirs() -> None:
    """List the font directories searched on this platform."""
    dirs = FontRegistry._font_dirs()
    if not dirs:
        console.print("[yellow]No font directories found[/yellow]")
        return
    for directory in dirs:
        console.print(str(directory))


@fonts.command("find")
@click.argument("name")
def find_font(name: str) -> None:
    """Find a TrueType file for a font name."""
    registry = FontRegistry()
    with console.status(f"[bold green]Searching for '{name}'..."):
        try:
            font_path = registry.find_font_file(name)
        except FontNotFoundError as e:
            console.print(f"[red]Not found:[/red] {e}")
            raise SystemExit(1) from e
    console.print(f"[green]Found:[/green] {font_path}")
