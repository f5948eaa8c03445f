"""Sanitize command - print text after character normalization."""

from __future__ import annotations

import click

from pdf_hebrew.cli.commands._input import read_text_argument
from pdf_hebrew.text import sanitize_text


@click.command()
@click.argument("text")
def sanitize(text: str) -> None:
    """Print TEXT with unsupported characters removed or replaced.

    TEXT: Input text, or "-" to read from stdin.
    """
    click.echo(sanitize_text(read_text_argument(text)), nl=False)
    click.echo()
