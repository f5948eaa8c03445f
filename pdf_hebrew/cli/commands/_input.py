"""Shared helpers for reading command input."""

from __future__ import annotations

import click


def read_text_argument(text: str) -> str:
    """Return the argument, or stdin when it is "-"."""
    if text == "-":
        return click.get_text_stream("stdin").read()
    return text
