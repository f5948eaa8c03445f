"""CLI commands for pdf-hebrew."""

from pdf_hebrew.cli.commands.fonts import fonts
from pdf_hebrew.cli.commands.fragments import fragments
from pdf_hebrew.cli.commands.render import render
from pdf_hebrew.cli.commands.sanitize import sanitize

__all__ = ["render", "fragments", "sanitize", "fonts"]
