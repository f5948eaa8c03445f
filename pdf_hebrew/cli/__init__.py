"""Command-line interface for pdf-hebrew."""

from pdf_hebrew.cli.main import cli, main

__all__ = ["cli", "main"]
