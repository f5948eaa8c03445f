"""Exception hierarchy for pdf-hebrew.

The text core (sanitizer, classifier, segmenter, fit engine) never raises for
bad input. These errors belong to the surrounding layers: configuration,
font registration and strategy selection.
"""

from __future__ import annotations


class HebrewPDFError(Exception):
    """Base class for all pdf-hebrew errors."""


class ConfigError(HebrewPDFError):
    """Raised when a configuration file or value is invalid."""


class FontNotFoundError(HebrewPDFError):
    """Raised when a font file or family cannot be located."""

    def __init__(self, font: str, reason: str | None = None) -> None:
        self.font = font
        self.reason = reason
        message = f"Font not found: {font}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class StrategyUnavailableError(HebrewPDFError):
    """Raised when a fit strategy is forced but the host cannot provide it."""
