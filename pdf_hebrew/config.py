"""Configuration for pdf-hebrew.

Configuration is an explicit value handed to the segmenter, the fit engine
and the renderer. Nothing reads it from module state; callers either build a
:class:`Config` directly or load one from YAML with :meth:`Config.load`.

Example YAML::

    rtl_font: GveretLevinHebrew
    ltr_font: Helvetica
    font_size: 12
    min_font_size: 5
    fit_strategy: auto
    fonts:
      GveretLevinHebrew: /usr/share/fonts/truetype/gveret/GveretLevin.ttf
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any

import yaml

from pdf_hebrew.exceptions import ConfigError

DEFAULT_RTL_FONT = "GveretLevinHebrew"
DEFAULT_LTR_FONT = "Helvetica"

CONFIG_ENV_VAR = "PDF_HEBREW_CONFIG"
LOCAL_CONFIG_NAME = "pdf-hebrew.yaml"

FIT_STRATEGIES = ("auto", "dry_run", "approximate")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _user_config_path() -> Path:
    return Path.home() / ".config" / "pdf-hebrew" / "config.yaml"


@dataclass(frozen=True)
class Config:
    """Rendering defaults shared by the segmenter, fit engine and renderer.

    Attributes:
        rtl_font: Font identifier for Hebrew runs.
        ltr_font: Font identifier for everything else (Latin words,
            punctuation, separators, line breaks).
        font_size: Default font size when a call does not give one.
        min_font_size: Smallest size shrink-to-fit may choose.
        size_step: Decrement between candidate sizes.
        line_height_factor: Line height as a multiple of the font size.
        fit_margin: Share of the box the approximate strategy may fill.
        fit_strategy: "auto", "dry_run" or "approximate".
        fonts: Font identifier to TTF path, registered by the renderer.
        log_level: Level for the package logger.
    """

    rtl_font: str = DEFAULT_RTL_FONT
    ltr_font: str = DEFAULT_LTR_FONT
    font_size: float = 12.0
    min_font_size: float = 5.0
    size_step: float = 0.5
    line_height_factor: float = 1.2
    fit_margin: float = 0.95
    fit_strategy: str = "auto"
    fonts: dict[str, str] = field(default_factory=dict)
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        _validate(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Config:
        """Build a Config from a mapping, checking keys and value types.

        Raises:
            ConfigError: On unknown keys or values of the wrong type.
        """
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigError(
                f"config: expected mapping, got {type(data).__name__}"
            )

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"unknown config key(s): {', '.join(unknown)}")

        values: dict[str, Any] = {}
        for key, value in data.items():
            values[key] = _coerce(key, value)
        return cls(**values)

    @classmethod
    def load(cls, path: str | Path | None = None) -> Config:
        """Load configuration from YAML.

        Without an explicit path the first existing file among
        ``$PDF_HEBREW_CONFIG``, ``./pdf-hebrew.yaml`` and
        ``~/.config/pdf-hebrew/config.yaml`` is used. When none exists the
        defaults are returned.

        Args:
            path: Explicit config file. Must exist when given.

        Raises:
            FileNotFoundError: If an explicit path does not exist.
            ConfigError: If the file is not valid YAML or has bad values.
        """
        if path is not None:
            config_path = Path(path)
            if not config_path.exists():
                raise FileNotFoundError(f"Config file not found: {config_path}")
        else:
            config_path = _discover()
            if config_path is None:
                return cls()

        try:
            data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML syntax in {config_path}: {e}") from e

        return cls.from_dict(data)

    def with_overrides(self, **overrides: Any) -> Config:
        """Return a copy with the given non-None values replaced."""
        changes = {k: _coerce(k, v) for k, v in overrides.items() if v is not None}
        return replace(self, **changes) if changes else self


def _discover() -> Path | None:
    env_path = os.environ.get(CONFIG_ENV_VAR)
    candidates = []
    if env_path:
        candidates.append(Path(env_path))
    candidates.append(Path.cwd() / LOCAL_CONFIG_NAME)
    candidates.append(_user_config_path())
    for candidate in candidates:
        if candidate.is_file():
            return candidate
    return None


_NUMBER_KEYS = (
    "font_size",
    "min_font_size",
    "size_step",
    "line_height_factor",
    "fit_margin",
)
_STRING_KEYS = ("rtl_font", "ltr_font", "fit_strategy", "log_level")


def _coerce(key: str, value: Any) -> Any:
    if key in _NUMBER_KEYS:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ConfigError(f"{key}: expected number, got {type(value).__name__}")
        return float(value)
    if key in _STRING_KEYS:
        if not isinstance(value, str):
            raise ConfigError(f"{key}: expected string, got {type(value).__name__}")
        return value
    if key == "fonts":
        if not isinstance(value, dict):
            raise ConfigError(f"fonts: expected mapping, got {type(value).__name__}")
        fonts: dict[str, str] = {}
        for name, font_path in value.items():
            if not isinstance(font_path, (str, Path)):
                raise ConfigError(
                    f"fonts.{name}: expected path string, got {type(font_path).__name__}"
                )
            fonts[str(name)] = str(font_path)
        return fonts
    return value


def _validate(config: Config) -> None:
    if config.font_size <= 0:
        raise ConfigError("font_size: must be positive")
    if config.min_font_size <= 0:
        raise ConfigError("min_font_size: must be positive")
    if config.size_step <= 0:
        raise ConfigError("size_step: must be positive")
    if config.line_height_factor <= 0:
        raise ConfigError("line_height_factor: must be positive")
    if not 0 < config.fit_margin <= 1:
        raise ConfigError("fit_margin: must be in (0, 1]")
    if config.fit_strategy not in FIT_STRATEGIES:
        raise ConfigError(
            f"fit_strategy: must be one of {', '.join(FIT_STRATEGIES)}, "
            f"got {config.fit_strategy!r}"
        )
    if config.log_level.upper() not in LOG_LEVELS:
        raise ConfigError(f"log_level: unknown level {config.log_level!r}")
