"""TOML configuration loader and the immutable per-scan configuration."""

from __future__ import annotations

import tomllib
from enum import StrEnum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from imagedetector.errors import ConfigError

DEFAULT_CONFIG_PATHS = [
    Path("image-detector.toml"),
    Path.home() / ".config" / "image-detector" / "config.toml",
]

DEFAULT_EXCLUDES = [
    "**/.git/**",
    "**/node_modules/**",
    "**/vendor/**",
]


class OutputFormat(StrEnum):
    JSON = "json"
    TEXT = "text"
    GITHUB = "github"


class ScanConfig(BaseModel):
    """Everything one scan needs. Read-only once built."""

    model_config = ConfigDict(frozen=True)

    root_path: str
    exclude_patterns: tuple[str, ...] = ()
    detectors: tuple[Any, ...] = ()

    @field_validator("detectors")
    @classmethod
    def _check_detectors(cls, value: tuple[Any, ...]) -> tuple[Any, ...]:
        from imagedetector.detectors.base import Detector

        for detector in value:
            if not isinstance(detector, Detector):
                raise ValueError(f"{detector!r} does not implement the Detector protocol")
        return value


class Settings(BaseModel):
    """User-facing settings, read from TOML and overridden by CLI flags."""

    check_directory: str = Field(default=".", description="Directory to check for files")
    exclude: list[str] = Field(
        default_factory=lambda: list(DEFAULT_EXCLUDES),
        description="Glob patterns of files to exclude from detection",
    )
    detectors: list[str] = Field(
        default_factory=lambda: ["generic"],
        description="Detectors to consult, in order; the generic fallback always runs last",
    )
    verbose: bool = Field(default=False, description="Enable debug logging")
    format: OutputFormat = Field(default=OutputFormat.JSON, description="Output format")
    output: str | None = Field(default=None, description="Output file path")

    def to_scan_config(self) -> ScanConfig:
        from imagedetector.detectors import FALLBACK_DETECTOR, DETECTOR_CLASSES, get_detector

        names = [n for n in self.detectors if n != FALLBACK_DETECTOR] + [FALLBACK_DETECTOR]
        unknown = [n for n in names if n not in DETECTOR_CLASSES]
        if unknown:
            raise ConfigError(
                f"unknown detector(s): {', '.join(unknown)} "
                f"(available: {', '.join(DETECTOR_CLASSES)})"
            )

        return ScanConfig(
            root_path=self.check_directory,
            exclude_patterns=tuple(self.exclude),
            detectors=tuple(get_detector(n) for n in dict.fromkeys(names)),
        )


def load_config(config_path: Path | None = None) -> Settings:
    """Load settings from TOML file, falling back to defaults."""
    if config_path is not None:
        if not config_path.is_file():
            raise ConfigError(f"config file {str(config_path)!r} not found", path=str(config_path))
        return _parse_toml(config_path)

    for path in DEFAULT_CONFIG_PATHS:
        if path.is_file():
            return _parse_toml(path)

    return Settings()


def _parse_toml(path: Path) -> Settings:
    try:
        data = tomllib.loads(path.read_text())
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"error reading config file {str(path)!r}: {e}", path=str(path)) from e

    scan_data = data.get("scan", {})
    try:
        return Settings(**scan_data)
    except ValidationError as e:
        raise ConfigError(f"invalid config file {str(path)!r}: {e}", path=str(path)) from e
