"""
Configuration schema and loader for the portfolio builder.

Defines Pydantic models representing structured configuration sections
and a TOML-based config loader with validation support. Every value that
shapes generated output (widths, quality, container width) lives here so
several galleries with different presentation settings can coexist in
one process.
"""

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import tomlkit
from pydantic import BaseModel, Field, PositiveInt, field_validator

from portfolio_builder.config_defaults import (
    DEFAULT_COLUMNS,
    DEFAULT_CONTAINER_WIDTH,
    DEFAULT_FORCE,
    DEFAULT_FORMAT,
    DEFAULT_GAP,
    DEFAULT_GENERATE_THUMBNAILS,
    DEFAULT_INPUT_DIR,
    DEFAULT_LAYOUT_MODE,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_PROGRESS,
    DEFAULT_QUALITY,
    DEFAULT_ROW_HEIGHT,
    DEFAULT_STOP_ON_ERROR,
    DEFAULT_THUMBNAIL_WIDTH,
    DEFAULT_WIDTHS,
)
from portfolio_builder.constants import (
    FORMAT_EXTENSIONS,
    QUALITY_MAX,
    QUALITY_MIN,
)
from portfolio_builder.type_defs import ImageFormat, LayoutMode


class VariantConfig(BaseModel):
    """Control which variants are generated for every source image."""

    widths: list[PositiveInt] = Field(
        default_factory=lambda: list(DEFAULT_WIDTHS),
        min_length=1,
    )
    thumbnail_width: PositiveInt = DEFAULT_THUMBNAIL_WIDTH
    generate_thumbnails: bool = DEFAULT_GENERATE_THUMBNAILS
    format: ImageFormat = DEFAULT_FORMAT
    quality: int = Field(DEFAULT_QUALITY, ge=QUALITY_MIN, le=QUALITY_MAX)
    force: bool = DEFAULT_FORCE

    @field_validator("widths")
    @classmethod
    def _unique_widths(cls, value: list[int]) -> list[int]:
        if len(set(value)) != len(value):
            msg = f"widths must be unique, got {value}"
            raise ValueError(msg)
        return value

    @property
    def extension(self) -> str:
        """Return the file extension for the configured format."""
        return FORMAT_EXTENSIONS[self.format]


class PackingConfig(BaseModel):
    """Parameters for the automatic layout packing algorithms."""

    mode: LayoutMode = DEFAULT_LAYOUT_MODE
    container_width: PositiveInt = DEFAULT_CONTAINER_WIDTH
    row_height: PositiveInt = DEFAULT_ROW_HEIGHT
    gap: int = Field(DEFAULT_GAP, ge=0)
    columns: PositiveInt = DEFAULT_COLUMNS


class BatchConfig(BaseModel):
    """Control the bounded worker pool used for batch processing."""

    # None means one worker per CPU core.
    workers: PositiveInt | None = None
    stop_on_error: bool = DEFAULT_STOP_ON_ERROR
    progress: bool = DEFAULT_PROGRESS


class PathsConfig(BaseModel):
    """Configure the source photo tree and the processed output root."""

    input_dir: str = Field(DEFAULT_INPUT_DIR)
    output_dir: str = Field(DEFAULT_OUTPUT_DIR)


class PortfolioConfig(BaseModel):
    """
    Root configuration object combining all supported sections.

    Mirrors the structure of config.toml, grouping related parameters
    under logical categories.
    """

    variants: VariantConfig = Field(
        default_factory=lambda: VariantConfig.model_validate({}),
    )
    layout: PackingConfig = Field(
        default_factory=lambda: PackingConfig.model_validate({}),
    )
    batch: BatchConfig = Field(
        default_factory=lambda: BatchConfig.model_validate({}),
    )
    paths: PathsConfig = Field(
        default_factory=lambda: PathsConfig.model_validate({}),
    )


class ConfigLoader:
    """
    Loads and parses a TOML configuration file into a typed config object.

    Falls back to defaults for any missing subsections or fields.
    """

    @staticmethod
    def load(path: str) -> PortfolioConfig:
        """
        Load a portfolio configuration from a TOML file.

        Returns a validated PortfolioConfig instance based on the file
        contents.
        """
        config_path = Path(path)
        if not config_path.is_file():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)

        with config_path.open("r", encoding="utf-8") as f:
            doc = tomlkit.load(f)

        return PortfolioConfig.model_validate(doc.unwrap())


def parse_int_list(s: str | list[int]) -> list[int]:
    """
    Convert a comma-separated string or list of ints into a list of ints.

    Args:
        s: A string like "480,800,1200" or a list of integers.

    Returns:
        A list of integers.

    Raises:
        ValueError: If any element is not an integer.

    """
    if isinstance(s, list):
        return [int(x) for x in s]
    parts = [part.strip() for part in s.split(",") if part.strip()]
    try:
        return [int(part) for part in parts]
    except ValueError as exc:
        msg = f"Expected comma-separated integers, got {s!r}"
        raise ValueError(msg) from exc


# CLI option name -> (config section, field name)
_CLI_FIELD_MAP: dict[str, tuple[str, str]] = {
    "widths": ("variants", "widths"),
    "thumbnail_width": ("variants", "thumbnail_width"),
    "format": ("variants", "format"),
    "quality": ("variants", "quality"),
    "force": ("variants", "force"),
    "workers": ("batch", "workers"),
    "stop_on_error": ("batch", "stop_on_error"),
    "progress": ("batch", "progress"),
    "input": ("paths", "input_dir"),
    "output": ("paths", "output_dir"),
    "mode": ("layout", "mode"),
    "container_width": ("layout", "container_width"),
    "row_height": ("layout", "row_height"),
    "gap": ("layout", "gap"),
    "columns": ("layout", "columns"),
}


def build_config_from_cli(
    args: Mapping[str, Any],
    base_config: PortfolioConfig | None = None,
) -> PortfolioConfig:
    """
    Overlay explicitly supplied CLI values on top of a base config.

    Options that are absent or ``None`` keep the base value. Boolean
    switches only override when set, so a config file can enable a flag
    that the command line leaves untouched.
    """
    base = base_config or PortfolioConfig.model_validate({})
    data = base.model_dump()

    for option, (section, field) in _CLI_FIELD_MAP.items():
        value = args.get(option)
        if value is None or value is False:
            continue
        if option == "widths":
            value = parse_int_list(value)
        data[section][field] = value

    if args.get("no_thumbnails"):
        data["variants"]["generate_thumbnails"] = False

    return PortfolioConfig.model_validate(data)
