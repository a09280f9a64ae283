"""Input validation helpers for CLI runs."""

from __future__ import annotations

from pathlib import Path


def validate_input_dir(input_dir: str) -> Path:
    """Ensure the source photo directory exists and return it."""
    path = Path(input_dir)
    if not path.is_dir():
        msg = f"Input directory not found: {input_dir}"
        raise FileNotFoundError(msg)
    return path


def validate_layout_file(layout_path: str) -> Path:
    """Ensure a layout file exists and has a supported extension."""
    path = Path(layout_path)
    if not path.is_file():
        msg = f"Layout file not found: {layout_path}"
        raise FileNotFoundError(msg)
    if path.suffix.lower() not in (".toml", ".json"):
        msg = f"Layout file must be .toml or .json, got {path.suffix!r}"
        raise ValueError(msg)
    return path
