"""
Test configuration and shared fixtures for portfolio_builder.

This module defines reusable pytest fixtures for synthetic photo
generation, variant configs, and layout data. These fixtures support
all test modules in the test suite.

Note:
    This file is automatically loaded by pytest and should not be
    renamed.

"""
import io
from collections.abc import Callable
from pathlib import Path
from typing import Any

import numpy as np
import pytest
from PIL import Image

from portfolio_builder.config import VariantConfig
from portfolio_builder.layouts.models import GalleryLayout
from portfolio_builder.logging_utils import logger

_EXIF_ORIENTATION_TAG = 0x0112


def gradient_image(
    width: int,
    height: int,
    *,
    alpha: bool = False,
) -> Image.Image:
    """Build a deterministic gradient so resized variants are not flat."""
    xs = np.linspace(0, 255, width, dtype=np.float32)
    ys = np.linspace(0, 255, height, dtype=np.float32)
    red = np.tile(xs, (height, 1))
    green = np.tile(ys[:, None], (1, width))
    blue = (red + green) / 2
    channels = [red, green, blue]
    if alpha:
        channels.append(np.full((height, width), 128, dtype=np.float32))
    pixels = np.stack(channels, axis=-1).astype(np.uint8)
    return Image.fromarray(pixels)


@pytest.fixture
def make_photo(tmp_path: Path) -> Callable[..., Path]:
    """
    Factory writing synthetic photos to disk.

    Returns:
        Callable taking a name and size, with optional ``orientation``
        (EXIF tag value) and ``alpha`` keywords.

    """

    def _make(
        name: str = "photo.jpg",
        size: tuple[int, int] = (400, 300),
        *,
        orientation: int | None = None,
        alpha: bool = False,
        directory: Path | None = None,
    ) -> Path:
        target_dir = directory or tmp_path / "photos"
        target = target_dir / name
        target.parent.mkdir(parents=True, exist_ok=True)
        img = gradient_image(*size, alpha=alpha)
        params: dict[str, Any] = {}
        if orientation is not None:
            exif = Image.Exif()
            exif[_EXIF_ORIENTATION_TAG] = orientation
            params["exif"] = exif
        img.save(target, **params)
        return target

    return _make


@pytest.fixture
def photo_bytes() -> Callable[..., bytes]:
    """Factory encoding a synthetic JPEG into memory."""

    def _encode(size: tuple[int, int] = (400, 300)) -> bytes:
        buffer = io.BytesIO()
        gradient_image(*size).save(buffer, format="JPEG")
        return buffer.getvalue()

    return _encode


@pytest.fixture
def small_variant_config() -> VariantConfig:
    """Variant config with small widths so tests stay fast."""
    return VariantConfig(widths=[40, 80], thumbnail_width=20)


@pytest.fixture
def make_layout() -> Callable[..., GalleryLayout]:
    """
    Build GalleryLayout instances from compact rectangle tuples.

    Each placement is ``(ref, x1, y1, x2, y2)``.
    """

    def _rects(items: list[tuple[str, int, int, int, int]]) -> list[dict]:
        return [
            {
                "photo_ref": ref,
                "position": {
                    "top_left_x": x1,
                    "top_left_y": y1,
                    "bottom_right_x": x2,
                    "bottom_right_y": y2,
                },
            }
            for ref, x1, y1, x2, y2 in items
        ]

    def _build(
        placements: list[tuple[str, int, int, int, int]],
        *,
        grid_width: int = 12,
        mobile: list[tuple[str, int, int, int, int]] | None = None,
        mobile_grid_width: int | None = None,
    ) -> GalleryLayout:
        data: dict[str, Any] = {
            "grid_width": grid_width,
            "placements": _rects(placements),
        }
        if mobile is not None:
            data["mobile_placements"] = _rects(mobile)
        if mobile_grid_width is not None:
            data["mobile_grid_width"] = mobile_grid_width
        return GalleryLayout.model_validate(data)

    return _build


@pytest.fixture(autouse=True)
def enable_logger_propagation(monkeypatch: pytest.MonkeyPatch) -> None:
    """Allow caplog to capture records from the package logger."""
    monkeypatch.setattr(logger, "propagate", True)
