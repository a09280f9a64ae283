"""Lightweight photo inspection without a full decode."""

from __future__ import annotations

import io
from dataclasses import dataclass
from typing import TYPE_CHECKING

from PIL import Image, UnidentifiedImageError

from portfolio_builder.constants import COMMON_RATIOS, FALLBACK_RATIO
from portfolio_builder.errors import DecodeError, SourceReadError
from portfolio_builder.processing.hashing import compute_hash_id

if TYPE_CHECKING:  # pragma: no cover
    from portfolio_builder.processing.sources import ImageSource

# EXIF orientations that rotate the image by 90 or 270 degrees
_TRANSPOSING_ORIENTATIONS = frozenset({5, 6, 7, 8})
_EXIF_ORIENTATION_TAG = 0x0112


@dataclass(frozen=True, slots=True)
class PhotoInfo:
    """Identity and geometry of a source photo."""

    name: str
    hash_id: str
    width: int
    height: int
    size: int
    ratio_width: int
    ratio_height: int

    @property
    def aspect_ratio(self) -> float:
        """Return width divided by height."""
        return self.width / self.height


def read_size(source: ImageSource) -> tuple[int, int]:
    """
    Return the upright ``(width, height)`` of a source from its header.

    Dimensions are swapped for EXIF orientations that rotate the photo,
    matching the geometry of generated variants.
    """
    try:
        with source.open() as stream, Image.open(stream) as img:
            width, height = img.size
            orientation = img.getexif().get(_EXIF_ORIENTATION_TAG, 1)
    except (UnidentifiedImageError, SyntaxError) as exc:
        raise DecodeError(source.name, "decode", str(exc)) from exc
    except OSError as exc:
        raise SourceReadError(source.name, "read", str(exc)) from exc
    if width <= 0 or height <= 0:
        msg = f"invalid image dimensions {width}x{height}"
        raise DecodeError(source.name, "decode", msg)
    if orientation in _TRANSPOSING_ORIENTATIONS:
        return height, width
    return width, height


def integer_ratio(aspect_ratio: float) -> tuple[int, int]:
    """Snap a decimal aspect ratio to the closest common photo ratio."""
    best = FALLBACK_RATIO
    best_diff = abs(aspect_ratio - best[0] / best[1])
    for ratio_w, ratio_h in COMMON_RATIOS:
        diff = abs(aspect_ratio - ratio_w / ratio_h)
        if diff < best_diff:
            best, best_diff = (ratio_w, ratio_h), diff
    return best


def _byte_size(source: ImageSource) -> int:
    try:
        with source.open() as stream:
            return stream.seek(0, io.SEEK_END)
    except OSError as exc:
        raise SourceReadError(source.name, "read", str(exc)) from exc


def inspect_photo(source: ImageSource) -> PhotoInfo:
    """Describe a source photo for builder listings and layout tools."""
    hash_id = compute_hash_id(source)
    width, height = read_size(source)
    ratio_w, ratio_h = integer_ratio(width / height)
    return PhotoInfo(
        name=source.name,
        hash_id=hash_id,
        width=width,
        height=height,
        size=_byte_size(source),
        ratio_width=ratio_w,
        ratio_height=ratio_h,
    )


__all__ = ["PhotoInfo", "inspect_photo", "integer_ratio", "read_size"]
