"""Pillow helpers for decoding, resizing, and encoding variants."""

from __future__ import annotations

import io
from typing import TYPE_CHECKING

from PIL import Image, ImageOps, UnidentifiedImageError

from portfolio_builder.constants import (
    COLOR_MODE_RGB,
    COLOR_MODE_RGBA,
    COLOR_WHITE,
)
from portfolio_builder.errors import DecodeError, SourceReadError

if TYPE_CHECKING:  # pragma: no cover
    from portfolio_builder.processing.sources import ImageSource
    from portfolio_builder.type_defs import ImageFormat

_RGB = tuple[int, int, int]

# Pillow encoder names keyed by configured format
_PIL_FORMATS: dict[str, str] = {
    "webp": "WEBP",
    "jpeg": "JPEG",
    "png": "PNG",
}


def load_image(source: ImageSource) -> Image.Image:
    """
    Decode a source into a fully loaded, upright PIL image.

    EXIF orientation is applied so width and height describe the photo
    as it is meant to be viewed.

    Raises:
        SourceReadError: If the source cannot be opened or read.
        DecodeError: If the bytes are not a supported image.

    """
    try:
        with source.open() as stream, Image.open(stream) as img:
            img.load()
            upright = ImageOps.exif_transpose(img)
            if upright is img:
                # Older Pillow returns the input when no rotation is needed;
                # detach from the file before it is closed.
                upright = img.copy()
    except (UnidentifiedImageError, Image.DecompressionBombError) as exc:
        raise DecodeError(source.name, "decode", str(exc)) from exc
    except SyntaxError as exc:
        # Pillow plugins report some malformed headers as SyntaxError.
        raise DecodeError(source.name, "decode", str(exc)) from exc
    except OSError as exc:
        if isinstance(exc, FileNotFoundError | PermissionError):
            raise SourceReadError(source.name, "read", str(exc)) from exc
        raise DecodeError(source.name, "decode", str(exc)) from exc
    return upright


def to_encodable(
    img: Image.Image,
    fmt: ImageFormat,
    *,
    bg_color: _RGB = COLOR_WHITE,
) -> Image.Image:
    """Convert ``img`` into a mode the target encoder accepts."""
    has_alpha = img.mode in ("RGBA", "LA", "PA") or (
        img.mode == "P" and "transparency" in img.info
    )
    if fmt == "jpeg":
        if img.mode == COLOR_MODE_RGB:
            return img
        if has_alpha:
            bg = Image.new(COLOR_MODE_RGBA, img.size, (*bg_color, 255))
            comp = Image.alpha_composite(bg, img.convert(COLOR_MODE_RGBA))
            return comp.convert(COLOR_MODE_RGB)
        return img.convert(COLOR_MODE_RGB)
    if img.mode in (COLOR_MODE_RGB, COLOR_MODE_RGBA):
        return img
    return img.convert(COLOR_MODE_RGBA if has_alpha else COLOR_MODE_RGB)


def scaled_height(size: tuple[int, int], width: int) -> int:
    """
    Return the height matching ``width`` at the original aspect ratio.

    The result is truncated toward zero and never drops below one pixel.
    """
    orig_w, orig_h = size
    if orig_w <= 0 or orig_h <= 0:
        msg = f"Image has invalid dimensions: {orig_w}x{orig_h}"
        raise ValueError(msg)
    ratio = orig_h / orig_w
    return max(1, int(width * ratio))


def resize_to_width(img: Image.Image, width: int) -> Image.Image:
    """Resize keeping aspect so that the resulting width matches."""
    height = scaled_height(img.size, width)
    return img.resize((width, height), Image.Resampling.LANCZOS)


def encode_image(img: Image.Image, fmt: ImageFormat, quality: int) -> bytes:
    """
    Encode ``img`` to bytes.

    No metadata is written, so output depends only on pixels, format, and
    quality.
    """
    buffer = io.BytesIO()
    params: dict[str, object] = {}
    if fmt in ("webp", "jpeg"):
        params["quality"] = quality
    img.save(buffer, format=_PIL_FORMATS[fmt], **params)
    return buffer.getvalue()


__all__ = [
    "encode_image",
    "load_image",
    "resize_to_width",
    "scaled_height",
    "to_encodable",
]
