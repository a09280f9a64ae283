"""
Deterministic output names for generated variants.

Names depend only on the hash ID and the variant configuration, so the
full set of expected outputs is known before any decoding happens.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from portfolio_builder.constants import (
    THUMBNAIL_NAME_TEMPLATE,
    VARIANT_NAME_TEMPLATE,
)

if TYPE_CHECKING:  # pragma: no cover
    from portfolio_builder.config import VariantConfig


@dataclass(frozen=True, slots=True)
class OutputTarget:
    """One file the processor is expected to produce."""

    name: str
    width: int
    thumbnail: bool = False


def variant_filename(hash_id: str, width: int, ext: str) -> str:
    """Return the bare variant filename, e.g. ``a1b2c3d4e5f6-800w.webp``."""
    return VARIANT_NAME_TEMPLATE.format(hash_id=hash_id, width=width, ext=ext)


def variant_name(hash_id: str, width: int, ext: str) -> str:
    """Return the variant name relative to a destination root."""
    return f"{hash_id}/{variant_filename(hash_id, width, ext)}"


def thumbnail_filename(hash_id: str, ext: str) -> str:
    """Return the thumbnail filename, e.g. ``thumb-a1b2c3d4e5f6.webp``."""
    return THUMBNAIL_NAME_TEMPLATE.format(hash_id=hash_id, ext=ext)


def expected_outputs(hash_id: str, config: VariantConfig) -> list[OutputTarget]:
    """List every output for ``hash_id`` in generation order."""
    ext = config.extension
    targets = [
        OutputTarget(name=variant_name(hash_id, width, ext), width=width)
        for width in config.widths
    ]
    if config.generate_thumbnails:
        targets.append(
            OutputTarget(
                name=thumbnail_filename(hash_id, ext),
                width=config.thumbnail_width,
                thumbnail=True,
            ),
        )
    return targets


def variant_filenames(hash_id: str, config: VariantConfig) -> dict[int, str]:
    """Map each configured width to its bare variant filename."""
    return {
        width: variant_filename(hash_id, width, config.extension)
        for width in config.widths
    }


__all__ = [
    "OutputTarget",
    "expected_outputs",
    "thumbnail_filename",
    "variant_filename",
    "variant_filenames",
    "variant_name",
]
