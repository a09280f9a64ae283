"""Bridge from image sources to packing input."""

from __future__ import annotations

from typing import TYPE_CHECKING

from portfolio_builder.layouts.packing import ImageDimensions
from portfolio_builder.processing.inspection import read_size

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Iterable

    from portfolio_builder.processing.sources import ImageSource


def load_dimensions(sources: Iterable[ImageSource]) -> list[ImageDimensions]:
    """
    Read header dimensions for every source, preserving order.

    An unreadable image raises instead of being dropped, so a layout
    never silently loses a referenced photo.
    """
    dims = []
    for source in sources:
        width, height = read_size(source)
        dims.append(ImageDimensions(source.name, width, height))
    return dims


__all__ = ["load_dimensions"]
