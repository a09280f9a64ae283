"""
Pixel layout algorithms for galleries without explicit placements.

All functions are pure: they take image geometry and presentation
parameters and return freshly computed ``LayoutItem`` lists. The
container width is always passed in so galleries with different page
widths can be laid out side by side.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from portfolio_builder.config_defaults import (
    DEFAULT_COLUMNS,
    DEFAULT_CONTAINER_WIDTH,
    DEFAULT_GAP,
    DEFAULT_ROW_HEIGHT,
)

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Sequence

    from portfolio_builder.config import PackingConfig
    from portfolio_builder.type_defs import LayoutMode


@dataclass(frozen=True, slots=True)
class ImageDimensions:
    """Pixel size of a referenced image."""

    ref: str
    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            msg = (f"Image {self.ref!r} has invalid dimensions "
                   f"{self.width}x{self.height}")
            raise ValueError(msg)

    @property
    def aspect_ratio(self) -> float:
        """Return width divided by height."""
        return self.width / self.height


@dataclass(frozen=True, slots=True)
class ManualPosition:
    """Caller-chosen cell for the manual layout, 0-based."""

    ref: str
    row: int
    col: int
    col_span: int = 1
    row_span: int = 1


@dataclass(frozen=True, slots=True)
class LayoutItem:
    """Positioned image in pixel coordinates."""

    ref: str
    x: int
    y: int
    width: int
    height: int
    col_span: int | None = None
    row_span: int | None = None


def _check_common(container_width: int, gap: int) -> None:
    if container_width <= 0:
        msg = f"container_width must be positive, got {container_width}"
        raise ValueError(msg)
    if gap < 0:
        msg = f"gap must not be negative, got {gap}"
        raise ValueError(msg)


def _column_width(container_width: int, columns: int, gap: int) -> int:
    """Return the integer width of one column."""
    if columns <= 0:
        msg = f"columns must be positive, got {columns}"
        raise ValueError(msg)
    col_width = (container_width - gap * (columns - 1)) // columns
    if col_width <= 0:
        msg = (f"{columns} columns with gap {gap} do not fit in "
               f"{container_width}px")
        raise ValueError(msg)
    return col_width


def _place_full_row(
    row: list[tuple[ImageDimensions, float]],
    *,
    y: int,
    row_height: int,
    gap: int,
    container_width: int,
) -> tuple[list[LayoutItem], int]:
    """
    Scale a completed row so images plus gaps span the container exactly.

    Item edges are rounded from cumulative float positions, so rounding
    never accumulates across the row and the last item ends on the
    container edge. Returns the items and the scaled row height.
    """
    natural_total = sum(width for _, width in row)
    available = container_width - gap * (len(row) - 1)
    if available <= 0:
        msg = (f"{len(row)} images with gap {gap} do not fit in "
               f"{container_width}px")
        raise ValueError(msg)
    scale = available / natural_total
    height = max(1, round(row_height * scale))

    items: list[LayoutItem] = []
    cursor = 0.0
    left = 0
    for index, (dims, natural) in enumerate(row):
        cursor += natural * scale
        right = round(cursor)
        items.append(
            LayoutItem(dims.ref, left + gap * index, y,
                       max(1, right - left), height),
        )
        left = right
    return items, height


def justified_layout(
    images: Sequence[ImageDimensions],
    *,
    row_height: int = DEFAULT_ROW_HEIGHT,
    gap: int = DEFAULT_GAP,
    container_width: int = DEFAULT_CONTAINER_WIDTH,
) -> list[LayoutItem]:
    """
    Pack images into rows that fill the container width.

    Each image starts at ``row_height`` with its natural aspect ratio.
    Once the accumulated width of a row (images plus one gap each)
    reaches the container width, the row is scaled uniformly so the
    images and the gaps between them fill the container exactly. A
    trailing row that never fills is laid out at its natural size.
    """
    _check_common(container_width, gap)
    if row_height <= 0:
        msg = f"row_height must be positive, got {row_height}"
        raise ValueError(msg)

    items: list[LayoutItem] = []
    row: list[tuple[ImageDimensions, float]] = []
    accumulated = 0.0
    y = 0

    for dims in images:
        natural = row_height * dims.aspect_ratio
        row.append((dims, natural))
        accumulated += natural + gap
        if accumulated >= container_width:
            placed, height = _place_full_row(
                row, y=y, row_height=row_height, gap=gap,
                container_width=container_width,
            )
            items.extend(placed)
            y += height + gap
            row = []
            accumulated = 0.0

    x = 0
    for dims, natural in row:
        width = max(1, int(natural))
        items.append(LayoutItem(dims.ref, x, y, width, row_height))
        x += width + gap

    return items


def grid_layout(
    images: Sequence[ImageDimensions],
    *,
    columns: int = DEFAULT_COLUMNS,
    gap: int = DEFAULT_GAP,
    container_width: int = DEFAULT_CONTAINER_WIDTH,
) -> list[LayoutItem]:
    """
    Lay images out in fixed-width columns, filling rows left to right.

    Every image takes the column width and its own aspect-correct
    height. Each row starts below the tallest image of the previous row.
    """
    _check_common(container_width, gap)
    col_width = _column_width(container_width, columns, gap)

    items: list[LayoutItem] = []
    y = 0
    row_bottom = 0
    for i, dims in enumerate(images):
        row, col = divmod(i, columns)
        if col == 0 and row > 0:
            y = row_bottom + gap
        height = max(1, int(col_width / dims.aspect_ratio))
        items.append(
            LayoutItem(
                dims.ref,
                x=col * (col_width + gap),
                y=y,
                width=col_width,
                height=height,
                col_span=1,
                row_span=1,
            ),
        )
        row_bottom = max(row_bottom, y + height)
    return items


def manual_layout(
    positions: Sequence[ManualPosition],
    *,
    columns: int = DEFAULT_COLUMNS,
    gap: int = DEFAULT_GAP,
    container_width: int = DEFAULT_CONTAINER_WIDTH,
) -> list[LayoutItem]:
    """
    Convert caller-supplied cells and spans into pixel rectangles.

    Cells are square, one column wide. No packing decisions are made and
    input order is preserved.
    """
    _check_common(container_width, gap)
    col_width = _column_width(container_width, columns, gap)
    cell_height = col_width

    items: list[LayoutItem] = []
    for pos in positions:
        if pos.row < 0 or pos.col < 0:
            msg = f"Position for {pos.ref!r} must not be negative"
            raise ValueError(msg)
        if pos.col_span < 1 or pos.row_span < 1:
            msg = f"Spans for {pos.ref!r} must be at least 1"
            raise ValueError(msg)
        items.append(
            LayoutItem(
                pos.ref,
                x=pos.col * (col_width + gap),
                y=pos.row * (cell_height + gap),
                width=col_width * pos.col_span + gap * (pos.col_span - 1),
                height=cell_height * pos.row_span + gap * (pos.row_span - 1),
                col_span=pos.col_span,
                row_span=pos.row_span,
            ),
        )
    return items


def compute_layout(
    mode: LayoutMode,
    images: Sequence[ImageDimensions],
    config: PackingConfig,
) -> list[LayoutItem]:
    """Run the packing algorithm selected by ``mode``."""
    if mode == "justified":
        return justified_layout(
            images,
            row_height=config.row_height,
            gap=config.gap,
            container_width=config.container_width,
        )
    if mode == "grid":
        return grid_layout(
            images,
            columns=config.columns,
            gap=config.gap,
            container_width=config.container_width,
        )
    msg = f"Unknown layout mode: {mode!r}"
    raise ValueError(msg)


__all__ = [
    "ImageDimensions",
    "LayoutItem",
    "ManualPosition",
    "compute_layout",
    "grid_layout",
    "justified_layout",
    "manual_layout",
]
