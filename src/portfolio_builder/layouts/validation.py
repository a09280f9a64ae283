"""
Geometric validation of placement grids.

``validate_grid`` is the single check shared by the desktop and mobile
grids. It is pure and cheap, so callers run it on every render instead of
caching results. Only the right edge is bounded by the grid width;
galleries grow downward without limit.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from portfolio_builder.errors import (
    GridWidthError,
    PlacementBoundsError,
    PlacementOverlapError,
)

if TYPE_CHECKING:  # pragma: no cover
    from portfolio_builder.layouts.models import (
        GalleryLayout,
        GridPosition,
        PlacementGrid,
    )
    from portfolio_builder.type_defs import Cell


def _bounds_problem(pos: GridPosition, width: int) -> str | None:
    """Describe why ``pos`` is out of bounds, or return None."""
    if pos.top_left_x < 1 or pos.top_left_y < 1:
        return "has top-left coordinates less than 1"
    if pos.bottom_right_x < pos.top_left_x or (
        pos.bottom_right_y < pos.top_left_y
    ):
        return "has bottom-right before top-left"
    if pos.bottom_right_x > width:
        return (
            f"extends beyond grid width ({width}): "
            f"bottom_right_x={pos.bottom_right_x}"
        )
    return None


def validate_grid(grid: PlacementGrid) -> None:
    """
    Check one grid for a valid width, in-bounds placements, and overlaps.

    Placements are checked in order and the first problem is raised.

    Raises:
        GridWidthError: The grid width is not positive.
        PlacementBoundsError: A placement is outside the grid or inverted.
        PlacementOverlapError: Two placements share a cell.

    """
    if grid.width <= 0:
        raise GridWidthError(grid.name, grid.width)

    occupancy: dict[Cell, int] = {}
    for index, placement in enumerate(grid.placements):
        pos = placement.position
        problem = _bounds_problem(pos, grid.width)
        if problem is not None:
            raise PlacementBoundsError(
                grid.name, index, placement.photo_ref, problem,
            )

        for cell in pos.cells():
            other = occupancy.get(cell)
            if other is not None:
                raise PlacementOverlapError(
                    grid.name,
                    index,
                    placement.photo_ref,
                    other,
                    grid.placements[other].photo_ref,
                    cell,
                )
            occupancy[cell] = index


def validate_layout(layout: GalleryLayout) -> None:
    """
    Validate the desktop grid, then the mobile grid.

    The grids have separate occupancy, so identical coordinates in both
    never conflict. A missing or non-positive mobile width is validated
    at the fallback width.
    """
    validate_grid(layout.desktop)
    if layout.mobile_placements:
        validate_grid(layout.mobile)


def is_valid_layout(layout: GalleryLayout) -> bool:
    """Return True when ``validate_layout`` would succeed."""
    try:
        validate_layout(layout)
    except ValueError:
        return False
    return True


__all__ = ["is_valid_layout", "validate_grid", "validate_layout"]
