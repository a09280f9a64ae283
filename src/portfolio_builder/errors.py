"""
Exception types raised by the imaging core.

Two families exist. ``ProcessingError`` is terminal for a single source
image and always names the image and the pipeline step that failed.
``LayoutValidationError`` is terminal for a whole placement grid and
names the offending placement indices.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from portfolio_builder.type_defs import Cell, GridName, ProcessingStep


class ProcessingError(Exception):
    """Variant generation failed for one source image."""

    def __init__(
        self,
        source_name: str,
        step: ProcessingStep,
        detail: str,
    ) -> None:
        self.source_name = source_name
        self.step = step
        self.detail = detail
        super().__init__(f"{source_name}: {step} failed: {detail}")


class SourceReadError(ProcessingError):
    """The source stream could not be opened or read."""


class DecodeError(ProcessingError):
    """The source bytes are corrupt or in an unsupported format."""


class VariantWriteError(ProcessingError):
    """A variant could not be resized, encoded, or written."""

    def __init__(
        self,
        source_name: str,
        step: ProcessingStep,
        detail: str,
        *,
        target: str,
    ) -> None:
        self.target = target
        super().__init__(source_name, step, f"{target}: {detail}")


class LayoutValidationError(ValueError):
    """A placement grid is inconsistent and must not be rendered."""

    def __init__(self, grid: GridName, message: str) -> None:
        self.grid = grid
        super().__init__(message)


def _placement_label(grid: GridName) -> str:
    return "mobile placement" if grid == "mobile" else "placement"


class GridWidthError(LayoutValidationError):
    """The declared grid width is not a positive column count."""

    def __init__(self, grid: GridName, width: int) -> None:
        self.width = width
        name = "mobile_grid_width" if grid == "mobile" else "grid_width"
        super().__init__(grid, f"{name} must be > 0, got {width}")


class PlacementBoundsError(LayoutValidationError):
    """A placement lies outside the grid or has a negative extent."""

    def __init__(
        self,
        grid: GridName,
        index: int,
        photo_ref: str,
        reason: str,
    ) -> None:
        self.index = index
        self.photo_ref = photo_ref
        self.reason = reason
        super().__init__(
            grid,
            f"{_placement_label(grid)} {index} ({photo_ref}) {reason}",
        )


class PlacementOverlapError(LayoutValidationError):
    """Two placements claim the same grid cell."""

    def __init__(  # noqa: PLR0913
        self,
        grid: GridName,
        index: int,
        photo_ref: str,
        other_index: int,
        other_ref: str,
        cell: Cell,
    ) -> None:
        self.index = index
        self.photo_ref = photo_ref
        self.other_index = other_index
        self.other_ref = other_ref
        self.cell = cell
        label = _placement_label(grid)
        super().__init__(
            grid,
            (
                f"{label} {index} ({photo_ref}) overlaps with "
                f"{label} {other_index} ({other_ref}) "
                f"at cell {cell[0]},{cell[1]}"
            ),
        )


__all__ = [
    "DecodeError",
    "GridWidthError",
    "LayoutValidationError",
    "PlacementBoundsError",
    "PlacementOverlapError",
    "ProcessingError",
    "SourceReadError",
    "VariantWriteError",
]
