"""
Placement grids and pixel layout algorithms.

``models`` and ``validation`` cover explicit grid placements; ``packing``
computes automatic layouts for galleries without them.
"""

from __future__ import annotations

from . import dimensions, models, packing, validation
from .dimensions import load_dimensions
from .models import (
    GalleryLayout,
    GridPosition,
    PhotoPlacement,
    PlacementGrid,
    load_layout,
)
from .packing import (
    ImageDimensions,
    LayoutItem,
    ManualPosition,
    compute_layout,
    grid_layout,
    justified_layout,
    manual_layout,
)
from .validation import is_valid_layout, validate_grid, validate_layout

__all__ = [
    "GalleryLayout",
    "GridPosition",
    "ImageDimensions",
    "LayoutItem",
    "ManualPosition",
    "PhotoPlacement",
    "PlacementGrid",
    "compute_layout",
    "dimensions",
    "grid_layout",
    "is_valid_layout",
    "justified_layout",
    "load_dimensions",
    "load_layout",
    "manual_layout",
    "models",
    "packing",
    "validate_grid",
    "validate_layout",
    "validation",
]
