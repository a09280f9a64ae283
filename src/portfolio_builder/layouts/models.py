"""
Placement grid models.

A gallery carries two independent grids: desktop and mobile. Each binds
photo references to rectangles of 1-based inclusive cell coordinates.
Models are frozen so a validated snapshot cannot change before rendering.
Keys are accepted in snake_case (YAML) and camelCase (JSON builder API).
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

import tomlkit
from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from portfolio_builder.config_defaults import DEFAULT_MOBILE_GRID_WIDTH
from portfolio_builder.type_defs import Cell, GridName

_FROZEN = ConfigDict(frozen=True)


class GridPosition(BaseModel):
    """Rectangle on the grid, inclusive on both corners."""

    model_config = _FROZEN

    top_left_x: int = Field(
        validation_alias=AliasChoices("top_left_x", "topLeftX"),
    )
    top_left_y: int = Field(
        validation_alias=AliasChoices("top_left_y", "topLeftY"),
    )
    bottom_right_x: int = Field(
        validation_alias=AliasChoices("bottom_right_x", "bottomRightX"),
    )
    bottom_right_y: int = Field(
        validation_alias=AliasChoices("bottom_right_y", "bottomRightY"),
    )

    @property
    def col_span(self) -> int:
        """Number of columns covered."""
        return self.bottom_right_x - self.top_left_x + 1

    @property
    def row_span(self) -> int:
        """Number of rows covered."""
        return self.bottom_right_y - self.top_left_y + 1

    def cells(self) -> list[Cell]:
        """Return every ``(x, y)`` cell covered by the rectangle."""
        return [
            (x, y)
            for x in range(self.top_left_x, self.bottom_right_x + 1)
            for y in range(self.top_left_y, self.bottom_right_y + 1)
        ]


class PhotoPlacement(BaseModel):
    """A photo reference bound to a grid rectangle."""

    model_config = _FROZEN

    photo_ref: str = Field(
        validation_alias=AliasChoices("photo_ref", "photoRef", "filename"),
    )
    position: GridPosition


@dataclass(frozen=True, slots=True)
class PlacementGrid:
    """One coordinate system: a width and the placements on it."""

    name: GridName
    width: int
    placements: tuple[PhotoPlacement, ...]


class GalleryLayout(BaseModel):
    """
    Desktop and mobile placements for one gallery.

    The mobile grid falls back to a width of 6 when no positive width is
    declared. Layout files written by older tooling carry a literal 0.
    """

    model_config = _FROZEN

    grid_width: int = Field(
        validation_alias=AliasChoices("grid_width", "gridWidth"),
    )
    placements: tuple[PhotoPlacement, ...] = ()
    mobile_grid_width: int | None = Field(
        default=None,
        validation_alias=AliasChoices("mobile_grid_width", "mobileGridWidth"),
    )
    mobile_placements: tuple[PhotoPlacement, ...] = Field(
        default=(),
        validation_alias=AliasChoices("mobile_placements", "mobilePlacements"),
    )

    @property
    def effective_mobile_grid_width(self) -> int:
        """Return the declared mobile width or the fallback."""
        if self.mobile_grid_width is None or self.mobile_grid_width <= 0:
            return DEFAULT_MOBILE_GRID_WIDTH
        return self.mobile_grid_width

    @property
    def has_mobile_layout(self) -> bool:
        """Return True when a separate mobile arrangement is configured."""
        declared = self.mobile_grid_width
        return bool(self.mobile_placements) and (
            declared is not None and declared > 0
        )

    @property
    def desktop(self) -> PlacementGrid:
        """The desktop grid."""
        return PlacementGrid("desktop", self.grid_width, self.placements)

    @property
    def mobile(self) -> PlacementGrid:
        """The mobile grid, using the fallback width when undeclared."""
        return PlacementGrid(
            "mobile",
            self.effective_mobile_grid_width,
            self.mobile_placements,
        )

    def photo_refs(self) -> list[str]:
        """Return referenced photos in first-seen order across both grids."""
        seen: dict[str, None] = {}
        for placement in (*self.placements, *self.mobile_placements):
            seen.setdefault(placement.photo_ref, None)
        return list(seen)


def load_layout(path: Path) -> GalleryLayout:
    """
    Parse a layout file (``.toml`` or ``.json``) into a GalleryLayout.

    Only parsing happens here; call ``validate_layout`` before rendering.
    """
    layout_path = Path(path)
    with layout_path.open("r", encoding="utf-8") as handle:
        if layout_path.suffix.lower() == ".json":
            data = json.load(handle)
        else:
            data = tomlkit.load(handle).unwrap()
    return GalleryLayout.model_validate(data)


__all__ = [
    "GalleryLayout",
    "GridPosition",
    "PhotoPlacement",
    "PlacementGrid",
    "load_layout",
]
