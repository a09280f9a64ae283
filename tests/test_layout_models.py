"""Tests for placement grid models and layout file loading."""
from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path

import pytest
import tomlkit
from pydantic import ValidationError

from portfolio_builder.layouts.models import (
    GalleryLayout,
    GridPosition,
    PhotoPlacement,
    load_layout,
)


class TestGridPosition:
    def test_spans_and_cells(self) -> None:
        pos = GridPosition(
            top_left_x=2, top_left_y=1, bottom_right_x=3, bottom_right_y=2,
        )
        assert pos.col_span == 2  # noqa: PLR2004
        assert pos.row_span == 2  # noqa: PLR2004
        assert pos.cells() == [(2, 1), (2, 2), (3, 1), (3, 2)]

    def test_accepts_camel_case(self) -> None:
        pos = GridPosition.model_validate({
            "topLeftX": 1, "topLeftY": 1, "bottomRightX": 4, "bottomRightY": 3,
        })
        assert (pos.bottom_right_x, pos.bottom_right_y) == (4, 3)

    def test_is_frozen(self) -> None:
        pos = GridPosition(
            top_left_x=1, top_left_y=1, bottom_right_x=1, bottom_right_y=1,
        )
        with pytest.raises(ValidationError):
            pos.top_left_x = 5  # type: ignore[misc]


class TestGalleryLayout:
    def test_grid_width_required(self) -> None:
        with pytest.raises(ValidationError):
            GalleryLayout.model_validate({"placements": []})

    def test_placement_accepts_filename_key(self) -> None:
        placement = PhotoPlacement.model_validate({
            "filename": "a.jpg",
            "position": {
                "top_left_x": 1, "top_left_y": 1,
                "bottom_right_x": 1, "bottom_right_y": 1,
            },
        })
        assert placement.photo_ref == "a.jpg"

    def test_mobile_width_fallback(
        self,
        make_layout: Callable[..., GalleryLayout],
    ) -> None:
        layout = make_layout([("a", 1, 1, 12, 1)], mobile=[("a", 1, 1, 6, 1)])
        assert layout.mobile_grid_width is None
        assert layout.effective_mobile_grid_width == 6  # noqa: PLR2004
        assert layout.mobile.width == 6  # noqa: PLR2004
        assert layout.mobile.name == "mobile"
        assert layout.desktop.width == 12  # noqa: PLR2004

    def test_has_mobile_layout(
        self,
        make_layout: Callable[..., GalleryLayout],
    ) -> None:
        assert not make_layout([("a", 1, 1, 1, 1)]).has_mobile_layout
        mobile = [("a", 1, 1, 1, 1)]
        assert not make_layout(
            [("a", 1, 1, 1, 1)], mobile=mobile,
        ).has_mobile_layout
        assert not make_layout(
            [("a", 1, 1, 1, 1)], mobile=mobile, mobile_grid_width=0,
        ).has_mobile_layout
        assert make_layout(
            [("a", 1, 1, 1, 1)], mobile=mobile, mobile_grid_width=4,
        ).has_mobile_layout

    def test_non_positive_mobile_width_falls_back(
        self,
        make_layout: Callable[..., GalleryLayout],
    ) -> None:
        for declared in (None, 0, -1):
            layout = make_layout([("a", 1, 1, 1, 1)], mobile_grid_width=declared)
            assert layout.effective_mobile_grid_width == 6  # noqa: PLR2004
            assert layout.mobile.width == 6  # noqa: PLR2004

    def test_photo_refs_first_seen_order(
        self,
        make_layout: Callable[..., GalleryLayout],
    ) -> None:
        layout = make_layout(
            [("b", 1, 1, 1, 1), ("a", 2, 1, 2, 1)],
            mobile=[("a", 1, 1, 1, 1), ("c", 1, 2, 1, 2)],
        )
        assert layout.photo_refs() == ["b", "a", "c"]


class TestLoadLayout:
    def test_load_toml(self, tmp_path: Path) -> None:
        doc = tomlkit.document()
        doc.update({
            "grid_width": 12,
            "mobile_grid_width": 4,
            "placements": [{
                "photo_ref": "a.jpg",
                "position": {
                    "top_left_x": 1, "top_left_y": 1,
                    "bottom_right_x": 6, "bottom_right_y": 2,
                },
            }],
        })
        path = tmp_path / "layout.toml"
        path.write_text(tomlkit.dumps(doc), encoding="utf-8")

        layout = load_layout(path)
        assert layout.grid_width == 12  # noqa: PLR2004
        assert layout.mobile_grid_width == 4  # noqa: PLR2004
        assert layout.placements[0].position.col_span == 6  # noqa: PLR2004

    def test_load_json_camel_case(self, tmp_path: Path) -> None:
        path = tmp_path / "layout.json"
        path.write_text(json.dumps({
            "gridWidth": 8,
            "mobilePlacements": [{
                "photoRef": "b.jpg",
                "position": {
                    "topLeftX": 1, "topLeftY": 1,
                    "bottomRightX": 2, "bottomRightY": 1,
                },
            }],
        }), encoding="utf-8")

        layout = load_layout(path)
        assert layout.grid_width == 8  # noqa: PLR2004
        assert layout.placements == ()
        assert layout.mobile_placements[0].photo_ref == "b.jpg"
