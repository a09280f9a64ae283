"""
Tests for the CLI parser and execution logic.

Modules tested:
- build_arg_parser()
- run_from_args()
- main()

Drives the subcommands end to end against temporary photo trees and
layout files.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING

import pytest
import tomlkit

import portfolio_builder.cli as pb_cli

if TYPE_CHECKING:
    from _pytest.capture import CaptureFixture
    from _pytest.logging import LogCaptureFixture


def _write_layout(path: Path, placements: list[tuple[str, int, int, int, int]],
                  *, grid_width: int = 12) -> Path:
    doc = tomlkit.document()
    doc.update({
        "grid_width": grid_width,
        "placements": [
            {
                "photo_ref": ref,
                "position": {
                    "top_left_x": x1, "top_left_y": y1,
                    "bottom_right_x": x2, "bottom_right_y": y2,
                },
            }
            for ref, x1, y1, x2, y2 in placements
        ],
    })
    path.write_text(tomlkit.dumps(doc), encoding="utf-8")
    return path


class TestCLIArgumentParsing:
    def test_process_flags(self) -> None:
        args = pb_cli.build_arg_parser().parse_args([
            "--verbose",
            "process",
            "--input", "in",
            "--output", "out",
            "--widths", "100,200",
            "--quality", "70",
            "--format", "jpeg",
            "--no-thumbnails",
            "--workers", "2",
            "--stop-on-error",
            "--force",
        ])
        assert args.command == "process"
        assert args.verbose is True
        assert args.input == "in"
        assert args.widths == "100,200"
        assert args.quality == 70  # noqa: PLR2004
        assert args.format == "jpeg"
        assert args.no_thumbnails is True
        assert args.workers == 2  # noqa: PLR2004
        assert args.stop_on_error is True
        assert args.force is True

    def test_defaults_are_unset(self) -> None:
        args = pb_cli.build_arg_parser().parse_args(["process"])
        assert args.widths is None
        assert args.quality is None
        assert args.force is False

    @pytest.mark.parametrize("value", ["0", "-2", "many"])
    def test_workers_must_be_positive(self, value: str) -> None:
        with pytest.raises(SystemExit):
            pb_cli.build_arg_parser().parse_args(
                ["process", "--workers", value],
            )

    def test_positive_int(self) -> None:
        assert pb_cli.positive_int("3") == 3  # noqa: PLR2004
        with pytest.raises(ValueError, match="must be positive"):
            pb_cli.positive_int("0")
        with pytest.raises(ValueError, match="must be an integer"):
            pb_cli.positive_int("x")

    def test_command_required(self) -> None:
        with pytest.raises(SystemExit):
            pb_cli.main([])


class TestProcessCommand:
    def test_process_writes_variants(
        self,
        make_photo: Callable[..., Path],
        tmp_path: Path,
    ) -> None:
        make_photo("a.jpg", (200, 100))
        out = tmp_path / "out"

        code = pb_cli.main([
            "process",
            "--input", str(tmp_path / "photos"),
            "--output", str(out),
            "--widths", "50,100",
            "--thumbnail-width", "20",
        ])

        assert code == 0
        (hash_dir,) = [p for p in out.iterdir() if p.name != ".thumbs"]
        assert sorted(p.name for p in hash_dir.iterdir()) == [
            f"{hash_dir.name}-100w.webp",
            f"{hash_dir.name}-50w.webp",
        ]
        assert (out / ".thumbs" / f"thumb-{hash_dir.name}.webp").is_file()

    def test_process_reports_failures(
        self,
        make_photo: Callable[..., Path],
        tmp_path: Path,
        caplog: LogCaptureFixture,
    ) -> None:
        make_photo("good.jpg", (80, 60))
        (tmp_path / "photos" / "broken.jpg").write_bytes(b"not a jpeg")
        caplog.set_level("INFO")

        code = pb_cli.main([
            "process",
            "--input", str(tmp_path / "photos"),
            "--output", str(tmp_path / "out"),
            "--widths", "40",
        ])

        assert code == 1
        assert "broken.jpg" in caplog.text
        assert "1 processed" in caplog.text

    def test_missing_input_dir(
        self,
        tmp_path: Path,
        caplog: LogCaptureFixture,
    ) -> None:
        caplog.set_level("ERROR")
        code = pb_cli.main(["process", "--input", str(tmp_path / "nope")])
        assert code == 1
        assert "Input directory not found" in caplog.text

    def test_config_file_values_are_used(
        self,
        make_photo: Callable[..., Path],
        tmp_path: Path,
    ) -> None:
        make_photo("a.jpg", (200, 100))
        out = tmp_path / "out"
        config = tmp_path / "config.toml"
        doc = tomlkit.document()
        doc.update({
            "variants": {
                "widths": [64], "format": "png", "generate_thumbnails": False,
            },
            "paths": {"input_dir": str(tmp_path / "photos"),
                      "output_dir": str(out)},
        })
        config.write_text(tomlkit.dumps(doc), encoding="utf-8")

        assert pb_cli.main(["--config", str(config), "process"]) == 0
        (hash_dir,) = list(out.iterdir())
        assert [p.name for p in hash_dir.iterdir()] == [
            f"{hash_dir.name}-64w.png",
        ]

    def test_validate_config_only(
        self,
        tmp_path: Path,
        caplog: LogCaptureFixture,
    ) -> None:
        config = tmp_path / "config.toml"
        config.write_text("[variants]\nquality = 50\n", encoding="utf-8")
        caplog.set_level("INFO")

        code = pb_cli.main(
            ["--config", str(config), "--validate-config-only"],
        )

        assert code == 0
        assert "validated successfully" in caplog.text

    def test_invalid_config_value(self, tmp_path: Path) -> None:
        config = tmp_path / "config.toml"
        config.write_text("[variants]\nquality = 0\n", encoding="utf-8")
        code = pb_cli.main(
            ["--config", str(config), "--validate-config-only"],
        )
        assert code == 1


class TestValidateCommand:
    def test_valid_layout(
        self,
        tmp_path: Path,
        caplog: LogCaptureFixture,
    ) -> None:
        path = _write_layout(
            tmp_path / "layout.toml",
            [("A", 1, 1, 6, 2), ("B", 7, 1, 12, 2)],
        )
        caplog.set_level("INFO")
        assert pb_cli.main(["validate", str(path)]) == 0
        assert "is valid" in caplog.text

    def test_overlapping_layout(
        self,
        tmp_path: Path,
        caplog: LogCaptureFixture,
    ) -> None:
        path = _write_layout(
            tmp_path / "layout.toml",
            [("A", 1, 1, 6, 2), ("B", 6, 1, 12, 2)],
        )
        caplog.set_level("ERROR")
        assert pb_cli.main(["validate", str(path)]) == 1
        assert "at cell 6,1" in caplog.text

    def test_malformed_layout(self, tmp_path: Path) -> None:
        path = tmp_path / "layout.json"
        path.write_text(json.dumps({"placements": []}), encoding="utf-8")
        assert pb_cli.main(["validate", str(path)]) == 1


class TestLayoutCommand:
    def test_prints_json_items(
        self,
        make_photo: Callable[..., Path],
        capsys: CaptureFixture[str],
    ) -> None:
        first = make_photo("a.jpg", (300, 200))
        second = make_photo("b.jpg", (200, 300))

        code = pb_cli.main([
            "layout", "--mode", "grid", "--columns", "2", "--gap", "0",
            "--container-width", "400", str(first), str(second),
        ])

        assert code == 0
        items = json.loads(capsys.readouterr().out)
        assert [item["ref"] for item in items] == ["a.jpg", "b.jpg"]
        assert [item["width"] for item in items] == [200, 200]
        assert [item["height"] for item in items] == [133, 300]

    def test_unreadable_image(
        self,
        tmp_path: Path,
        caplog: LogCaptureFixture,
    ) -> None:
        bad = tmp_path / "bad.jpg"
        bad.write_bytes(b"garbage")
        caplog.set_level("ERROR")
        assert pb_cli.main(["layout", str(bad)]) == 1
        assert "bad.jpg" in caplog.text
