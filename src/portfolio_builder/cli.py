"""CLI argument parsing and main entry point."""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import asdict
from pathlib import Path
from typing import TYPE_CHECKING, TypeVar

from pydantic import ValidationError

import portfolio_builder.config as pb_config
from portfolio_builder.config_defaults import (
    DEFAULT_INPUT_DIR,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_QUALITY,
)
from portfolio_builder.constants import (
    FORMAT_EXTENSIONS,
    QUALITY_MAX,
    QUALITY_MIN,
)
from portfolio_builder.errors import LayoutValidationError, ProcessingError
from portfolio_builder.layouts import (
    compute_layout,
    load_dimensions,
    load_layout,
    validate_layout,
)
from portfolio_builder.logging_utils import logger, set_verbosity
from portfolio_builder.processing import (
    FileSource,
    VariantProcessor,
    build_jobs,
    process_batch,
)
from portfolio_builder.runtime import (
    resolve_project_version,
    validate_input_dir,
    validate_layout_file,
)

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Callable, Sequence

T = TypeVar("T")


def positive_int(text: str) -> int:
    """Argparse-style validator that enforces a strictly positive integer."""
    try:
        value = int(text)
    except ValueError as exc:
        msg = "must be an integer"
        raise ValueError(msg) from exc
    if value <= 0:
        msg = "must be positive"
        raise ValueError(msg)
    return value


def _wrap_validator(
    validator: Callable[[str], T],
    error_cls: type[argparse.ArgumentTypeError] = argparse.ArgumentTypeError,
) -> Callable[[str], T]:
    """Convert ``ValueError`` from a validator into ``ArgumentTypeError``."""

    def wrapper(text: str) -> T:
        try:
            return validator(text)
        except ValueError as exc:
            raise error_cls(str(exc)) from exc

    return wrapper


def _add_process_parser(sub: argparse._SubParsersAction) -> None:
    p = sub.add_parser(
        "process",
        help="Generate resized variants for every photo under --input",
    )
    p.add_argument(
        "--input", "-i", type=str,
        help=f"Directory of source photos (default: {DEFAULT_INPUT_DIR})")
    p.add_argument(
        "--output", "-o", type=str,
        help=f"Output directory for variants (default: {DEFAULT_OUTPUT_DIR})")
    p.add_argument(
        "--force", action="store_true",
        help="Regenerate variants even if they already exist")

    variants = p.add_argument_group("variants")
    variants.add_argument(
        "--widths", type=str,
        help="Comma-separated variant widths, e.g. 480,800,1200,1920")
    variants.add_argument(
        "--quality", type=int,
        help=(f"Encoding quality {QUALITY_MIN}-{QUALITY_MAX} "
              f"(default: {DEFAULT_QUALITY})"))
    variants.add_argument(
        "--thumbnail-width", type=_wrap_validator(positive_int),
        help="Thumbnail width in pixels")
    variants.add_argument(
        "--no-thumbnails", action="store_true",
        help="Skip thumbnail generation")
    variants.add_argument(
        "--format", choices=list(FORMAT_EXTENSIONS),
        help="Output encoding")

    batch = p.add_argument_group("batch")
    batch.add_argument(
        "--workers", type=_wrap_validator(positive_int),
        help="Worker threads (default: one per CPU core)")
    batch.add_argument(
        "--stop-on-error", action="store_true",
        help="Stop scheduling new images after the first failure")
    batch.add_argument(
        "--progress", action="store_true",
        help="Show a progress bar")


def _add_layout_parsers(sub: argparse._SubParsersAction) -> None:
    validate = sub.add_parser(
        "validate",
        help="Check a layout file for out-of-bounds or overlapping photos",
    )
    validate.add_argument("layout", type=str,
                          help="Layout file (.toml or .json)")

    layout = sub.add_parser(
        "layout",
        help="Compute an automatic pixel layout and print it as JSON",
    )
    layout.add_argument("images", nargs="+", help="Image files in order")
    layout.add_argument("--mode", choices=["justified", "grid"])
    layout.add_argument("--container-width",
                        type=_wrap_validator(positive_int))
    layout.add_argument("--row-height", type=_wrap_validator(positive_int))
    layout.add_argument("--gap", type=int)
    layout.add_argument("--columns", type=_wrap_validator(positive_int))


def build_arg_parser() -> argparse.ArgumentParser:
    """Construct the argument parser for the command-line interface."""
    p = argparse.ArgumentParser(
        prog="portfolio-builder",
        description="Image variants and grid layouts for photo portfolios",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  portfolio-builder process -i photos -o dist/images\n"
            "  portfolio-builder process --force --widths 480,1200\n"
            "  portfolio-builder validate content/projects/trip/layout.toml\n"
            "  portfolio-builder layout --mode grid --columns 4 a.jpg b.jpg"
        ),
    )
    p.add_argument(
        "--version", action="version",
        version=f"%(prog)s {resolve_project_version()}")

    cfg = p.add_argument_group("config")
    cfg.add_argument(
        "--config", type=str,
        help="Path to config.toml file")
    cfg.add_argument(
        "--validate-config-only", action="store_true",
        help="Validate config file and exit")
    cfg.add_argument(
        "--verbose", "-v", action="store_true",
        help="Enable debug logging")

    sub = p.add_subparsers(dest="command")
    _add_process_parser(sub)
    _add_layout_parsers(sub)
    return p


def log_parameters(cfg: pb_config.PortfolioConfig) -> None:
    """Log the effective processing parameters."""
    logger.info("Input Directory: %s", cfg.paths.input_dir)
    logger.info("Output Directory: %s", cfg.paths.output_dir)
    logger.info("Widths: %s", cfg.variants.widths)
    logger.info("Format: %s (quality %d)", cfg.variants.format,
                cfg.variants.quality)
    logger.info("Thumbnails: %s",
                f"{cfg.variants.thumbnail_width}px"
                if cfg.variants.generate_thumbnails else "Disabled")
    logger.info("Force: %s", "Enabled" if cfg.variants.force else "Disabled")
    logger.info("Workers: %s", cfg.batch.workers or "auto")


def run_process(cfg: pb_config.PortfolioConfig) -> int:
    """Process every photo in the configured input tree."""
    input_dir = validate_input_dir(cfg.paths.input_dir)
    log_parameters(cfg)

    jobs = build_jobs(input_dir, Path(cfg.paths.output_dir))
    if not jobs:
        logger.warning("No images found in %s", input_dir)
        return 0

    report = process_batch(
        jobs,
        VariantProcessor(cfg.variants),
        workers=cfg.batch.workers,
        stop_on_error=cfg.batch.stop_on_error,
        progress=cfg.batch.progress,
    )
    logger.info("Done: %d processed, %d cached, %d failed",
                report.processed, report.skipped, len(report.failures))
    return 0 if report.ok else 1


def run_validate(layout_path: str) -> int:
    """Validate both grids of a layout file."""
    path = validate_layout_file(layout_path)
    try:
        layout = load_layout(path)
    except ValidationError as exc:
        logger.error("Malformed layout %s: %s", path, exc)
        return 1

    try:
        validate_layout(layout)
    except LayoutValidationError as exc:
        logger.error("Invalid layout %s: %s", path, exc)
        return 1

    logger.info("Layout %s is valid (%d desktop, %d mobile placements)",
                path, len(layout.placements), len(layout.mobile_placements))
    return 0


def run_layout(images: Sequence[str], cfg: pb_config.PortfolioConfig) -> int:
    """Compute a packing layout for ``images`` and print it as JSON."""
    sources = [FileSource(Path(image)) for image in images]
    try:
        dims = load_dimensions(sources)
    except ProcessingError as exc:
        logger.error("Cannot lay out images: %s", exc)
        return 1

    items = compute_layout(cfg.layout.mode, dims, cfg.layout)
    sys.stdout.write(json.dumps([asdict(item) for item in items], indent=2))
    sys.stdout.write("\n")
    return 0


def run_from_args(args: argparse.Namespace) -> int:
    """Dispatch a parsed command line and return an exit code."""
    set_verbosity(verbose=args.verbose)

    base_cfg: pb_config.PortfolioConfig | None = None
    if args.config:
        base_cfg = pb_config.ConfigLoader.load(args.config)
        logger.info("Loaded config from: %s", args.config)
        if args.validate_config_only:
            logger.info("Config %s validated successfully.", args.config)
            return 0

    cfg = pb_config.build_config_from_cli(vars(args), base_config=base_cfg)

    if args.command == "process":
        return run_process(cfg)
    if args.command == "validate":
        return run_validate(args.layout)
    if args.command == "layout":
        return run_layout(args.images, cfg)
    msg = f"Unknown command: {args.command!r}"
    raise ValueError(msg)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command-line interface."""
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    if args.command is None and not args.validate_config_only:
        parser.error("a command is required: process, validate, or layout")
    if args.validate_config_only and not args.config:
        parser.error("--validate-config-only requires --config")

    try:
        return run_from_args(args)
    except (FileNotFoundError, ValueError) as exc:
        logger.error("%s", exc)
        return 1


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
