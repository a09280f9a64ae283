"""
Parallel batch processing of source images.

Each image is independent, so jobs run in a bounded thread pool sized to
the CPU count by default. Pillow releases the GIL while resizing and
encoding, which keeps the pool CPU bound rather than lock bound.
"""

from __future__ import annotations

import os
from concurrent.futures import (
    FIRST_COMPLETED,
    Future,
    ThreadPoolExecutor,
    wait,
)
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from tqdm import tqdm

from portfolio_builder.constants import SOURCE_EXTENSIONS, THUMBS_DIR_NAME
from portfolio_builder.errors import ProcessingError
from portfolio_builder.logging_utils import logger
from portfolio_builder.processing.destinations import FileDestination
from portfolio_builder.processing.sources import FileSource

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Iterable

    from portfolio_builder.processing.destinations import ImageDestination
    from portfolio_builder.processing.processor import (
        ProcessResult,
        VariantProcessor,
    )
    from portfolio_builder.processing.sources import ImageSource


@dataclass(frozen=True, slots=True)
class BatchJob:
    """A source image paired with the destination for its variants."""

    source: ImageSource
    destination: ImageDestination


@dataclass(slots=True)
class BatchReport:
    """Aggregated outcome of a batch run."""

    results: list[ProcessResult] = field(default_factory=list)
    failures: list[ProcessingError] = field(default_factory=list)
    stopped: bool = False

    @property
    def ok(self) -> bool:
        """Return True when no image failed."""
        return not self.failures

    @property
    def processed(self) -> int:
        """Count images whose variants were (re)generated."""
        return sum(1 for r in self.results if not r.skipped)

    @property
    def skipped(self) -> int:
        """Count images served entirely from existing outputs."""
        return sum(1 for r in self.results if r.skipped)


def default_worker_count() -> int:
    """Return one worker per CPU core."""
    return os.cpu_count() or 1


def process_batch(
    jobs: Iterable[BatchJob],
    processor: VariantProcessor,
    *,
    workers: int | None = None,
    stop_on_error: bool = False,
    progress: bool = False,
) -> BatchReport:
    """
    Process ``jobs`` concurrently and collect per-image outcomes.

    A failing image never affects the others. With ``stop_on_error`` the
    jobs that have not started yet are cancelled after the first failure;
    jobs already running finish normally so their outputs are complete.
    """
    job_list = list(jobs)
    report = BatchReport()
    if not job_list:
        return report

    max_workers = workers or default_worker_count()
    bar = tqdm(total=len(job_list), desc="Processing images",
               disable=not progress)
    try:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            futures: dict[Future[ProcessResult], BatchJob] = {
                pool.submit(processor.process, job.source, job.destination): job
                for job in job_list
            }
            pending = set(futures)
            while pending:
                done, pending = wait(
                    pending,
                    return_when=FIRST_COMPLETED,
                )
                for future in done:
                    bar.update(1)
                    _collect(future, futures[future], report)
                if stop_on_error and report.failures and pending:
                    report.stopped = True
                    for future in pending:
                        future.cancel()
                    pending = {f for f in pending if not f.cancelled()}
    finally:
        bar.close()

    if report.stopped:
        logger.warning("Batch stopped after first failure: %d of %d images "
                       "completed", len(report.results), len(job_list))
    return report


def _collect(
    future: Future[ProcessResult],
    job: BatchJob,
    report: BatchReport,
) -> None:
    """
    Record the outcome of a finished future in ``report``.

    Exceptions outside the ProcessingError family are wrapped so every
    failure still names its source image.
    """
    try:
        result = future.result()
    except ProcessingError as exc:
        logger.error("Failed to process %s: %s", exc.source_name, exc)
        report.failures.append(exc)
        return
    except Exception as exc:
        wrapped = ProcessingError(
            job.source.name, "process", f"{type(exc).__name__}: {exc}",
        )
        wrapped.__cause__ = exc
        logger.exception("Unexpected error processing %s", job.source.name)
        report.failures.append(wrapped)
        return
    report.results.append(result)
    if result.skipped:
        logger.debug("Cached: %s (%s)", result.source_name, result.hash_id)
    else:
        logger.info("Processed %s -> %s", result.source_name, result.hash_id)


def discover_images(input_dir: Path) -> list[Path]:
    """
    Return source images under ``input_dir`` in a stable order.

    Hidden files and directories (including generated ``.thumbs``) are
    skipped.
    """
    root = Path(input_dir)
    found: list[Path] = []
    for path in root.rglob("*"):
        rel_parts = path.relative_to(root).parts
        if any(part.startswith(".") for part in rel_parts):
            continue
        if path.is_file() and path.suffix.lower() in SOURCE_EXTENSIONS:
            found.append(path)
    return sorted(found)


def build_jobs(
    input_dir: Path,
    output_dir: Path,
    *,
    thumbs_root: Path | None = None,
) -> list[BatchJob]:
    """
    Pair every discovered image with a mirrored output directory.

    ``photos/trip/a.jpg`` writes variants under ``output/trip`` and its
    thumbnail under ``output/trip/.thumbs`` unless ``thumbs_root`` is
    given, in which case thumbnails go to ``thumbs_root/trip/.thumbs``.
    """
    root = Path(input_dir)
    jobs = []
    for path in discover_images(root):
        rel_dir = path.parent.relative_to(root)
        dest_root = Path(output_dir) / rel_dir
        dest_thumbs = (
            Path(thumbs_root) / rel_dir / THUMBS_DIR_NAME
            if thumbs_root is not None
            else None
        )
        jobs.append(
            BatchJob(
                source=FileSource(path),
                destination=FileDestination(dest_root, dest_thumbs),
            ),
        )
    return jobs


__all__ = [
    "BatchJob",
    "BatchReport",
    "build_jobs",
    "default_worker_count",
    "discover_images",
    "process_batch",
]
