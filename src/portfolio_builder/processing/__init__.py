"""
Content-addressed variant generation.

Sources and destinations abstract the concrete I/O; the processor hashes,
checks for cached outputs, and writes resized variants through them.
"""

from __future__ import annotations

from .batch import (
    BatchJob,
    BatchReport,
    build_jobs,
    default_worker_count,
    discover_images,
    process_batch,
)
from .destinations import (
    FileDestination,
    ImageDestination,
    IndexedDestination,
    MemoryDestination,
)
from .hashing import compute_hash, compute_hash_id, hash_id_for_bytes
from .inspection import PhotoInfo, inspect_photo, integer_ratio, read_size
from .naming import (
    OutputTarget,
    expected_outputs,
    thumbnail_filename,
    variant_filename,
    variant_filenames,
    variant_name,
)
from .processor import ProcessResult, VariantProcessor
from .sources import BytesSource, FileSource, ImageSource

__all__ = [
    "BatchJob",
    "BatchReport",
    "BytesSource",
    "FileDestination",
    "FileSource",
    "ImageDestination",
    "ImageSource",
    "IndexedDestination",
    "MemoryDestination",
    "OutputTarget",
    "PhotoInfo",
    "ProcessResult",
    "VariantProcessor",
    "build_jobs",
    "compute_hash",
    "compute_hash_id",
    "default_worker_count",
    "discover_images",
    "expected_outputs",
    "hash_id_for_bytes",
    "inspect_photo",
    "integer_ratio",
    "process_batch",
    "read_size",
    "thumbnail_filename",
    "variant_filename",
    "variant_filenames",
    "variant_name",
]
