"""
Writable targets for encoded variants.

A destination is addressed by relative names such as
``a1b2c3d4e5f6/a1b2c3d4e5f6-800w.webp`` or ``thumb-a1b2c3d4e5f6.webp``.
Writes are all-or-nothing: the target only becomes visible when the
``create`` block exits without an exception.
"""

from __future__ import annotations

import io
import json
import os
import tempfile
import threading
from contextlib import AbstractContextManager, contextmanager
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING, BinaryIO, Protocol, runtime_checkable

from portfolio_builder.constants import THUMBNAIL_PREFIX, THUMBS_DIR_NAME
from portfolio_builder.logging_utils import logger

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Iterator

_INDEX_VERSION = 1


@runtime_checkable
class ImageDestination(Protocol):
    """Protocol for a target that stores encoded variants by name."""

    def create(self, name: str) -> AbstractContextManager[BinaryIO]:
        """Return a context manager yielding a writable binary stream."""

    def exists(self, name: str) -> bool:
        """Report whether ``name`` already holds committed content."""


def _checked_parts(name: str) -> tuple[str, ...]:
    """Split a relative name, rejecting absolute or escaping paths."""
    rel = PurePosixPath(name)
    if not name or rel.is_absolute() or ".." in rel.parts:
        msg = f"Invalid destination name: {name!r}"
        raise ValueError(msg)
    return rel.parts


@dataclass(frozen=True, slots=True)
class FileDestination:
    """
    Destination backed by a local directory tree.

    Variant names are resolved under ``root``. Thumbnail names (those
    starting with ``thumb-``) are routed to ``thumbs_root``, which
    defaults to ``root/.thumbs``.
    """

    root: Path
    thumbs_root: Path | None = None

    def resolve(self, name: str) -> Path:
        """Map a relative destination name to a filesystem path."""
        parts = _checked_parts(name)
        if name.startswith(THUMBNAIL_PREFIX):
            base = (
                Path(self.thumbs_root)
                if self.thumbs_root is not None
                else Path(self.root) / THUMBS_DIR_NAME
            )
            return base.joinpath(*parts)
        return Path(self.root).joinpath(*parts)

    def exists(self, name: str) -> bool:
        """Return True when the resolved file exists."""
        return self.resolve(name).is_file()

    @contextmanager
    def create(self, name: str) -> Iterator[BinaryIO]:
        """
        Write to a temporary sibling file and move it into place.

        The temporary file is removed if the block raises, so a failed
        write never leaves a truncated variant behind.
        """
        target = self.resolve(name)
        target.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{target.name}.",
            suffix=".tmp",
            dir=target.parent,
        )
        tmp_path = Path(tmp_name)
        try:
            with os.fdopen(fd, "wb") as handle:
                yield handle
            tmp_path.replace(target)
        except BaseException:
            tmp_path.unlink(missing_ok=True)
            raise


class MemoryDestination:
    """Dict-backed destination for uploads and tests."""

    def __init__(self) -> None:
        self.files: dict[str, bytes] = {}
        self._lock = threading.Lock()

    def exists(self, name: str) -> bool:
        """Return True when ``name`` has been committed."""
        with self._lock:
            return name in self.files

    @contextmanager
    def create(self, name: str) -> Iterator[BinaryIO]:
        """Buffer writes and commit them when the block succeeds."""
        _checked_parts(name)
        buffer = io.BytesIO()
        yield buffer
        with self._lock:
            self.files[name] = buffer.getvalue()


class IndexedDestination:
    """
    Destination wrapper that answers existence checks from a key index.

    Intended for backends where probing for a name is expensive. The
    index is a JSON file listing every name committed through this
    wrapper; call :meth:`save` to persist it after a batch.
    """

    def __init__(self, inner: ImageDestination, index_path: Path) -> None:
        self.inner = inner
        self.index_path = Path(index_path)
        self._lock = threading.Lock()
        self._keys = self._load()

    def _load(self) -> set[str]:
        if not self.index_path.is_file():
            return set()
        with self.index_path.open("r", encoding="utf-8") as handle:
            data = json.load(handle)
        if data.get("version") != _INDEX_VERSION:
            logger.debug(
                "Ignoring variant index %s with unknown version %r",
                self.index_path,
                data.get("version"),
            )
            return set()
        return set(data.get("keys", []))

    def __len__(self) -> int:
        with self._lock:
            return len(self._keys)

    def exists(self, name: str) -> bool:
        """Return True when ``name`` is recorded in the index."""
        with self._lock:
            return name in self._keys

    @contextmanager
    def create(self, name: str) -> Iterator[BinaryIO]:
        """Delegate the write and record ``name`` once it is committed."""
        with self.inner.create(name) as handle:
            yield handle
        with self._lock:
            self._keys.add(name)

    def forget(self, name: str) -> None:
        """Drop ``name`` from the index so the next run regenerates it."""
        with self._lock:
            self._keys.discard(name)

    def save(self) -> Path:
        """Atomically write the index file and return its path."""
        with self._lock:
            payload = {"version": _INDEX_VERSION, "keys": sorted(self._keys)}
        self.index_path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.index_path.name}.",
            dir=self.index_path.parent,
        )
        tmp_path = Path(tmp_name)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(payload, handle, indent=2)
            tmp_path.replace(self.index_path)
        except BaseException:
            tmp_path.unlink(missing_ok=True)
            raise
        logger.debug("Saved %d index keys to %s", len(payload["keys"]),
                     self.index_path)
        return self.index_path


__all__ = [
    "FileDestination",
    "ImageDestination",
    "IndexedDestination",
    "MemoryDestination",
]
