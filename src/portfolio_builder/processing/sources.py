"""
Readable origins for source photographs.

Anything that can hand out a fresh binary stream and a display name can
feed the variant pipeline. The processor opens a source twice (once to
hash, once to decode), so ``open`` must return an independent stream on
every call.
"""

from __future__ import annotations

import io
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Protocol, runtime_checkable


@runtime_checkable
class ImageSource(Protocol):
    """Protocol for a readable source image."""

    @property
    def name(self) -> str:
        """Return a human readable name used in logs and errors."""

    def open(self) -> BinaryIO:
        """Open a new readable binary stream positioned at the start."""


@dataclass(frozen=True, slots=True)
class FileSource:
    """Source image stored on the local filesystem."""

    path: Path

    @property
    def name(self) -> str:
        """Return the file name without its directory."""
        return Path(self.path).name

    def open(self) -> BinaryIO:
        """Open the file for binary reading."""
        return Path(self.path).open("rb")


@dataclass(frozen=True, slots=True)
class BytesSource:
    """
    Source image held in memory.

    Used for photos received through an upload form, where the payload is
    already buffered and the display name is the client supplied filename.
    """

    data: bytes
    filename: str

    @property
    def name(self) -> str:
        """Return the client supplied filename."""
        return self.filename

    def open(self) -> BinaryIO:
        """Return a fresh in-memory stream over the payload."""
        return io.BytesIO(self.data)


__all__ = ["BytesSource", "FileSource", "ImageSource"]
