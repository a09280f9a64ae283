"""Content addressing for source photographs."""

from __future__ import annotations

import hashlib
from typing import TYPE_CHECKING

from portfolio_builder.constants import HASH_ID_LENGTH
from portfolio_builder.errors import SourceReadError

if TYPE_CHECKING:  # pragma: no cover
    from portfolio_builder.processing.sources import ImageSource


def compute_hash(source: ImageSource) -> str:
    """
    Return the full hex SHA-256 digest of the source bytes.

    Raises:
        SourceReadError: If the source cannot be opened or read.

    """
    try:
        with source.open() as stream:
            digest = hashlib.file_digest(stream, "sha256")
    except OSError as exc:
        raise SourceReadError(source.name, "read", str(exc)) from exc
    return digest.hexdigest()


def hash_id_from_digest(digest: str) -> str:
    """Truncate a hex digest to the identity length."""
    if len(digest) < HASH_ID_LENGTH:
        msg = f"Digest too short for a hash ID: {digest!r}"
        raise ValueError(msg)
    return digest[:HASH_ID_LENGTH]


def compute_hash_id(source: ImageSource) -> str:
    """Return the 12 character hash ID identifying the source content."""
    return hash_id_from_digest(compute_hash(source))


def hash_id_for_bytes(data: bytes) -> str:
    """Return the hash ID for an in-memory payload."""
    return hash_id_from_digest(hashlib.sha256(data).hexdigest())


__all__ = [
    "compute_hash",
    "compute_hash_id",
    "hash_id_for_bytes",
    "hash_id_from_digest",
]
