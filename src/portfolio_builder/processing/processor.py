"""
Content-addressed variant generation.

``VariantProcessor.process`` hashes a source, skips all work when every
expected output already exists at the destination, and otherwise decodes
the source once and writes each configured width plus the thumbnail.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from portfolio_builder.config import VariantConfig
from portfolio_builder.errors import DecodeError, VariantWriteError
from portfolio_builder.logging_utils import logger
from portfolio_builder.processing.hashing import compute_hash_id
from portfolio_builder.processing.imaging import (
    encode_image,
    load_image,
    resize_to_width,
    to_encodable,
)
from portfolio_builder.processing.naming import OutputTarget, expected_outputs

if TYPE_CHECKING:  # pragma: no cover
    from PIL import Image

    from portfolio_builder.processing.destinations import ImageDestination
    from portfolio_builder.processing.sources import ImageSource


@dataclass(slots=True)
class ProcessResult:
    """Outcome of processing one source image."""

    source_name: str
    hash_id: str
    skipped: bool = False
    written: list[str] = field(default_factory=list)


class VariantProcessor:
    """
    Generate resized, re-encoded variants for source images.

    The processor holds no per-image state, so a single instance can be
    shared between worker threads.
    """

    def __init__(self, config: VariantConfig | None = None) -> None:
        self.config = config or VariantConfig.model_validate({})

    def expected_outputs(self, hash_id: str) -> list[OutputTarget]:
        """Return the outputs this processor writes for ``hash_id``."""
        return expected_outputs(hash_id, self.config)

    def is_cached(self, hash_id: str, destination: ImageDestination) -> bool:
        """Return True when every expected output already exists."""
        return all(
            destination.exists(target.name)
            for target in self.expected_outputs(hash_id)
        )

    def decode(self, source: ImageSource) -> Image.Image:
        """Decode the source image. Separate so callers can observe it."""
        return load_image(source)

    def process(
        self,
        source: ImageSource,
        destination: ImageDestination,
        *,
        force: bool | None = None,
    ) -> ProcessResult:
        """
        Ensure all variants of ``source`` exist at ``destination``.

        Args:
            source: Image to process.
            destination: Where variants are written.
            force: Regenerate even when outputs exist. Defaults to the
                configured ``force`` flag.

        Returns:
            A ProcessResult describing whether work was skipped and which
            names were written.

        Raises:
            SourceReadError: The source could not be read.
            DecodeError: The source is not a decodable image.
            VariantWriteError: A variant failed to resize, encode, or
                write. Variants written before the failure are kept.

        """
        force = self.config.force if force is None else force
        hash_id = compute_hash_id(source)
        result = ProcessResult(source_name=source.name, hash_id=hash_id)

        if not force and self.is_cached(hash_id, destination):
            logger.debug("Skipping %s (%s): all variants present",
                         source.name, hash_id)
            result.skipped = True
            return result

        decoded = self.decode(source)
        try:
            img = to_encodable(decoded, self.config.format)
        except (OSError, ValueError) as exc:
            decoded.close()
            raise DecodeError(source.name, "decode", str(exc)) from exc

        try:
            for target in self.expected_outputs(hash_id):
                self._write_target(img, target, source, destination)
                result.written.append(target.name)
        finally:
            img.close()
            decoded.close()
        return result

    def _write_target(
        self,
        img: Image.Image,
        target: OutputTarget,
        source: ImageSource,
        destination: ImageDestination,
    ) -> None:
        """
        Resize, encode, and write a single output.

        ``img`` is already in an encoder-ready RGB or RGBA mode, so LANCZOS
        resampling applies even for palette and bilevel sources.
        """
        cfg = self.config
        try:
            resized = resize_to_width(img, target.width)
        except (OSError, ValueError) as exc:
            raise VariantWriteError(
                source.name, "resize", str(exc), target=target.name,
            ) from exc

        try:
            payload = encode_image(resized, cfg.format, cfg.quality)
        except (OSError, ValueError, KeyError) as exc:
            raise VariantWriteError(
                source.name, "encode", str(exc), target=target.name,
            ) from exc

        try:
            with destination.create(target.name) as handle:
                handle.write(payload)
        except OSError as exc:
            raise VariantWriteError(
                source.name, "write", str(exc), target=target.name,
            ) from exc

        logger.debug("Wrote %s (%dx%d, %d bytes)", target.name,
                     resized.width, resized.height, len(payload))


__all__ = ["ProcessResult", "VariantProcessor"]
