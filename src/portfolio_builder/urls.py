"""
URL helpers for the rendering layer.

Rendering only needs a photo's hash ID and the variant configuration to
reference every generated file. Variants live at
``/static/images/{slug}/{hash}/{file}`` and thumbnails at
``/static/images/{slug}/.thumbs/{file}``, optionally behind an external
prefix such as a CDN origin.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from portfolio_builder.constants import STATIC_IMAGES_ROOT, THUMBS_DIR_NAME
from portfolio_builder.processing.naming import (
    thumbnail_filename,
    variant_filenames,
)

if TYPE_CHECKING:  # pragma: no cover
    from portfolio_builder.config import VariantConfig


@dataclass(frozen=True, slots=True)
class ImageUrls:
    """
    Build image URLs for one site.

    ``image_url_prefix`` wins over ``base_url`` when set, so images can be
    served from remote storage while pages stay on the main host.
    """

    base_url: str = ""
    image_url_prefix: str = ""

    def _absolute(self, rel_path: str) -> str:
        root = self.image_url_prefix or self.base_url
        return root.rstrip("/") + rel_path

    def image_path(self, slug: str, hash_id: str, filename: str) -> str:
        """Return the URL of one variant file."""
        return self._absolute(
            f"{STATIC_IMAGES_ROOT}/{slug}/{hash_id}/{filename}",
        )

    def thumbnail_path(self, slug: str, filename: str) -> str:
        """Return the URL of a thumbnail file."""
        return self._absolute(
            f"{STATIC_IMAGES_ROOT}/{slug}/{THUMBS_DIR_NAME}/{filename}",
        )

    def variant_urls(
        self,
        slug: str,
        hash_id: str,
        config: VariantConfig,
    ) -> dict[int, str]:
        """Map each configured width to its variant URL."""
        return {
            width: self.image_path(slug, hash_id, filename)
            for width, filename in variant_filenames(hash_id, config).items()
        }

    def srcset(self, slug: str, hash_id: str, config: VariantConfig) -> str:
        """Return an HTML ``srcset`` value listing widths ascending."""
        urls = self.variant_urls(slug, hash_id, config)
        return ", ".join(f"{urls[w]} {w}w" for w in sorted(urls))

    def thumbnail_url(
        self,
        slug: str,
        hash_id: str,
        config: VariantConfig,
    ) -> str:
        """Return the thumbnail URL for ``hash_id``."""
        return self.thumbnail_path(
            slug,
            thumbnail_filename(hash_id, config.extension),
        )


__all__ = ["ImageUrls"]
