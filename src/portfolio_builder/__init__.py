"""Public package exports for the Portfolio Builder."""

from __future__ import annotations

from .config import PortfolioConfig, VariantConfig
from .errors import LayoutValidationError, ProcessingError
from .layouts import GalleryLayout, validate_layout
from .processing import VariantProcessor, process_batch

__all__ = [
    "GalleryLayout",
    "LayoutValidationError",
    "PortfolioConfig",
    "ProcessingError",
    "VariantConfig",
    "VariantProcessor",
    "process_batch",
    "validate_layout",
]
