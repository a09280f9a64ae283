"""
Constants used internally by the portfolio builder.

These are implementation-level values that should not be overridden
via config files or CLI arguments.
"""

# Packaging
DISTRIBUTION_NAME = "portfolio-builder"

# Logging
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"
LOG_FORMAT_VERBOSE = "%(asctime)s [%(levelname)s] %(threadName)s %(message)s"

# Content addressing
HASH_ID_LENGTH = 12

# Output naming
VARIANT_NAME_TEMPLATE = "{hash_id}-{width}w.{ext}"
THUMBNAIL_PREFIX = "thumb-"
THUMBNAIL_NAME_TEMPLATE = THUMBNAIL_PREFIX + "{hash_id}.{ext}"
THUMBS_DIR_NAME = ".thumbs"

# Encoded format -> file extension
FORMAT_EXTENSIONS = {
    "webp": "webp",
    "jpeg": "jpg",
    "png": "png",
}

# Encoding quality bounds
QUALITY_MIN = 1
QUALITY_MAX = 100

# Source discovery
SOURCE_EXTENSIONS = frozenset({".jpg", ".jpeg", ".png", ".webp"})

# Internal color constants
COLOR_MODE_RGB = "RGB"
COLOR_MODE_RGBA = "RGBA"
COLOR_WHITE = (255, 255, 255)

# Common photographic ratios, (width, height)
COMMON_RATIOS: tuple[tuple[int, int], ...] = (
    (1, 1),
    (3, 2),
    (2, 3),
    (4, 3),
    (3, 4),
    (16, 9),
    (9, 16),
    (5, 4),
    (4, 5),
    (7, 5),
    (5, 7),
)
FALLBACK_RATIO = (3, 2)

# Rendering URLs
STATIC_IMAGES_ROOT = "/static/images"
