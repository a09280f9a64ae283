"""Shared default values for user-facing configuration settings."""
from portfolio_builder.type_defs import ImageFormat, LayoutMode

# Variants
DEFAULT_WIDTHS: tuple[int, ...] = (480, 800, 1200, 1920)
DEFAULT_THUMBNAIL_WIDTH = 300
DEFAULT_GENERATE_THUMBNAILS = True
DEFAULT_FORMAT: ImageFormat = "webp"
DEFAULT_QUALITY = 80
DEFAULT_FORCE = False

# Layout packing
DEFAULT_LAYOUT_MODE: LayoutMode = "justified"
DEFAULT_CONTAINER_WIDTH = 1200
DEFAULT_ROW_HEIGHT = 300
DEFAULT_GAP = 10
DEFAULT_COLUMNS = 3

# Placement grids
DEFAULT_MOBILE_GRID_WIDTH = 6

# Batch processing
DEFAULT_STOP_ON_ERROR = False
DEFAULT_PROGRESS = False

# Paths
DEFAULT_INPUT_DIR = "photos"
DEFAULT_OUTPUT_DIR = "dist/images"
