"""
Constants and configuration values for Sculpt Studio.

This module centralizes all constant values, magic numbers, and
configuration settings used throughout the application.
"""

# Remote models
PRIMARY_MODEL = "gemini-3-pro-image-preview"
SECONDARY_MODEL = "gemini-2.5-flash-image"
REQUEST_TIMEOUT_MS = 120000

# Credential environment variables, checked in order
ENV_API_KEY = "GEMINI_API_KEY"
ENV_API_KEY_FALLBACK = "API_KEY"
ENV_PRIMARY_MODEL = "SCULPT_STUDIO_PRIMARY_MODEL"
ENV_SECONDARY_MODEL = "SCULPT_STUDIO_SECONDARY_MODEL"
ENV_LOG_LEVEL = "SCULPT_STUDIO_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "INFO"

# Requested output size class per quality tier
IMAGE_SIZE_STANDARD = "1K"
IMAGE_SIZE_HIGH = "2K"
IMAGE_SIZE_MUSEUM = "4K"

# Mask history
HISTORY_CAPACITY = 20

# Brush (sizes are diameters in raster pixels)
MIN_BRUSH_SIZE = 5
MAX_BRUSH_SIZE = 100
DEFAULT_BRUSH_SIZE = 40
BRUSH_COLOR = (220, 38, 38)
BRUSH_ALPHA = 0.8
BRUSH_SHADOW_ALPHA = 0.4
BRUSH_SHADOW_BLUR = 4

# Binary mask pixel values
MASK_SELECTED = (255, 255, 255, 255)
MASK_UNSELECTED = (0, 0, 0, 0)

# MIME types and formats
MASK_MIME_TYPE = "image/png"
DEFAULT_RESULT_MIME_TYPE = "image/png"
IMAGE_MIME_PREFIX = "image/"
DEFAULT_OUTPUT_FORMAT = "PNG"
RESULT_FILE_PREFIX = "studio-"

# Response signals
FINISH_REASON_STOP = "STOP"
BLOCK_REASON_SAFETY = "SAFETY"

# UI constants
DEFAULT_WINDOW_WIDTH = 1400
DEFAULT_WINDOW_HEIGHT = 850
PREVIEW_MIN_SIZE = 450
PROGRESS_MESSAGE_INTERVAL_MS = 2500

PROGRESS_MESSAGES = [
    "Preparing the source image...",
    "Reading the scene and its lighting...",
    "Reconstructing lost detail...",
    "Balancing color and tone...",
    "Refining textures...",
    "Finishing the result...",
]

# Supported file formats
SUPPORTED_STANDARD_IMAGES = {".png", ".jpg", ".jpeg", ".bmp", ".gif", ".tiff", ".webp"}
