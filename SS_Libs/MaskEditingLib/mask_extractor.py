"""
Mask binarization and transport encoding.

The on-screen mask is soft-edged and tinted. The remote model wants a hard
selection instead: every pixel with any alpha becomes opaque white, every
other pixel fully transparent. The result is a standalone PNG, base64
encoded without any data-URL prefix.

Functions:
    binarize_mask: Hard-threshold an RGBA mask array on its alpha channel
    encode_mask_png: Encode a binary mask array as PNG bytes
    extract_mask: Produce the transport-ready mask for a submission (or None)
    strip_data_url_prefix: Drop a "data:<mime>;base64," envelope from base64 text
"""

import base64
from io import BytesIO
from typing import Optional

import numpy as np
from PIL import Image

from SS_Libs.MaskEditingLib.mask_raster import MaskRaster
from SS_Libs.constants import MASK_SELECTED, MASK_UNSELECTED, DEFAULT_OUTPUT_FORMAT


def binarize_mask(pixels: np.ndarray) -> np.ndarray:
    """
    Convert an RGBA mask array into a hard selection.

    Args:
        pixels: uint8 array of shape (H, W, 4)

    Returns:
        New uint8 array of the same shape where selected pixels are
        (255, 255, 255, 255) and all others (0, 0, 0, 0)

    Raises:
        ValueError: If the array is not (H, W, 4)
    """
    if pixels.ndim != 3 or pixels.shape[2] != 4:
        raise ValueError(f"Expected an (H, W, 4) RGBA array, got shape {pixels.shape}")

    selected = pixels[:, :, 3] > 0
    result = np.empty(pixels.shape, dtype=np.uint8)
    result[:] = np.array(MASK_UNSELECTED, dtype=np.uint8)
    result[selected] = np.array(MASK_SELECTED, dtype=np.uint8)
    return result


def encode_mask_png(binary: np.ndarray) -> bytes:
    buffer = BytesIO()
    Image.fromarray(binary).save(buffer, format=DEFAULT_OUTPUT_FORMAT)
    return buffer.getvalue()


def extract_mask(raster: MaskRaster, is_active: bool) -> Optional[str]:
    """
    Produce the mask to transmit with a submission.

    Args:
        raster: The live mask raster
        is_active: True when edit mode is on and a mask has been drawn

    Returns:
        Base64 PNG of the binarized mask, or None when there is nothing to send
    """
    if not is_active:
        return None

    png_bytes = encode_mask_png(binarize_mask(raster.pixels))
    return base64.b64encode(png_bytes).decode("ascii")


def strip_data_url_prefix(encoded: str) -> str:
    """Return the base64 payload of a data URL; plain base64 is returned unchanged."""
    if encoded.startswith("data:") and "," in encoded:
        return encoded.split(",", 1)[1]
    return encoded
