"""
MaskEditingLib - Brush mask editing

This module provides the brush mask engine: coordinate mapping, soft
stroke rendering, the mask raster, bounded undo/redo history and mask
binarization for transport.
"""

from SS_Libs.MaskEditingLib.mask_models import Point, SurfaceBox, Stroke, MaskSnapshot
from SS_Libs.MaskEditingLib.coordinate_mapper import map_to_raster, map_to_display
from SS_Libs.MaskEditingLib.mask_raster import MaskRaster
from SS_Libs.MaskEditingLib.stroke_renderer import StrokeRenderer
from SS_Libs.MaskEditingLib.mask_history import MaskHistory
from SS_Libs.MaskEditingLib.mask_extractor import (
    binarize_mask,
    encode_mask_png,
    extract_mask,
    strip_data_url_prefix,
)
from SS_Libs.MaskEditingLib.mask_edit_session import MaskEditSession

__all__ = [
    "Point",
    "SurfaceBox",
    "Stroke",
    "MaskSnapshot",
    "map_to_raster",
    "map_to_display",
    "MaskRaster",
    "StrokeRenderer",
    "MaskHistory",
    "binarize_mask",
    "encode_mask_png",
    "extract_mask",
    "strip_data_url_prefix",
    "MaskEditSession",
]
