"""
ImageEditingLib - Image loading, saving and the editor window

This module provides the source/result image containers and helpers
for the Sculpt Studio project. The PyQt5 editor window lives in
sculpt_editor_window and is imported on demand.
"""

from SS_Libs.ImageEditingLib.image_models import ImageRecord, SourceImage
from SS_Libs.ImageEditingLib.image_codec import (
    apply_result,
    decode_image,
    load_image_record,
    result_mime_type,
    to_data_url,
    save_result,
)

__all__ = [
    "ImageRecord",
    "SourceImage",
    "decode_image",
    "apply_result",
    "load_image_record",
    "result_mime_type",
    "to_data_url",
    "save_result",
]
