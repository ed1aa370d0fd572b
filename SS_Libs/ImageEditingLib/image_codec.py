"""
Image loading, wrapping and saving helpers for Sculpt Studio.

Functions:
    load_image_record: Read an image file into an ImageRecord
    result_mime_type: Pick the MIME type to label a result with
    to_data_url: Wrap result bytes as a base64 data URL
    decode_image: Decode image bytes into an RGBA PIL image
    apply_result: Decode a result image and attach it to its record
    save_result: Write a result image next to a chosen directory
"""

import base64
from io import BytesIO
from pathlib import Path
from typing import Any

from PIL import Image

from SS_Libs.ImageEditingLib.image_models import ImageRecord, SourceImage
from SS_Libs.constants import (
    IMAGE_MIME_PREFIX,
    DEFAULT_RESULT_MIME_TYPE,
    RESULT_FILE_PREFIX,
    SUPPORTED_STANDARD_IMAGES,
)


def decode_image(data: bytes) -> Any:
    """
    Decode encoded image bytes.

    Args:
        data: PNG/JPEG/... bytes

    Returns:
        A PIL Image in RGBA mode
    """
    with Image.open(BytesIO(data)) as image:
        return image.convert("RGBA")


def load_image_record(path: Path) -> ImageRecord:
    """
    Load an image file for editing.

    Args:
        path: Path of the image file

    Returns:
        ImageRecord with the encoded source and decoded pixels

    Raises:
        ValueError: If the file extension is not a supported image format
        OSError: If the file cannot be read or decoded
    """
    path = Path(path)
    if path.suffix.lower() not in SUPPORTED_STANDARD_IMAGES:
        raise ValueError(f"Unsupported image format: {path.suffix}")

    source = SourceImage.from_path(path)
    return ImageRecord(path=path, source=source, original=decode_image(source.data))


def apply_result(record: ImageRecord, result: bytes) -> Any:
    """
    Attach a model result to the record it was produced for.

    Args:
        record: The loaded image the result belongs to
        result: Encoded result image bytes

    Returns:
        The decoded result as an RGBA PIL image

    Raises:
        OSError: If the bytes cannot be decoded; the record keeps its previous result
    """
    image = decode_image(result)
    record.result = result
    return image


def result_mime_type(source_mime_type: str) -> str:
    if source_mime_type.startswith(IMAGE_MIME_PREFIX):
        return source_mime_type
    return DEFAULT_RESULT_MIME_TYPE


def to_data_url(result: bytes, source_mime_type: str) -> str:
    """Wrap raw result bytes with the MIME type of the source (PNG if not an image type)."""
    encoded = base64.b64encode(result).decode("ascii")
    return f"data:{result_mime_type(source_mime_type)};base64,{encoded}"


def save_result(result: bytes, source_path: Path, output_dir: Path) -> Path:
    """
    Save result bytes to disk with the studio file name prefix.

    Args:
        result: Encoded result image bytes
        source_path: Path of the original upload (its name is reused)
        output_dir: Directory to write into

    Returns:
        Path of the written file

    Raises:
        OSError: If the directory does not exist or is not a directory
    """
    if not output_dir.exists():
        raise OSError(f"Output directory does not exist: {output_dir}")

    if not output_dir.is_dir():
        raise OSError(f"Output path is not a directory: {output_dir}")

    save_path = output_dir / f"{RESULT_FILE_PREFIX}{Path(source_path).name}"
    save_path.write_bytes(result)
    return save_path
