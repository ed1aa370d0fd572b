"""
Image data models for Sculpt Studio.

This module defines the image containers passed between the editor and the
request pipeline.

Classes:
    SourceImage: Encoded bytes of an uploaded image plus its MIME type
    ImageRecord: A loaded source with its decoded pixels and latest result
"""

import base64
import binascii
import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from SS_Libs.constants import IMAGE_MIME_PREFIX, DEFAULT_RESULT_MIME_TYPE


@dataclass(frozen=True)
class SourceImage:
    data: bytes
    mime_type: str

    @classmethod
    def from_path(cls, path: Path) -> "SourceImage":
        mime_type, _ = mimetypes.guess_type(str(path))
        return cls(data=Path(path).read_bytes(), mime_type=mime_type or "application/octet-stream")

    @classmethod
    def from_base64(cls, encoded: str, mime_type: str) -> "SourceImage":
        """
        Decode a base64 payload.

        Raises:
            ValueError: If the payload is not valid base64
        """
        try:
            data = base64.b64decode(encoded, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ValueError(f"Invalid base64 image payload: {e}") from e
        return cls(data=data, mime_type=mime_type)

    @classmethod
    def from_data_url(cls, data_url: str) -> "SourceImage":
        """Parse a "data:<mime>;base64,<payload>" URL."""
        if not data_url.startswith("data:") or "," not in data_url:
            raise ValueError("Not a data URL")

        header, payload = data_url.split(",", 1)
        mime_type = header[len("data:"):].split(";", 1)[0] or DEFAULT_RESULT_MIME_TYPE
        return cls.from_base64(payload, mime_type)

    @property
    def is_image_type(self) -> bool:
        return self.mime_type.startswith(IMAGE_MIME_PREFIX)


@dataclass
class ImageRecord:
    path: Path
    source: SourceImage
    original: Any
    result: Optional[bytes] = None
