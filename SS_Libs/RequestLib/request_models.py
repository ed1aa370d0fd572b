"""
Request data models for Sculpt Studio.

Classes:
    EditMode: Whole-image restoration or masked sculpting
    QualityTier: Restoration quality preset
    RequestPart: One ordered part of an outbound model request
    RequestPayload: Everything needed to issue one submission

Functions:
    validate_submission: Pre-flight checks before a payload is built
"""

import base64
import binascii
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from SS_Libs.ImageEditingLib.image_models import SourceImage
from SS_Libs.MaskEditingLib.mask_extractor import strip_data_url_prefix
from SS_Libs.RequestLib.error_classifier import SubmissionRejected
from SS_Libs.constants import (
    MASK_MIME_TYPE,
    IMAGE_SIZE_STANDARD,
    IMAGE_SIZE_HIGH,
    IMAGE_SIZE_MUSEUM,
)


class EditMode(Enum):
    RESTORATION = "restoration"
    SCULPTING = "sculpting"


class QualityTier(Enum):
    STANDARD = "standard"
    HIGH = "high"
    MUSEUM = "museum"

    @property
    def image_size(self) -> str:
        """Requested output size class for this tier."""
        return _IMAGE_SIZES[self]


_IMAGE_SIZES = {
    QualityTier.STANDARD: IMAGE_SIZE_STANDARD,
    QualityTier.HIGH: IMAGE_SIZE_HIGH,
    QualityTier.MUSEUM: IMAGE_SIZE_MUSEUM,
}


@dataclass(frozen=True)
class RequestPart:
    """Either inline image bytes with a MIME type, or free text."""
    text: Optional[str] = None
    data: Optional[bytes] = None
    mime_type: Optional[str] = None

    @classmethod
    def from_text(cls, text: str) -> "RequestPart":
        return cls(text=text)

    @classmethod
    def from_image(cls, data: bytes, mime_type: str) -> "RequestPart":
        return cls(data=data, mime_type=mime_type)

    @property
    def is_image(self) -> bool:
        return self.data is not None


@dataclass(frozen=True)
class RequestPayload:
    """
    One submission to the remote model.

    Attributes:
        source_image: Encoded source bytes and MIME type
        mode: Mode selected in the editor
        quality_tier: Restoration preset (ignored while sculpting)
        directive_text: Free-text user directive (may be empty)
        mask_image: Base64 PNG mask, only when sculpting with strokes
    """
    source_image: SourceImage
    mode: EditMode = EditMode.RESTORATION
    quality_tier: QualityTier = QualityTier.HIGH
    directive_text: str = ""
    mask_image: Optional[str] = None

    def __post_init__(self) -> None:
        if self.mask_image is not None and self.mode is not EditMode.SCULPTING:
            raise ValueError("A mask can only be attached to a sculpting request")

    @property
    def effective_mode(self) -> EditMode:
        """Sculpting only applies when there is a mask to sculpt within."""
        if self.mode is EditMode.SCULPTING and self.mask_image:
            return EditMode.SCULPTING
        return EditMode.RESTORATION

    @property
    def directive(self) -> str:
        return self.directive_text.strip()

    def mask_bytes(self) -> Optional[bytes]:
        """
        Decode the attached mask.

        Raises:
            ValueError: If the mask is not valid base64
        """
        if not self.mask_image:
            return None
        try:
            return base64.b64decode(strip_data_url_prefix(self.mask_image), validate=True)
        except (binascii.Error, ValueError) as e:
            raise ValueError(f"Mask is not valid base64: {e}") from e

    @property
    def mask_mime_type(self) -> str:
        return MASK_MIME_TYPE


def validate_submission(
    api_key: Optional[str],
    source_image: Optional[SourceImage],
    mode: EditMode,
    directive_text: str,
    has_mask: bool,
) -> None:
    """
    Check that a submission can be issued.

    Raises:
        SubmissionRejected: With a user-facing message when it cannot
    """
    if not api_key:
        raise SubmissionRejected("API key is missing. Please provide a key and try again.")

    if source_image is None:
        raise SubmissionRejected("Please upload an image first.")

    if mode is EditMode.SCULPTING and not has_mask and not directive_text.strip():
        raise SubmissionRejected(
            "Please select an area to sculpt or provide a general directive."
        )
