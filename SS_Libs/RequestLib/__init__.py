"""
RequestLib - Remote image-editing requests

This module assembles prompts, sends submissions to the remote image
models with a single fallback hop, validates responses and classifies
failures into user-facing messages.
"""

from SS_Libs.RequestLib.error_classifier import (
    ErrorKind,
    ClassifiedError,
    ImageRequestError,
    SubmissionRejected,
    classify_error,
    is_fallback_trigger,
)
from SS_Libs.RequestLib.request_models import (
    EditMode,
    QualityTier,
    RequestPart,
    RequestPayload,
    validate_submission,
)
from SS_Libs.RequestLib.prompt_builder import build_prompt, build_parts, image_size_for
from SS_Libs.RequestLib.model_client import ModelClient, GeminiModelClient
from SS_Libs.RequestLib.request_orchestrator import (
    ImageRequestOrchestrator,
    extract_image,
    validate_response,
)
from SS_Libs.RequestLib.submission_gate import SubmissionGate

__all__ = [
    "ErrorKind",
    "ClassifiedError",
    "ImageRequestError",
    "SubmissionRejected",
    "classify_error",
    "is_fallback_trigger",
    "EditMode",
    "QualityTier",
    "RequestPart",
    "RequestPayload",
    "validate_submission",
    "build_prompt",
    "build_parts",
    "image_size_for",
    "ModelClient",
    "GeminiModelClient",
    "ImageRequestOrchestrator",
    "extract_image",
    "validate_response",
    "SubmissionGate",
]
