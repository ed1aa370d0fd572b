"""
Failure classification for remote model requests.

Remote failures arrive as SDK exceptions (google.genai.errors.APIError
carries `code`, `status`, `message` and the decoded JSON body in
`details`), as plain exceptions with only a message, or as validation
failures raised by this package. `classify_error` maps any of them to an
ErrorKind plus the single message shown to the user.

`is_fallback_trigger` answers a narrower question, asked only around the
primary model call: is this failure an access problem (permission denied or
model not found) that the secondary model might not have?

Classes:
    ErrorKind: Failure taxonomy
    ClassifiedError: (kind, message) pair
    ImageRequestError: Terminal failure of a submission
    SubmissionRejected: Submission refused before any call was made
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

QUOTA_MESSAGE = (
    "You have exceeded your API usage quota. Please check your plan and "
    "billing details and try again later."
)
PERMISSION_DENIED_MESSAGE = (
    "API permission denied. The API key provided does not have access to the "
    "required models. Please check your Google Cloud project settings."
)
MODEL_UNAVAILABLE_MESSAGE = (
    "The requested image model is not available. Please check which models "
    "your API key can access and try again."
)
SAFETY_BLOCKED_MESSAGE = (
    "Image processing was blocked due to safety restrictions. Please try a "
    "different image or directive."
)
NO_IMAGE_MESSAGE = (
    "No image data returned from API. The model may not have been able to "
    "process this specific request."
)
GENERIC_MESSAGE = "An unexpected error occurred with the API. Please try again."

_QUOTA_TERMS = ("quota", "resource_exhausted", "resourceexhausted", "429")
_PERMISSION_TERMS = ("permission_denied", "403")
_NOT_FOUND_TERMS = ("not_found", "404")


class ErrorKind(Enum):
    SAFETY_BLOCKED = "safety_blocked"
    QUOTA = "quota"
    PERMISSION_DENIED = "permission_denied"
    MODEL_UNAVAILABLE = "model_unavailable"
    MALFORMED = "malformed"
    UNKNOWN = "unknown"


FALLBACK_KINDS = frozenset({ErrorKind.PERMISSION_DENIED, ErrorKind.MODEL_UNAVAILABLE})


def malformed_message(reason: str) -> str:
    return (
        f"Image processing failed. Reason: {reason}. Please adjust the image "
        f"or directive and try again."
    )


@dataclass(frozen=True)
class ClassifiedError:
    kind: ErrorKind
    message: str


class ImageRequestError(Exception):
    """
    A submission failed.

    Attributes:
        kind: ErrorKind of the failure
        message: User-facing message
        reason: Raw block/finish reason reported by the model, if any
    """

    def __init__(self, kind: ErrorKind, message: str, reason: Optional[str] = None):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.reason = reason


class SubmissionRejected(Exception):
    """The submission was refused before anything was sent."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


def _signal_text(error: BaseException) -> str:
    """Lower-cased text of every signal an exception carries."""
    pieces = [str(error)]
    for attr in ("message", "status", "code", "details"):
        value = getattr(error, attr, None)
        if value is not None:
            pieces.append(str(value))
    return " ".join(pieces).lower()


def _payload_message(error: BaseException) -> Optional[str]:
    """Most specific message string in the structured payload, if any."""
    details: Any = getattr(error, "details", None)
    if isinstance(details, dict):
        inner = details.get("error", details)
        if isinstance(inner, dict) and isinstance(inner.get("message"), str) and inner["message"]:
            return inner["message"]

    message = getattr(error, "message", None)
    if isinstance(message, str) and message:
        return message
    return None


def _matches(text: str, terms) -> bool:
    return any(term in text for term in terms)


def _access_kind(text: str) -> Optional[ErrorKind]:
    if _matches(text, _PERMISSION_TERMS):
        return ErrorKind.PERMISSION_DENIED
    if _matches(text, _NOT_FOUND_TERMS):
        return ErrorKind.MODEL_UNAVAILABLE
    return None


def is_fallback_trigger(error: BaseException) -> bool:
    """
    Decide whether a primary-model failure should be retried on the secondary model.

    Args:
        error: Exception raised by the primary call

    Returns:
        True for permission-denied and model-not-found failures
    """
    if isinstance(error, ImageRequestError):
        return error.kind in FALLBACK_KINDS
    return _access_kind(_signal_text(error)) in FALLBACK_KINDS


def classify_error(error: BaseException) -> ClassifiedError:
    """
    Map a terminal failure to an ErrorKind and a user-facing message.

    Quota is checked first, then access problems, then the most specific
    message the failure carries.

    Args:
        error: Exception that ended the submission

    Returns:
        ClassifiedError
    """
    if isinstance(error, ImageRequestError):
        return ClassifiedError(error.kind, error.message)

    text = _signal_text(error)

    if _matches(text, _QUOTA_TERMS):
        return ClassifiedError(ErrorKind.QUOTA, QUOTA_MESSAGE)

    access_kind = _access_kind(text)
    if access_kind is ErrorKind.PERMISSION_DENIED:
        return ClassifiedError(access_kind, PERMISSION_DENIED_MESSAGE)
    if access_kind is ErrorKind.MODEL_UNAVAILABLE:
        return ClassifiedError(access_kind, MODEL_UNAVAILABLE_MESSAGE)

    message = _payload_message(error) or str(error) or GENERIC_MESSAGE
    return ClassifiedError(ErrorKind.UNKNOWN, message)
