"""
Request orchestration with two-tier model fallback.

A submission is sent to the primary (highest quality) model first. If that
call fails because the credential cannot reach the model, or the model does
not exist, the same parts are sent once to the secondary model without the
output size hint. Every other failure ends the submission. A response
without an inline image is inspected for a block or finish reason so the
user learns why nothing came back.

Classes:
    ImageRequestOrchestrator: Issues the call chain for one submission

Functions:
    extract_image: First inline image payload of the first candidate
    validate_response: Raise the failure that explains a missing image
"""

import base64
import logging
from typing import Any, Callable, List, Optional

from SS_Libs.RequestLib.error_classifier import (
    ErrorKind,
    ImageRequestError,
    SAFETY_BLOCKED_MESSAGE,
    NO_IMAGE_MESSAGE,
    classify_error,
    is_fallback_trigger,
    malformed_message,
)
from SS_Libs.RequestLib.model_client import GeminiModelClient, ModelClient
from SS_Libs.RequestLib.prompt_builder import build_parts, image_size_for
from SS_Libs.RequestLib.request_models import RequestPart, RequestPayload
from SS_Libs.config import StudioConfig
from SS_Libs.constants import (
    PRIMARY_MODEL,
    SECONDARY_MODEL,
    FINISH_REASON_STOP,
    BLOCK_REASON_SAFETY,
)

logger = logging.getLogger(__name__)

ClientFactory = Callable[[str], ModelClient]


def _reason_text(reason: Any) -> Optional[str]:
    """Normalize an SDK enum or plain string reason to its name."""
    if reason is None:
        return None
    value = getattr(reason, "value", reason)
    text = str(value)
    return text or None


def _first_candidate(response: Any) -> Any:
    candidates = getattr(response, "candidates", None) or []
    return candidates[0] if candidates else None


def extract_image(response: Any) -> Optional[bytes]:
    """
    Find the result image in a response.

    Args:
        response: Model response

    Returns:
        Raw image bytes of the first inline image part, or None
    """
    candidate = _first_candidate(response)
    content = getattr(candidate, "content", None)
    for part in getattr(content, "parts", None) or []:
        inline_data = getattr(part, "inline_data", None)
        data = getattr(inline_data, "data", None)
        if data:
            if isinstance(data, str):
                data = base64.b64decode(data)
            return data
    return None


def validate_response(response: Any) -> None:
    """
    Explain a response that carried no image.

    Raises:
        ImageRequestError: Always; SAFETY_BLOCKED or MALFORMED when the model
            reported a reason, UNKNOWN ("no image returned") otherwise
    """
    feedback = getattr(response, "prompt_feedback", None)
    block_reason = _reason_text(getattr(feedback, "block_reason", None))
    if block_reason:
        if block_reason.upper() == BLOCK_REASON_SAFETY:
            raise ImageRequestError(ErrorKind.SAFETY_BLOCKED, SAFETY_BLOCKED_MESSAGE, block_reason)
        raise ImageRequestError(ErrorKind.MALFORMED, malformed_message(block_reason), block_reason)

    finish_reason = _reason_text(getattr(_first_candidate(response), "finish_reason", None))
    if finish_reason and finish_reason.upper() != FINISH_REASON_STOP:
        raise ImageRequestError(ErrorKind.MALFORMED, malformed_message(finish_reason), finish_reason)

    raise ImageRequestError(ErrorKind.UNKNOWN, NO_IMAGE_MESSAGE)


class ImageRequestOrchestrator:
    """
    Runs the primary/secondary call chain for a submission.

    Example:
        >>> orchestrator = ImageRequestOrchestrator()
        >>> payload = RequestPayload(source_image=source, quality_tier=QualityTier.MUSEUM)
        >>> image_bytes = orchestrator.process_image(payload, api_key)
    """

    def __init__(
        self,
        client_factory: ClientFactory = GeminiModelClient,
        primary_model: str = PRIMARY_MODEL,
        secondary_model: str = SECONDARY_MODEL,
    ):
        self._client_factory = client_factory
        self.primary_model = primary_model
        self.secondary_model = secondary_model

    @classmethod
    def from_config(cls, config: StudioConfig, client_factory: ClientFactory = GeminiModelClient) -> "ImageRequestOrchestrator":
        return cls(
            client_factory=client_factory,
            primary_model=config.primary_model,
            secondary_model=config.secondary_model,
        )

    def process_image(self, payload: RequestPayload, api_key: str) -> bytes:
        """
        Issue a submission and return the result image.

        Args:
            payload: What to send
            api_key: Credential for the remote model

        Returns:
            Raw encoded bytes of the result image

        Raises:
            ImageRequestError: Classified terminal failure with a user-facing message
        """
        parts = build_parts(payload)
        image_size = image_size_for(payload)
        logger.info(
            f"Submitting {payload.effective_mode.value} request "
            f"(tier={payload.quality_tier.value}, mask={payload.mask_image is not None})"
        )

        try:
            client = self._client_factory(api_key)
            return self._generate_with_fallback(client, parts, image_size)
        except Exception as e:
            classified = classify_error(e)
            logger.error(f"Image request failed ({classified.kind.name}): {e}")
            if isinstance(e, ImageRequestError):
                raise
            raise ImageRequestError(classified.kind, classified.message) from e

    def _generate_with_fallback(
        self,
        client: ModelClient,
        parts: List[RequestPart],
        image_size: Optional[str],
    ) -> bytes:
        try:
            return self._generate(client, self.primary_model, parts, image_size)
        except Exception as e:
            if not is_fallback_trigger(e):
                raise
            logger.warning(
                f"{self.primary_model} is not accessible ({e}); "
                f"falling back to {self.secondary_model}"
            )

        return self._generate(client, self.secondary_model, parts, None)

    def _generate(
        self,
        client: ModelClient,
        model: str,
        parts: List[RequestPart],
        image_size: Optional[str],
    ) -> bytes:
        response = client.generate(model, parts, image_size)
        image = extract_image(response)
        if image is None:
            validate_response(response)
        logger.info(f"Received {len(image)} bytes from {model}")
        return image
