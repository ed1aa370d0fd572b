"""
Remote model gateway.

The orchestrator talks to a ModelClient with neutral RequestParts; the
Gemini implementation turns them into google-genai types and returns the SDK
response object untouched. Responses are only ever read by attribute
(`candidates`, `content.parts`, `inline_data.data`, `finish_reason`,
`prompt_feedback.block_reason`), so tests can substitute plain objects.
"""

import logging
from typing import Any, List, Optional

from google import genai
from google.genai import types

from SS_Libs.RequestLib.request_models import RequestPart
from SS_Libs.constants import REQUEST_TIMEOUT_MS

logger = logging.getLogger(__name__)


class ModelClient:
    """Interface for issuing one generate call to a named model."""

    def generate(self, model: str, parts: List[RequestPart], image_size: Optional[str] = None) -> Any:
        """
        Issue one request.

        Args:
            model: Remote model name
            parts: Ordered request parts
            image_size: Requested output size class, or None for the model default

        Returns:
            The response object
        """
        raise NotImplementedError


class GeminiModelClient(ModelClient):
    """ModelClient backed by google-genai."""

    def __init__(self, api_key: str, timeout_ms: int = REQUEST_TIMEOUT_MS):
        if not api_key:
            raise ValueError("api_key is required")
        self._client = genai.Client(api_key=api_key, http_options={"timeout": timeout_ms})

    def generate(self, model: str, parts: List[RequestPart], image_size: Optional[str] = None) -> Any:
        contents = [self._to_genai_part(part) for part in parts]

        config = None
        if image_size:
            config = types.GenerateContentConfig(
                image_config=types.ImageConfig(image_size=image_size),
            )

        logger.debug(f"generate_content model={model} parts={len(contents)} image_size={image_size}")
        return self._client.models.generate_content(
            model=model,
            contents=contents,
            config=config,
        )

    @staticmethod
    def _to_genai_part(part: RequestPart) -> Any:
        if part.is_image:
            return types.Part.from_bytes(data=part.data, mime_type=part.mime_type)
        return types.Part.from_text(text=part.text or "")
