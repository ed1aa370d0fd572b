"""
Pytest configuration and shared fixtures for Sculpt Studio tests.

This module provides shared test fixtures and configuration
used across multiple test modules.
"""

from io import BytesIO
from types import SimpleNamespace

import pytest
from PIL import Image

from SS_Libs.ImageEditingLib.image_models import SourceImage
from SS_Libs.MaskEditingLib.mask_edit_session import MaskEditSession
from SS_Libs.RequestLib.model_client import ModelClient


class FakeModelClient(ModelClient):
    """
    Scripted ModelClient.

    Each call pops the next outcome: an exception is raised, anything else is
    returned as the response. Calls are recorded as (model, parts, image_size).
    """

    def __init__(self, outcomes):
        self.outcomes = list(outcomes)
        self.calls = []

    def generate(self, model, parts, image_size=None):
        self.calls.append((model, parts, image_size))
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


@pytest.fixture
def png_bytes():
    """
    Provide a small encoded PNG image.

    Returns:
        PNG bytes of a 4x3 opaque blue image
    """
    buffer = BytesIO()
    Image.new("RGBA", (4, 3), (0, 0, 255, 255)).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def source_image(png_bytes):
    return SourceImage(data=png_bytes, mime_type="image/png")


@pytest.fixture
def loaded_session():
    """
    Provide a mask session loaded with an 800x600 image, in sculpting mode.

    Returns:
        MaskEditSession with the default 40px brush
    """
    session = MaskEditSession()
    session.load(800, 600)
    session.is_editing = True
    return session


@pytest.fixture
def make_response():
    """
    Provide a factory for model response objects.

    Returns:
        Callable(data=None, finish_reason="STOP", block_reason=None, candidates=True)
    """
    def _make(data=None, finish_reason="STOP", block_reason=None, candidates=True):
        parts = [SimpleNamespace(text="Here is your image.", inline_data=None)]
        if data is not None:
            parts.append(SimpleNamespace(
                text=None,
                inline_data=SimpleNamespace(data=data, mime_type="image/png"),
            ))
        candidate = SimpleNamespace(
            content=SimpleNamespace(parts=parts),
            finish_reason=finish_reason,
        )
        return SimpleNamespace(
            candidates=[candidate] if candidates else None,
            prompt_feedback=SimpleNamespace(block_reason=block_reason),
        )

    return _make


@pytest.fixture
def fake_client_factory():
    """
    Provide a factory that builds a FakeModelClient and remembers it.

    Returns:
        Callable(outcomes) -> (client_factory, holder) where holder["client"]
        is the client created by the orchestrator and holder["api_key"] the
        credential it was created with.
    """
    def _make(outcomes):
        holder = {}

        def factory(api_key):
            holder["api_key"] = api_key
            holder["client"] = FakeModelClient(outcomes)
            return holder["client"]

        return factory, holder

    return _make
