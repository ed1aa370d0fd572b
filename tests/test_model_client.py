"""
Tests for the google-genai backed model client.

Tests cover:
- Client construction with the credential and request timeout
- Conversion of request parts to genai Parts
- Output size config sent only when a size hint is given
"""

import unittest
from unittest import mock

from google.genai import types

from SS_Libs.RequestLib.model_client import GeminiModelClient
from SS_Libs.RequestLib.request_models import RequestPart
from SS_Libs.constants import REQUEST_TIMEOUT_MS

PARTS = [
    RequestPart.from_image(b"\x89PNGsource", "image/jpeg"),
    RequestPart.from_image(b"\x89PNGmask", "image/png"),
    RequestPart.from_text("Restore this photograph."),
]


class TestGeminiModelClient(unittest.TestCase):

    def setUp(self):
        patcher = mock.patch("SS_Libs.RequestLib.model_client.genai.Client")
        self.client_cls = patcher.start()
        self.addCleanup(patcher.stop)
        self.generate_content = self.client_cls.return_value.models.generate_content

    def test_client_built_with_key_and_timeout(self):
        GeminiModelClient("secret")

        self.client_cls.assert_called_once_with(
            api_key="secret",
            http_options={"timeout": REQUEST_TIMEOUT_MS},
        )

    def test_empty_key_rejected(self):
        with self.assertRaises(ValueError):
            GeminiModelClient("")

    def test_parts_converted_in_order(self):
        GeminiModelClient("secret").generate("model-a", PARTS, "2K")

        contents = self.generate_content.call_args.kwargs["contents"]
        self.assertEqual(len(contents), 3)
        for part in contents:
            self.assertIsInstance(part, types.Part)
        self.assertEqual(contents[0].inline_data.data, b"\x89PNGsource")
        self.assertEqual(contents[0].inline_data.mime_type, "image/jpeg")
        self.assertEqual(contents[1].inline_data.mime_type, "image/png")
        self.assertEqual(contents[2].text, "Restore this photograph.")
        self.assertIsNone(contents[2].inline_data)

    def test_size_hint_builds_image_config(self):
        GeminiModelClient("secret").generate("model-a", PARTS, "4K")

        kwargs = self.generate_content.call_args.kwargs
        self.assertEqual(kwargs["model"], "model-a")
        self.assertIsInstance(kwargs["config"], types.GenerateContentConfig)
        self.assertEqual(kwargs["config"].image_config.image_size, "4K")

    def test_no_size_hint_sends_no_config(self):
        GeminiModelClient("secret").generate("model-b", PARTS, None)

        kwargs = self.generate_content.call_args.kwargs
        self.assertEqual(kwargs["model"], "model-b")
        self.assertIsNone(kwargs["config"])

    def test_returns_sdk_response_untouched(self):
        response = object()
        self.generate_content.return_value = response

        self.assertIs(GeminiModelClient("secret").generate("model-a", PARTS[:1]), response)
