"""
Unit tests for config module.
"""

from SS_Libs.config import StudioConfig
from SS_Libs.constants import PRIMARY_MODEL, SECONDARY_MODEL


class TestStudioConfig:

    def test_defaults(self):
        config = StudioConfig()

        assert config.api_key is None
        assert config.primary_model == PRIMARY_MODEL
        assert config.secondary_model == SECONDARY_MODEL
        assert config.log_level == "INFO"

    def test_to_dict_omits_api_key(self):
        data = StudioConfig(api_key="secret").to_dict()

        assert "api_key" not in data
        assert data["primary_model"] == PRIMARY_MODEL

    def test_from_dict_ignores_unknown_keys(self):
        config = StudioConfig.from_dict({"secondary_model": "other", "colour": "red"})

        assert config.secondary_model == "other"

    def test_from_env_prefers_gemini_key(self):
        config = StudioConfig.from_env({"GEMINI_API_KEY": "g-key", "API_KEY": "a-key"})

        assert config.api_key == "g-key"

    def test_from_env_falls_back_to_api_key(self):
        assert StudioConfig.from_env({"API_KEY": "a-key"}).api_key == "a-key"

    def test_from_env_empty(self):
        config = StudioConfig.from_env({})

        assert config.api_key is None
        assert config.primary_model == PRIMARY_MODEL

    def test_from_env_overrides(self):
        config = StudioConfig.from_env({
            "SCULPT_STUDIO_PRIMARY_MODEL": "model-a",
            "SCULPT_STUDIO_LOG_LEVEL": "debug",
        })

        assert config.primary_model == "model-a"
        assert config.secondary_model == SECONDARY_MODEL
        assert config.log_level == "DEBUG"
