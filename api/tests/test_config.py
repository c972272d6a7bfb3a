"""
Tests for environment-driven settings
"""
import pytest

from core.config import Settings
from schemas.staging import CropArea


class TestSettings:
    @pytest.mark.unit
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("GEMINI_IMAGE_MODELS", raising=False)

        settings = Settings(_env_file=None)

        assert settings.gemini_image_models == ["gemini-2.5-flash-image", "gemini-3-pro-image-preview"]
        assert settings.allowed_image_types == ["image/jpeg", "image/png", "image/webp"]
        assert not hasattr(settings, "debug")

    @pytest.mark.unit
    def test_env_overrides_are_case_insensitive(self, monkeypatch):
        monkeypatch.setenv("gemini_image_models", '["model-b", "model-a"]')
        monkeypatch.setenv("RETRY_MAX_RETRIES", "5")

        settings = Settings(_env_file=None)

        assert settings.gemini_image_models == ["model-b", "model-a"]
        assert settings.retry_max_retries == 5

    @pytest.mark.unit
    def test_unknown_env_file_keys_ignored(self, monkeypatch, tmp_path):
        monkeypatch.delenv("GOOGLE_AI_API_KEY", raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text("GOOGLE_AI_API_KEY=from-file\nDATABASE_URL=postgres://unused\n")

        settings = Settings(_env_file=env_file)

        assert settings.google_ai_api_key == "from-file"


class TestCropAreaSchema:
    @pytest.mark.unit
    def test_schema_example(self):
        schema = CropArea.model_json_schema()

        assert schema["example"] == {"x": 120, "y": 340, "width": 400, "height": 260}
