"""
Tests for application startup and request logging
"""
import pytest
from fastapi.testclient import TestClient

import main
from core.exceptions import ConfigurationError
from services.staging_service import StagingService


class TestLifespan:
    @pytest.mark.asyncio
    async def test_missing_api_key_prevents_startup(self, monkeypatch):
        monkeypatch.setattr(main.settings, "google_ai_api_key", "")

        with pytest.raises(ConfigurationError):
            async with main.lifespan(main.app):
                pass

    def test_startup_builds_staging_service(self, monkeypatch):
        monkeypatch.setattr(main.settings, "google_ai_api_key", "test-api-key-123456")

        with TestClient(main.app) as client:
            assert isinstance(main.app.state.staging_service, StagingService)

            response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestRequestLogging:
    def test_request_id_header(self, monkeypatch):
        monkeypatch.setattr(main.settings, "google_ai_api_key", "test-api-key-123456")

        with TestClient(main.app) as client:
            generated = client.get("/")
            echoed = client.get("/", headers={"X-Request-ID": "abc12345"})

        assert len(generated.headers["X-Request-ID"]) == 8
        assert echoed.headers["X-Request-ID"] == "abc12345"
        assert "/api/furnish" in generated.json()["endpoints"].values()
