"""Tests for the HTTP endpoints."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from recipe_bookmarks.main import app
from recipe_bookmarks.models.schemas import OGPData
from recipe_bookmarks.routers.ogp import PREVIEW_FAILED_MESSAGE
from recipe_bookmarks.services.ogp import get_ogp_service
from tests.conftest import make_settings


@pytest.fixture
def fake_service():
    service = MagicMock()
    service.fetch_ogp = AsyncMock(return_value=None)
    app.dependency_overrides[get_ogp_service] = lambda: service
    yield service
    app.dependency_overrides.clear()


@pytest.fixture
def client():
    return TestClient(app)


class TestPreview:

    def test_success_omits_missing_fields(self, client, fake_service):
        fake_service.fetch_ogp.return_value = OGPData(
            title="Fluffy Pancakes",
            url="https://blog.example.com/pancakes",
            ingredients="200g flour\n2 eggs",
        )

        response = client.post("/ogp/preview", json={"url": "https://blog.example.com/pancakes"})

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "data": {
                "title": "Fluffy Pancakes",
                "url": "https://blog.example.com/pancakes",
                "ingredients": "200g flour\n2 eggs",
            },
        }
        fake_service.fetch_ogp.assert_awaited_once_with("https://blog.example.com/pancakes")

    def test_failure_message(self, client, fake_service):
        response = client.post("/ogp/preview", json={"url": "not a url"})

        assert response.status_code == 200
        assert response.json() == {"success": False, "error": PREVIEW_FAILED_MESSAGE}

    def test_missing_url_is_rejected(self, client, fake_service):
        response = client.post("/ogp/preview", json={})

        assert response.status_code == 422
        fake_service.fetch_ogp.assert_not_called()


class TestHealth:

    def test_reports_configured_strategies(self, client):
        settings = make_settings(openai_api_key="sk-test", environment="test")
        with patch("recipe_bookmarks.routers.health.get_settings", return_value=settings):
            response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {
            "status": "healthy",
            "environment": "test",
            "youtube_api": False,
            "llm": True,
        }

    def test_root(self, client):
        body = client.get("/").json()

        assert body["docs"] == "/docs"
        assert body["health"] == "/health"
        assert "version" in body
