"""
Unit tests for the AI proxy routes
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from ai_service.main import app
from ai_service.services.content_service import ContentGenerationError, get_content_service


@pytest.fixture
def content():
    return MagicMock()


@pytest.fixture
def client(content):
    app.dependency_overrides[get_content_service] = lambda: content
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestProxy:

    def test_preflight(self, client):
        response = client.options("/")

        assert response.status_code == 200
        assert response.text == "ok"
        assert response.headers["Access-Control-Allow-Origin"] == "*"
        assert "POST" in response.headers["Access-Control-Allow-Methods"]

    def test_success(self, client, content):
        content.dispatch = AsyncMock(return_value="A concise summary.")

        response = client.post("/", json={"action": "generateSummary", "description": "Long description"})

        assert response.status_code == 200
        assert response.json() == {"success": True, "data": "A concise summary."}
        assert response.headers["Access-Control-Allow-Origin"] == "*"
        content.dispatch.assert_awaited_once_with("generateSummary", {"description": "Long description"})

    def test_action_error(self, client, content):
        content.dispatch = AsyncMock(side_effect=ContentGenerationError("Unknown action: translate"))

        response = client.post("/", json={"action": "translate"})

        assert response.status_code == 500
        assert response.json() == {"success": False, "error": "Unknown action: translate"}
        assert response.headers["Access-Control-Allow-Origin"] == "*"

    def test_invalid_json(self, client, content):
        response = client.post("/", content=b"{not json", headers={"Content-Type": "application/json"})

        assert response.status_code == 500
        assert response.json()["error"] == "Invalid JSON body"

    def test_non_object_body(self, client):
        response = client.post("/", json=["generateSummary"])

        assert response.status_code == 500
        assert response.json()["success"] is False


def test_health(client):
    response = client.get("/health")
    assert response.json()["status"] == "healthy"
