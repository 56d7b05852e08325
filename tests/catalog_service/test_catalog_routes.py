"""
Unit tests for the catalog service routes
"""

import json
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from fastapi.testclient import TestClient

from shared.utils.supabase_client import SupabaseError
from catalog_service.main import app
from catalog_service.routes.translations import get_session_translation_service
from catalog_service.services.market_insights_service import get_market_insights_service
from catalog_service.services.solution_service import get_solution_service
from catalog_service.services.translation_service import TranslationService, get_cache_registry


def _translator():
    def handler(request):
        body = json.loads(request.content)
        return httpx.Response(200, json={"translatedText": f"[{body['target']}] {body['q']}"})

    return TranslationService(
        api_url="https://translate.example.com",
        timeout=5,
        transport=httpx.MockTransport(handler)
    )


@pytest.fixture
def client():
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestTranslationRoutes:

    def test_translate_text(self, client):
        app.dependency_overrides[get_session_translation_service] = _translator

        response = client.post("/api/v1/translations/text", json={"text": "Hello", "target": "ar", "source": "en"})

        assert response.status_code == 200
        assert response.json() == {"text": "[ar] Hello", "target": "ar"}

    def test_unsupported_target(self, client):
        app.dependency_overrides[get_session_translation_service] = _translator

        response = client.post("/api/v1/translations/text", json={"text": "Hello", "target": "fr"})

        assert response.status_code == 422

    def test_translate_solutions(self, client):
        app.dependency_overrides[get_session_translation_service] = _translator

        response = client.post("/api/v1/translations/solutions", json={
            "solutions": [{"id": "s-1", "solution_name": "Vision AI"}],
            "target": "ar",
        })

        assert response.status_code == 200
        solution = response.json()["solutions"][0]
        assert solution["solution_name"] == "[ar] Vision AI"
        assert solution["_translatedTo"] == "ar"

    def test_cache_is_scoped_to_session(self, client):
        get_cache_registry().get("session-stats").set("en-ar-SGVsbG8=", "[ar] Hello")

        scoped = client.get("/api/v1/translations/cache/stats", headers={"X-Session-ID": "session-stats"})
        other = client.get("/api/v1/translations/cache/stats", headers={"X-Session-ID": "session-other"})

        assert scoped.json() == {"size": 1, "keys": ["en-ar-SGVsbG8="]}
        assert other.json()["size"] == 0

    def test_clear_cache(self, client):
        get_cache_registry().get("session-clear").set("en-ar-SGVsbG8=", "[ar] Hello")

        response = client.delete("/api/v1/translations/cache", headers={"X-Session-ID": "session-clear"})

        assert response.json() == {"success": True}
        assert len(get_cache_registry().get("session-clear")) == 0


class TestSolutionRoutes:

    def test_list_solutions(self, client):
        solutions = MagicMock()
        solutions.list_approved = AsyncMock(return_value=[{"id": "s-1", "solution_name": "Vision AI"}])
        app.dependency_overrides[get_solution_service] = lambda: solutions
        app.dependency_overrides[get_session_translation_service] = _translator

        response = client.get("/api/v1/solutions", params={"limit": 10})

        assert response.status_code == 200
        assert response.json() == {
            "solutions": [{"id": "s-1", "solution_name": "Vision AI"}],
            "count": 1,
            "lang": "en",
            "offset": 0,
        }
        solutions.list_approved.assert_awaited_once_with(10, 0)

    def test_list_solutions_in_arabic(self, client):
        solutions = MagicMock()
        solutions.list_approved = AsyncMock(return_value=[{"id": "s-1", "solution_name": "Vision AI"}])
        app.dependency_overrides[get_solution_service] = lambda: solutions
        app.dependency_overrides[get_session_translation_service] = _translator

        response = client.get("/api/v1/solutions", params={"lang": "ar"})

        assert response.json()["solutions"][0]["solution_name"] == "[ar] Vision AI"

    def test_list_solutions_backend_failure(self, client):
        solutions = MagicMock()
        solutions.list_approved = AsyncMock(side_effect=SupabaseError("connection reset"))
        app.dependency_overrides[get_solution_service] = lambda: solutions
        app.dependency_overrides[get_session_translation_service] = _translator

        response = client.get("/api/v1/solutions")

        assert response.status_code == 502
        assert response.json()["message"] == "Failed to load solutions"


class TestMarketInsightsRoutes:

    def test_status(self, client):
        service = MagicMock()
        service.get_update_status = AsyncMock(return_value={
            "last_updated": datetime(2025, 5, 15, tzinfo=timezone.utc),
            "next_update": datetime(2025, 5, 22, tzinfo=timezone.utc),
            "frequency": "Weekly",
            "days_until_next_update": 7,
            "update_needed": False,
        })
        app.dependency_overrides[get_market_insights_service] = lambda: service

        response = client.get("/api/v1/market-insights/status")

        assert response.status_code == 200
        data = response.json()
        assert data["frequency"] == "Weekly"
        assert data["last_updated"].startswith("2025-05-15")

    def test_update(self, client):
        service = MagicMock()
        service.update_market_insights = AsyncMock(return_value={"success": False, "message": "permission denied"})
        app.dependency_overrides[get_market_insights_service] = lambda: service

        response = client.post("/api/v1/market-insights/update", json={"frequency": "Monthly"})

        assert response.status_code == 200
        assert response.json()["success"] is False
        service.update_market_insights.assert_awaited_once_with("Monthly")

    def test_update_needed(self, client):
        service = MagicMock()
        service.check_update_needed = AsyncMock(return_value=True)
        app.dependency_overrides[get_market_insights_service] = lambda: service

        response = client.get("/api/v1/market-insights/update-needed")

        assert response.json() == {"update_needed": True}


def test_health(client):
    response = client.get("/health")
    assert response.json()["status"] == "healthy"
