"""
Unit tests for ContentService
"""

import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from ai_service.services.content_service import (
    ContentGenerationError, ContentService, parse_recommendation, parse_tags
)
from ai_service.utils.openai_client import OpenAIError


@pytest.fixture
def openai():
    client = MagicMock()
    client.is_configured = True
    client.chat_completion = AsyncMock()
    return client


@pytest.fixture
def service(openai):
    return ContentService(client=openai)


class TestParsers:
    """Test model reply parsing"""

    def test_tags_object(self):
        assert parse_tags('{"tags": ["vision", "retail"]}') == ["vision", "retail"]

    def test_tags_bare_list(self):
        assert parse_tags('["vision", "retail"]') == ["vision", "retail"]

    def test_tags_string_values_capped(self):
        content = json.dumps({f"tag{i}": f"value{i}" for i in range(12)})
        assert parse_tags(content) == [f"value{i}" for i in range(8)]

    def test_tags_fenced(self):
        assert parse_tags('```json\n{"tags": ["nlp"]}\n```') == ["nlp"]

    def test_tags_unparsable(self):
        assert parse_tags("Here are some tags: nlp, vision") == []

    def test_tags_empty(self):
        assert parse_tags(None) == []

    def test_recommendation_normalized(self):
        result = parse_recommendation('{"score": "85", "strengths": ["Arabic support"], "gaps": "none"}')

        assert result == {
            "score": "85",
            "strengths": ["Arabic support"],
            "gaps": [],
            "considerations": [],
            "summary": "No summary available",
        }

    def test_recommendation_unparsable(self):
        result = parse_recommendation("not json")

        assert result["score"] == "0"
        assert result["summary"] == "Error generating recommendation"

    def test_recommendation_structured_summary_passes_through(self):
        result = parse_recommendation('{"score": 80, "summary": {"en": "good", "ar": "جيد"}}')

        assert result["score"] == 80
        assert result["summary"] == {"en": "good", "ar": "جيد"}


class TestDispatch:
    """Test action dispatch"""

    @pytest.mark.asyncio
    async def test_missing_key(self, service, openai):
        openai.is_configured = False

        with pytest.raises(ContentGenerationError) as exc_info:
            await service.dispatch("chat", {"messages": []})

        assert str(exc_info.value) == "OpenAI API key not configured"
        openai.chat_completion.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unknown_action(self, service):
        with pytest.raises(ContentGenerationError) as exc_info:
            await service.dispatch("translate", {})

        assert str(exc_info.value) == "Unknown action: translate"

    @pytest.mark.asyncio
    async def test_api_error_wrapped(self, service, openai):
        openai.chat_completion.side_effect = OpenAIError("OpenAI API error: Too Many Requests")

        with pytest.raises(ContentGenerationError) as exc_info:
            await service.dispatch("chat", {"messages": [{"role": "user", "content": "Hi"}]})

        assert "Too Many Requests" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_invalid_payload(self, service):
        with pytest.raises(ContentGenerationError):
            await service.dispatch("analyzeMessage", {"message": "We build chatbots"})

    @pytest.mark.asyncio
    async def test_chat_options(self, service, openai):
        openai.chat_completion.return_value = "Hello!"

        result = await service.dispatch("chat", {
            "messages": [{"role": "user", "content": "Hi"}],
            "options": {"temperature": 0.2, "max_tokens": 50},
        })

        assert result == "Hello!"
        kwargs = openai.chat_completion.call_args.kwargs
        assert kwargs["temperature"] == 0.2
        assert kwargs["max_tokens"] == 50


class TestActions:

    @pytest.mark.asyncio
    async def test_analyze_message(self, service, openai):
        openai.chat_completion.return_value = '{"solution_name": "Vision AI"}'

        result = await service.dispatch("analyzeMessage", {"message": "We build Vision AI", "step": 2})

        assert result == {"solution_name": "Vision AI"}
        kwargs = openai.chat_completion.call_args.kwargs
        assert kwargs["temperature"] == 0.3
        assert kwargs["response_format"] == {"type": "json_object"}

    @pytest.mark.asyncio
    async def test_analyze_invalid_step(self, service, openai):
        with pytest.raises(ContentGenerationError) as exc_info:
            await service.dispatch("analyzeMessage", {"message": "Hi", "step": 9})

        assert str(exc_info.value) == "Invalid step number"
        openai.chat_completion.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_analyze_unparsable(self, service, openai):
        openai.chat_completion.return_value = "I could not understand that"

        with pytest.raises(ContentGenerationError) as exc_info:
            await service.dispatch("analyzeMessage", {"message": "Hi", "step": 1})

        assert str(exc_info.value) == "Failed to parse response from OpenAI"

    @pytest.mark.asyncio
    async def test_summary(self, service, openai):
        openai.chat_completion.return_value = "A concise summary."

        result = await service.dispatch("generateSummary", {
            "description": "Long description",
            "techCategories": ["NLP"],
            "industries": ["Retail"],
        })

        assert result == "A concise summary."
        assert openai.chat_completion.call_args.kwargs["max_tokens"] == 200
        user_message = openai.chat_completion.call_args.args[0][1]["content"]
        assert "Technologies: NLP" in user_message
        assert "Industries: Retail" in user_message

    @pytest.mark.asyncio
    async def test_summary_fallback(self, service, openai):
        openai.chat_completion.return_value = None
        description = "d" * 300

        result = await service.dispatch("generateSummary", {"description": description})

        assert result == "d" * 200 + "..."

    @pytest.mark.asyncio
    async def test_tags(self, service, openai):
        openai.chat_completion.return_value = '{"tags": ["retail", "vision"]}'

        result = await service.dispatch("generateTags", {"description": "Shelf monitoring"})

        assert result == ["retail", "vision"]
        assert openai.chat_completion.call_args.kwargs["max_tokens"] == 150

    @pytest.mark.asyncio
    async def test_recommendation(self, service, openai):
        openai.chat_completion.return_value = '{"score": 72, "summary": "Good fit"}'

        result = await service.dispatch("generateRecommendation", {
            "solution": {
                "solution_name": "Vision AI",
                "tech_categories": "Computer Vision, Edge",
                "arabic_support": True,
            },
            "userNeed": "Detect shelf gaps",
        })

        assert result["score"] == 72
        assert result["summary"] == "Good fit"
        details = openai.chat_completion.call_args.args[0][1]["content"]
        assert "Technologies: Computer Vision, Edge" in details
        assert "Arabic Support: Yes" in details
        assert details.endswith("User Need:\nDetect shelf gaps")

    @pytest.mark.asyncio
    async def test_recommendation_with_list_summary(self, service, openai):
        openai.chat_completion.return_value = '{"score": 60, "summary": ["Fits retail", "Needs Arabic UI"]}'

        result = await service.dispatch("generateRecommendation", {
            "solution": {"solution_name": "Vision AI"},
            "userNeed": "Detect shelf gaps",
        })

        assert result["summary"] == ["Fits retail", "Needs Arabic UI"]
