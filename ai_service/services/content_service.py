"""
Content generation service

Dispatches proxy actions to chat completion prompts. Parse failures are
fatal for analyzeMessage and degrade to empty results for tags and
recommendations.
"""

import json
from typing import Any, Awaitable, Callable, Dict, List, Optional

from pydantic import BaseModel, ValidationError
import structlog

from shared.schemas.solution import ensure_string_list
from ai_service.models.requests import (
    AnalyzeMessageRequest, ChatRequest, Recommendation,
    RecommendationRequest, SolutionContentRequest
)
from ai_service.services.prompts import (
    ANALYZE_STEP_PROMPTS, RECOMMENDATION_PROMPT, SUMMARY_PROMPT, TAGS_PROMPT
)
from ai_service.utils.openai_client import (
    OpenAIClient, OpenAIError, clean_json_response, get_openai_client
)

logger = structlog.get_logger(__name__)

JSON_OBJECT = {"type": "json_object"}
MAX_TAGS = 8


class ContentGenerationError(Exception):
    """Raised when an action cannot produce a result"""
    pass


def _solution_context(description: str, tech_categories: List[str], industries: List[str]) -> str:
    return (
        f"Description: {description}\n"
        f"Technologies: {', '.join(tech_categories)}\n"
        f"Industries: {', '.join(industries)}"
    )


def parse_tags(content: Optional[str]) -> List[str]:
    """Tags from a model reply, or [] when it cannot be parsed"""
    cleaned = clean_json_response(content or "")
    try:
        result = json.loads(cleaned)
    except json.JSONDecodeError:
        logger.warning("Could not parse tags response", response=cleaned[:200])
        return []

    if isinstance(result, dict) and isinstance(result.get("tags"), list):
        return result["tags"]
    if isinstance(result, list):
        return result
    if isinstance(result, dict):
        return [value for value in result.values() if isinstance(value, str)][:MAX_TAGS]
    return []


def parse_recommendation(content: Optional[str]) -> Dict[str, Any]:
    """Normalized recommendation, or an empty one when it cannot be parsed"""
    cleaned = clean_json_response(content or "")
    try:
        result = json.loads(cleaned)
    except json.JSONDecodeError:
        logger.warning("Could not parse recommendation response", response=cleaned[:200])
        return Recommendation(summary="Error generating recommendation").model_dump()

    if not isinstance(result, dict):
        return Recommendation(summary="Error generating recommendation").model_dump()

    return Recommendation(
        score=result.get("score") or "0",
        strengths=result["strengths"] if isinstance(result.get("strengths"), list) else [],
        gaps=result["gaps"] if isinstance(result.get("gaps"), list) else [],
        considerations=result["considerations"] if isinstance(result.get("considerations"), list) else [],
        summary=result.get("summary") or "No summary available",
    ).model_dump()


class ContentService:
    """Content generation actions of the AI proxy"""

    def __init__(self, client: Optional[OpenAIClient] = None):
        self.client = client or get_openai_client()
        self._actions: Dict[str, Callable[[Dict[str, Any]], Awaitable[Any]]] = {
            "chat": self.chat,
            "analyzeMessage": self.analyze_message,
            "generateSummary": self.generate_summary,
            "generateTags": self.generate_tags,
            "generateRecommendation": self.generate_recommendation,
        }

    @property
    def actions(self) -> List[str]:
        return list(self._actions)

    async def dispatch(self, action: Optional[str], payload: Dict[str, Any]) -> Any:
        """
        Run a proxy action

        Raises:
            ContentGenerationError: missing key, unknown action, bad payload or API failure
        """
        if not self.client.is_configured:
            raise ContentGenerationError("OpenAI API key not configured")

        handler = self._actions.get(action)
        if handler is None:
            raise ContentGenerationError(f"Unknown action: {action}")

        logger.info("Running content action", action=action)
        try:
            return await handler(payload)
        except OpenAIError as e:
            raise ContentGenerationError(str(e)) from e

    def _parse(self, model: type, payload: Dict[str, Any]) -> BaseModel:
        try:
            return model.model_validate(payload)
        except ValidationError as e:
            raise ContentGenerationError(f"Invalid request payload: {e.error_count()} error(s)") from e

    async def chat(self, payload: Dict[str, Any]) -> Optional[str]:
        request = self._parse(ChatRequest, payload)
        options = request.options
        return await self.client.chat_completion(
            [message.model_dump() for message in request.messages],
            temperature=options.temperature if options and options.temperature is not None else 0.7,
            max_tokens=options.max_tokens if options else None,
            model=options.model if options else None,
        )

    async def analyze_message(self, payload: Dict[str, Any]) -> Any:
        """Extract the submission fields of one onboarding step"""
        request = self._parse(AnalyzeMessageRequest, payload)
        system_prompt = ANALYZE_STEP_PROMPTS.get(request.step)
        if system_prompt is None:
            raise ContentGenerationError("Invalid step number")

        content = await self.client.chat_completion(
            [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": request.message},
            ],
            temperature=0.3,
            response_format=JSON_OBJECT,
        )

        cleaned = clean_json_response(content or "{}")
        try:
            return json.loads(cleaned)
        except json.JSONDecodeError as e:
            logger.error("Error parsing analysis response", step=request.step, response=cleaned[:200])
            raise ContentGenerationError("Failed to parse response from OpenAI") from e

    async def generate_summary(self, payload: Dict[str, Any]) -> str:
        request = self._parse(SolutionContentRequest, payload)
        content = await self.client.chat_completion(
            [
                {"role": "system", "content": SUMMARY_PROMPT},
                {"role": "user", "content": _solution_context(
                    request.description, request.tech_categories, request.industries
                )},
            ],
            temperature=0.7,
            max_tokens=200,
        )
        return content or request.description[:200] + "..."

    async def generate_tags(self, payload: Dict[str, Any]) -> List[str]:
        request = self._parse(SolutionContentRequest, payload)
        content = await self.client.chat_completion(
            [
                {"role": "system", "content": TAGS_PROMPT},
                {"role": "user", "content": _solution_context(
                    request.description, request.tech_categories, request.industries
                )},
            ],
            temperature=0.7,
            max_tokens=150,
            response_format=JSON_OBJECT,
        )
        return parse_tags(content)

    async def generate_recommendation(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        request = self._parse(RecommendationRequest, payload)
        solution = request.solution
        details = (
            "Solution Details:\n"
            f"Name: {solution.get('solution_name') or ''}\n"
            f"Summary: {solution.get('summary') or ''}\n"
            f"Description: {solution.get('description') or ''}\n"
            f"Technologies: {', '.join(ensure_string_list(solution.get('tech_categories')))}\n"
            f"Industry Focus: {', '.join(ensure_string_list(solution.get('industry_focus')))}\n"
            f"Arabic Support: {'Yes' if solution.get('arabic_support') else 'No'}\n"
            f"Deployment Model: {solution.get('deployment_model') or ''}\n"
            "\n"
            "User Need:\n"
            f"{request.user_need}"
        )

        content = await self.client.chat_completion(
            [
                {"role": "system", "content": RECOMMENDATION_PROMPT},
                {"role": "user", "content": details},
            ],
            temperature=0.7,
            response_format=JSON_OBJECT,
        )
        return parse_recommendation(content)


_content_service: Optional[ContentService] = None


def get_content_service() -> ContentService:
    """Get content service instance"""
    global _content_service
    if _content_service is None:
        _content_service = ContentService()
    return _content_service
