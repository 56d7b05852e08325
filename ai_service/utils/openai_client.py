"""
OpenAI Client
Chat completions over httpx
"""

import re
from typing import Any, Dict, List, Optional

import httpx
import structlog

from ai_service.config import get_config

logger = structlog.get_logger(__name__)

_FENCE_START = re.compile(r'^```json\s*', re.IGNORECASE)
_BARE_FENCE_START = re.compile(r'^```\s*')
_FENCE_END = re.compile(r'\s*```$')


class OpenAIError(Exception):
    """Raised when the chat completions API fails"""
    pass


def clean_json_response(response: str) -> str:
    """Strip markdown code fences and keep the outermost {...} span"""
    cleaned = _FENCE_START.sub('', response)
    cleaned = _BARE_FENCE_START.sub('', cleaned)
    cleaned = _FENCE_END.sub('', cleaned).strip()

    first_brace = cleaned.find('{')
    last_brace = cleaned.rfind('}')
    if first_brace != -1 and last_brace > first_brace:
        cleaned = cleaned[first_brace:last_brace + 1]

    return cleaned


class OpenAIClient:
    """Minimal chat completions client"""

    def __init__(
        self,
        api_key: Optional[str] = None,
        api_url: Optional[str] = None,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        config = get_config()
        self.api_key = api_key if api_key is not None else config.openai_api_key
        self.api_url = (api_url or config.openai_api_url).rstrip('/')
        self.model = model or config.openai_model
        self.timeout = httpx.Timeout(timeout or config.openai_timeout)
        self._transport = transport

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    async def chat_completion(
        self,
        messages: List[Dict[str, str]],
        temperature: float = 0.7,
        max_tokens: Optional[int] = None,
        response_format: Optional[Dict[str, Any]] = None,
        model: Optional[str] = None
    ) -> Optional[str]:
        """
        Run one chat completion

        Returns:
            Content of the first choice (may be None)

        Raises:
            OpenAIError: transport failure or non-2xx response
        """
        if not self.api_key:
            raise OpenAIError("OpenAI API key not configured")

        body: Dict[str, Any] = {
            "model": model or self.model,
            "messages": messages,
            "temperature": temperature,
        }
        if max_tokens is not None:
            body["max_tokens"] = max_tokens
        if response_format is not None:
            body["response_format"] = response_format

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(
                    f"{self.api_url}/chat/completions",
                    json=body,
                    headers={"Authorization": f"Bearer {self.api_key}"}
                )
        except httpx.RequestError as e:
            logger.error("OpenAI request failed", error=str(e))
            raise OpenAIError(f"OpenAI request failed: {e}") from e

        if response.is_error:
            logger.error("OpenAI API error", status_code=response.status_code)
            raise OpenAIError(f"OpenAI API error: {response.reason_phrase}")

        try:
            data = response.json()
            return data["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            logger.error("Unexpected OpenAI response shape", error=str(e))
            raise OpenAIError("Unexpected response from OpenAI") from e


_openai_client: Optional[OpenAIClient] = None


def get_openai_client() -> OpenAIClient:
    """Get OpenAI client instance"""
    global _openai_client
    if _openai_client is None:
        _openai_client = OpenAIClient()
    return _openai_client
