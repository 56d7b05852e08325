"""
Translation service
LibreTranslate-style proxy with a per-session cache

Translation is best effort: any failure returns the original text.
"""

import asyncio
import base64
from collections import OrderedDict
from typing import Any, Dict, List, Optional

import httpx
import structlog

from shared.schemas.solution import TRANSLATABLE_FIELDS
from catalog_service.config import get_config

logger = structlog.get_logger(__name__)


def cache_key(text: str, source: str, target: str) -> str:
    """Cache key built from the language pair and the first 100 characters"""
    encoded = base64.b64encode(text[:100].encode("utf-8")).decode("ascii")
    return f"{source}-{target}-{encoded}"


def other_language(target: str) -> str:
    return "en" if target == "ar" else "ar"


class TranslationCache:
    """Unbounded map of cache key to translated text"""

    def __init__(self):
        self._entries: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._entries.get(key)

    def set(self, key: str, value: str) -> None:
        self._entries[key] = value

    def clear(self) -> None:
        self._entries.clear()

    def stats(self) -> Dict[str, Any]:
        return {"size": len(self._entries), "keys": list(self._entries)}

    def __len__(self) -> int:
        return len(self._entries)


class TranslationCacheRegistry:
    """Caches scoped to client sessions

    A request without a session id gets a cache that lives only as long as
    the request. At most `max_sessions` caches are kept; the least recently
    used session is dropped first.
    """

    def __init__(self, max_sessions: Optional[int] = None):
        self.max_sessions = max_sessions or get_config().translation_max_sessions
        self._caches: "OrderedDict[str, TranslationCache]" = OrderedDict()

    def get(self, session_id: Optional[str]) -> TranslationCache:
        if not session_id:
            return TranslationCache()

        cache = self._caches.get(session_id)
        if cache is None:
            cache = TranslationCache()
            self._caches[session_id] = cache
            while len(self._caches) > self.max_sessions:
                evicted, _ = self._caches.popitem(last=False)
                logger.debug("Translation cache evicted", session_id=evicted)
        else:
            self._caches.move_to_end(session_id)
        return cache

    def clear(self, session_id: Optional[str]) -> None:
        if session_id and session_id in self._caches:
            self._caches[session_id].clear()

    def __len__(self) -> int:
        return len(self._caches)


class TranslationService:
    """Translates texts and solutions through the translation endpoint"""

    def __init__(
        self,
        cache: Optional[TranslationCache] = None,
        api_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        config = get_config()
        self.cache = cache if cache is not None else TranslationCache()
        self.api_url = (api_url or config.translation_api_url).rstrip("/")
        self.api_key = api_key if api_key is not None else config.translation_api_key
        self.timeout = httpx.Timeout(timeout or config.translation_timeout)
        self.batch_size = config.translation_batch_size
        self._transport = transport

    async def translate_text(self, text: str, target: str, source: str = "auto") -> str:
        """
        Translate one text

        Empty text and identical languages short-circuit without a request.
        Transport errors and non-2xx responses return the original text.
        """
        if not text or not text.strip():
            return text
        if source == target:
            return text

        key = cache_key(text, source, target)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        payload = {"q": text, "source": source, "target": target, "format": "text"}
        if self.api_key:
            payload["api_key"] = self.api_key

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(f"{self.api_url}/translate", json=payload)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            logger.warning("Translation request rejected", status_code=e.response.status_code, target=target)
            return text
        except httpx.HTTPError as e:
            logger.warning("Translation request failed", error=str(e), target=target)
            return text
        except ValueError as e:
            logger.warning("Translation response was not JSON", error=str(e), target=target)
            return text

        translated = data.get("translatedText") if isinstance(data, dict) else None
        if not isinstance(translated, str):
            logger.warning("Translation response missing translatedText", target=target)
            return text

        self.cache.set(key, translated)
        return translated

    async def translate_texts(self, texts: List[str], target: str, source: str = "auto") -> List[str]:
        """Translate several texts concurrently, keeping their order"""
        results = await asyncio.gather(
            *(self.translate_text(text, target, source) for text in texts),
            return_exceptions=True
        )

        translated = []
        for index, result in enumerate(results):
            if isinstance(result, Exception):
                logger.warning("Translation failed for text", index=index, error=str(result))
                translated.append(texts[index])
            else:
                translated.append(result)
        return translated

    async def translate_solution(self, solution: Dict[str, Any], target: str) -> Dict[str, Any]:
        """Translate the reader-facing text fields of a solution"""
        if solution.get("_translatedTo") == target:
            return solution

        source = other_language(target)
        fields = [
            field for field in TRANSLATABLE_FIELDS
            if isinstance(solution.get(field), str) and solution.get(field)
        ]

        translated = await self.translate_texts([solution[field] for field in fields], target, source)

        return {
            **solution,
            **dict(zip(fields, translated)),
            "_isTranslated": True,
            "_translatedTo": target,
        }

    async def translate_solutions(self, solutions: List[Dict[str, Any]], target: str) -> List[Dict[str, Any]]:
        """
        Translate solutions in batches

        Each batch is settled independently; a solution that fails to
        translate is returned unchanged.
        """
        results = list(solutions)
        pending = [i for i, solution in enumerate(solutions) if solution.get("_translatedTo") != target]

        for start in range(0, len(pending), self.batch_size):
            batch = pending[start:start + self.batch_size]
            outcomes = await asyncio.gather(
                *(self.translate_solution(solutions[i], target) for i in batch),
                return_exceptions=True
            )
            for index, outcome in zip(batch, outcomes):
                if isinstance(outcome, Exception):
                    logger.warning(
                        "Translation failed for solution",
                        solution_id=solutions[index].get("id"),
                        error=str(outcome)
                    )
                else:
                    results[index] = outcome

        return results

    def clear_cache(self) -> None:
        self.cache.clear()

    def cache_stats(self) -> Dict[str, Any]:
        return self.cache.stats()


_cache_registry: Optional[TranslationCacheRegistry] = None


def get_cache_registry() -> TranslationCacheRegistry:
    """Get the process-wide registry of session caches"""
    global _cache_registry
    if _cache_registry is None:
        _cache_registry = TranslationCacheRegistry()
    return _cache_registry


def get_translation_service(session_id: Optional[str] = None) -> TranslationService:
    """Translation service bound to the cache of a client session"""
    return TranslationService(cache=get_cache_registry().get(session_id))
