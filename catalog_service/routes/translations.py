"""
Translation routes
"""

from typing import Optional

from fastapi import APIRouter, Depends, Header
import structlog

from catalog_service.models.translation import (
    TranslateTextRequest, TranslateTextResponse,
    TranslateTextsRequest, TranslateTextsResponse,
    TranslateSolutionsRequest, TranslateSolutionsResponse,
    CacheStatsResponse
)
from catalog_service.services.translation_service import (
    TranslationService, get_translation_service
)

logger = structlog.get_logger(__name__)

router = APIRouter()


def get_session_translation_service(
    x_session_id: Optional[str] = Header(None, alias="X-Session-ID")
) -> TranslationService:
    """Dependency binding the translation cache to the caller's session"""
    return get_translation_service(x_session_id)


@router.post("/text", response_model=TranslateTextResponse)
async def translate_text(
    request: TranslateTextRequest,
    service: TranslationService = Depends(get_session_translation_service)
):
    text = await service.translate_text(request.text, request.target, request.source)
    return TranslateTextResponse(text=text, target=request.target)


@router.post("/texts", response_model=TranslateTextsResponse)
async def translate_texts(
    request: TranslateTextsRequest,
    service: TranslationService = Depends(get_session_translation_service)
):
    texts = await service.translate_texts(request.texts, request.target, request.source)
    return TranslateTextsResponse(texts=texts, target=request.target)


@router.post("/solutions", response_model=TranslateSolutionsResponse)
async def translate_solutions(
    request: TranslateSolutionsRequest,
    service: TranslationService = Depends(get_session_translation_service)
):
    logger.info("Translating solutions", count=len(request.solutions), target=request.target)
    solutions = await service.translate_solutions(request.solutions, request.target)
    return TranslateSolutionsResponse(solutions=solutions, target=request.target)


@router.get("/cache/stats", response_model=CacheStatsResponse)
async def cache_stats(service: TranslationService = Depends(get_session_translation_service)):
    return CacheStatsResponse(**service.cache_stats())


@router.delete("/cache")
async def clear_cache(service: TranslationService = Depends(get_session_translation_service)):
    service.clear_cache()
    logger.info("Translation cache cleared")
    return {"success": True}
