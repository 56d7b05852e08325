"""
Solution listing routes
"""

from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
import structlog

from shared.utils.supabase_client import SupabaseError
from catalog_service.config import get_config
from catalog_service.routes.translations import get_session_translation_service
from catalog_service.services.solution_service import SolutionService, get_solution_service
from catalog_service.services.translation_service import TranslationService

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.get("")
async def list_solutions(
    lang: Literal["en", "ar"] = Query("en"),
    limit: Optional[int] = Query(None, ge=1, le=200),
    offset: int = Query(0, ge=0),
    solutions: SolutionService = Depends(get_solution_service),
    translator: TranslationService = Depends(get_session_translation_service)
):
    """Approved solutions, newest first; `lang=ar` returns translated copies"""
    try:
        rows = await solutions.list_approved(limit or get_config().solutions_page_size, offset)
    except SupabaseError as e:
        logger.error("Failed to list solutions", error=str(e))
        raise HTTPException(status_code=502, detail="Failed to load solutions")

    if lang == "ar":
        rows = await translator.translate_solutions(rows, "ar")

    return {"solutions": rows, "count": len(rows), "lang": lang, "offset": offset}
