"""
Proxy routes
Single entry point taking {action, ...payload}
"""

import json

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, PlainTextResponse
import structlog

from ai_service.services.content_service import (
    ContentGenerationError, ContentService, get_content_service
)

logger = structlog.get_logger(__name__)

router = APIRouter()

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
}


def _error(message: str) -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content={"success": False, "error": message},
        headers=CORS_HEADERS
    )


@router.options("/")
async def preflight():
    return PlainTextResponse("ok", headers=CORS_HEADERS)


@router.post("/")
async def run_action(request: Request, service: ContentService = Depends(get_content_service)):
    """Run one content generation action"""
    try:
        body = await request.json()
    except json.JSONDecodeError:
        return _error("Invalid JSON body")

    if not isinstance(body, dict):
        return _error("Request body must be a JSON object")

    action = body.pop("action", None)

    try:
        data = await service.dispatch(action, body)
    except ContentGenerationError as e:
        logger.error("Content action failed", action=action, error=str(e))
        return _error(str(e) or "Internal server error")

    return JSONResponse(content={"success": True, "data": data}, headers=CORS_HEADERS)
