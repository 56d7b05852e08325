"""
Market insights routes
"""

from fastapi import APIRouter, Depends

from catalog_service.models.market_insights import (
    UpdateStatusResponse, UpdateRequest, UpdateResponse, UpdateNeededResponse
)
from catalog_service.services.market_insights_service import (
    MarketInsightsService, get_market_insights_service
)

router = APIRouter()


@router.get("/status", response_model=UpdateStatusResponse)
async def update_status(service: MarketInsightsService = Depends(get_market_insights_service)):
    return UpdateStatusResponse(**await service.get_update_status())


@router.post("/update", response_model=UpdateResponse)
async def update_market_insights(
    request: UpdateRequest,
    service: MarketInsightsService = Depends(get_market_insights_service)
):
    return UpdateResponse(**await service.update_market_insights(request.frequency))


@router.get("/update-needed", response_model=UpdateNeededResponse)
async def update_needed(service: MarketInsightsService = Depends(get_market_insights_service)):
    return UpdateNeededResponse(update_needed=await service.check_update_needed())
