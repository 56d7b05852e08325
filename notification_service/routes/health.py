"""
Health Check Routes
Service health monitoring endpoints
"""

from fastapi import APIRouter
from datetime import datetime, timezone

from notification_service.models.email import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Basic health check; SMTP reachability is only checked at startup"""
    return HealthResponse(
        status="ok",
        timestamp=datetime.now(timezone.utc).isoformat(),
        emailServiceReady=True
    )
