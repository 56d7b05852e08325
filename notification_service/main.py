"""
Notification Service
Email dispatch for GO AI Hub accounts
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging
from contextlib import asynccontextmanager

from shared.utils.logger import init_logging
from notification_service.config import get_app_config, get_smtp_config
from notification_service.utils.smtp_client import get_smtp_client
from notification_service.routes import emails, health

init_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    logger.info("🚀 Notification Service starting up...")

    smtp_config = get_smtp_config()
    smtp_config.log_config()

    # A relay that is down at startup is reported but does not stop the service
    result = await get_smtp_client().verify_connection()
    if result["success"]:
        logger.info("✅ SMTP server is ready to send emails")
    else:
        logger.error(f"❌ SMTP connection error: {result.get('error')}")

    yield

    logger.info("📧 Notification Service shutting down...")


app_config = get_app_config()

# Create FastAPI app
app = FastAPI(
    title="Notification Service",
    description="Email dispatch service for GO AI Hub",
    version=app_config.service_version,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=app_config.get_allowed_origins(),
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

app.include_router(health.router, tags=["Health"])
app.include_router(emails.router, prefix="/api", tags=["Emails"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "notification_service.main:app",
        host="0.0.0.0",
        port=app_config.port,
        reload=True
    )
