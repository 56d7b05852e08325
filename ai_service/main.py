"""
AI Service - Main Application
Content generation proxy in front of the OpenAI chat completions API
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
import structlog

from shared.utils.logger import init_logging
from ai_service.config import get_config
from ai_service.routes import proxy

init_logging()
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan events"""
    config = get_config()
    if not config.openai_api_key:
        logger.warning("OPENAI_API_KEY is not set; every action will fail")
    logger.info("Starting AI Service", model=config.openai_model)
    yield
    logger.info("AI Service shutdown complete")


config = get_config()

# CORS headers are set by the proxy routes themselves
app = FastAPI(
    title="GO AI Hub - AI Service",
    description="Content generation proxy",
    version=config.service_version,
    lifespan=lifespan
)


@app.get("/health")
async def health_check():
    return {
        "service": config.service_name,
        "status": "healthy",
        "version": config.service_version,
        "openai_configured": bool(config.openai_api_key)
    }


app.include_router(proxy.router, tags=["Proxy"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("ai_service.main:app", host="0.0.0.0", port=config.port, reload=True)
