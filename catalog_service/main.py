"""
Catalog Service - Main Application
Solution listing, translation proxy and market insights status
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import structlog

from shared.utils.logger import init_logging
from catalog_service.config import get_config
from catalog_service.routes import market_insights, solutions, translations

init_logging()
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan events"""
    config = get_config()
    logger.info("Starting Catalog Service", translation_api_url=config.translation_api_url)
    yield
    logger.info("Catalog Service shutdown complete")


config = get_config()

app = FastAPI(
    title="GO AI Hub - Catalog Service",
    description="Solution catalog, translations and market insights",
    version=config.service_version,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in config.cors_allowed_origins.split(",") if o.strip()] or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all incoming requests"""
    response = await call_next(request)
    logger.info(
        "Request completed",
        method=request.method,
        path=request.url.path,
        status_code=response.status_code
    )
    return response


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": True,
            "message": exc.detail,
            "status_code": exc.status_code
        }
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler"""
    logger.error(
        "Unhandled exception",
        error=str(exc),
        method=request.method,
        path=request.url.path,
        exc_info=True
    )
    return JSONResponse(
        status_code=500,
        content={
            "error": True,
            "message": "An unexpected error occurred",
            "status_code": 500
        }
    )


@app.get("/health")
async def health_check():
    return {"service": config.service_name, "status": "healthy", "version": config.service_version}


app.include_router(translations.router, prefix="/api/v1/translations", tags=["Translations"])
app.include_router(market_insights.router, prefix="/api/v1/market-insights", tags=["Market Insights"])
app.include_router(solutions.router, prefix="/api/v1/solutions", tags=["Solutions"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("catalog_service.main:app", host="0.0.0.0", port=config.port, reload=True)
