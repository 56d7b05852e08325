"""
User Service - FastAPI Application
Vendor account authentication and email verification for GO AI Hub
"""

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager

from shared.utils.logger import init_logging, get_logger
from shared.utils.supabase_client import get_supabase_client
from user_service.config import get_config
from user_service.routes import auth

init_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler"""
    logger.info("User Service starting up...")

    if not get_supabase_client().is_available():
        logger.error("Supabase is not configured; authentication requests will fail")

    yield

    logger.info("User Service shutting down...")


config = get_config()

# Create FastAPI application
app = FastAPI(
    title="User Service",
    description="Vendor authentication and email verification for GO AI Hub",
    version=config.service_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Global exception handler
@app.exception_handler(HTTPException)
async def http_exception_handler(request, exc):
    """Custom HTTP exception handler"""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": True,
            "message": exc.detail,
            "status_code": exc.status_code
        },
        headers=getattr(exc, "headers", None)
    )


@app.get("/health")
async def health_check():
    """Service health check"""
    return {
        "status": "healthy",
        "service": config.service_name,
        "version": config.service_version,
        "supabase": "configured" if get_supabase_client().is_available() else "unavailable"
    }


app.include_router(auth.router, prefix="/auth", tags=["Authentication"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("user_service.main:app", host="0.0.0.0", port=config.port, reload=True)
