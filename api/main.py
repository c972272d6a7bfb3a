"""
FastAPI main application for the Room Staging API
"""
import logging
import os
import sys
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

# Add api directory to path for imports
api_dir = os.path.dirname(os.path.abspath(__file__))
if api_dir not in sys.path:
    sys.path.insert(0, api_dir)

from core.config import settings  # noqa: E402
from core.logging import setup_logging  # noqa: E402
from middleware.logging_middleware import RequestLoggingMiddleware  # noqa: E402
from routers import staging  # noqa: E402
from services.staging_service import StagingService  # noqa: E402

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    logger.info("Starting Room Staging API...")

    # Raises ConfigurationError without GOOGLE_AI_API_KEY, so the process never starts half-configured
    app.state.staging_service = StagingService.from_settings(settings)

    logger.info(
        f"Gemini models: text={settings.gemini_text_model}, image fallback order={settings.gemini_image_models}"
    )
    logger.info("Application started")

    yield

    logger.info("Shutting down Room Staging API...")


app = FastAPI(
    title=settings.app_name,
    description="Clear, furnish and refine room photos with Gemini",
    version=settings.version,
    lifespan=lifespan,
    docs_url="/docs" if settings.environment == "development" else None,
    redoc_url="/redoc" if settings.environment == "development" else None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Responses carry base64 images; compress anything non-trivial
app.add_middleware(GZipMiddleware, minimum_size=1000)
app.add_middleware(RequestLoggingMiddleware)


@app.get("/health")
async def health_check():
    """Health check endpoint for load balancers"""
    return {
        "status": "healthy",
        "timestamp": time.time(),
        "version": settings.version,
    }


@app.get("/")
async def root():
    """Root endpoint with API information"""
    return {
        "name": settings.app_name,
        "version": settings.version,
        "docs": "/docs" if settings.environment == "development" else None,
        "endpoints": {
            "analyze": "/api/analyze",
            "furnish": "/api/furnish",
            "clear_region": "/api/clear-region",
            "edit": "/api/edit",
            "refine": "/api/refine",
        },
    }


app.include_router(staging.router, prefix="/api")

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.environment == "development",
        log_config=None,  # Use our custom logging
        access_log=False,  # We handle this in middleware
    )
