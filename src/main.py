"""
Picverter - Main FastAPI Application
"""

import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Add parent directory to path
sys.path.append(str(Path(__file__).parent))

from api.exceptions import register_exception_handlers  # noqa: E402
from api.routers import image, system  # noqa: E402
from common.constants import APIConstants, SystemConstants  # noqa: E402
from config import get_settings  # noqa: E402

# Get configuration
settings = get_settings()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.system.log_level),
    format=SystemConstants.LOG_FORMAT,
)
if settings.system.log_file:
    file_handler = logging.FileHandler(settings.system.log_file)
    file_handler.setFormatter(logging.Formatter(SystemConstants.LOG_FORMAT))
    logging.getLogger().addHandler(file_handler)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle"""
    # Startup
    logger.info("Starting Picverter backend...")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Debug mode: {settings.system.debug}")

    # Processing context threaded into every request via dependencies
    app.state.processing_config = settings.processing
    app.state.environment = settings.environment
    app.state.debug = settings.system.debug

    logger.info(
        f"Processing config: crop_mode={settings.processing.crop_mode.value}, "
        f"temp_dir={settings.processing.temp_dir or 'system default'}"
    )

    yield

    # Shutdown
    logger.info("Picverter backend shutdown complete")


# Create FastAPI app
app = FastAPI(
    title="Picverter",
    description="Image conversion backend: decode, crop and re-encode images",
    version=APIConstants.APP_VERSION,
    lifespan=lifespan,
)

# Configure CORS for the desktop frontend
if settings.api.cors_enabled:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

# Register exception handlers
register_exception_handlers(app)

# Include routers
app.include_router(image.router, prefix="/api/image", tags=["Image"])
app.include_router(system.router, prefix="/api/system", tags=["System"])


# Root endpoint
@app.get("/")
async def root():
    return {
        "name": "Picverter",
        "status": "running",
        "version": APIConstants.APP_VERSION,
        "endpoints": {
            "image": "/api/image",
            "system": "/api/system",
            "docs": "/docs",
        },
    }


# Health check endpoint
@app.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "services": {
            "processing_config": getattr(app.state, "processing_config", None) is not None,
        },
    }


if __name__ == "__main__":
    server_config = uvicorn.Config(
        "main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.system.debug,
        log_level=settings.system.log_level.lower(),
        loop="asyncio",
    )

    server = uvicorn.Server(server_config)

    try:
        server.run()
    except KeyboardInterrupt:
        logger.info("Received keyboard interrupt, shutting down...")
    finally:
        logger.info("Server exiting...")
