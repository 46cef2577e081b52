"""
Shared FastAPI dependencies for Picverter.
Centralizes common dependencies to eliminate code duplication.
"""

import logging

from fastapi import Depends, HTTPException, Request

from config import ProcessingConfig
from services.image_service import ImageService

logger = logging.getLogger(__name__)


def get_processing_config(request: Request) -> ProcessingConfig:
    """
    Get processing configuration from app state.

    Args:
        request: FastAPI request object

    Returns:
        ProcessingConfig set up by the application lifespan

    Raises:
        HTTPException: If configuration not initialized
    """
    try:
        return request.app.state.processing_config
    except AttributeError as e:
        logger.error(f"Processing config not initialized in app state: {e}")
        raise HTTPException(
            status_code=500, detail="Internal server error: Processing config not initialized"
        )


# Service layer dependencies
def get_image_service(
    config: ProcessingConfig = Depends(get_processing_config),
) -> ImageService:
    """
    Get image service instance.

    Args:
        config: Processing configuration dependency

    Returns:
        ImageService instance
    """
    return ImageService(config=config)
