"""
Schemas Package

This package contains all Pydantic schemas for data validation and serialization,
organized by domain for better maintainability.

These schemas are shared across all application layers:
- API (routers, dependencies)
- Services (business logic)
"""

# Re-export base types and enums for convenience
from common.base import CropArea
from common.enums import CropMode, ImageFormat

# Image processing models
from .image import (
    ProcessBase64Request,
    ProcessImageRequest,
    ProcessImageResponse,
    ProcessOptions,
    SupportedFormatsResponse,
)

# System models
from .system import GreetResponse, SystemStatus

# Explicitly declare public API for re-export
__all__ = [
    # Base models
    "CropArea",
    # Image models
    "ProcessOptions",
    "ProcessImageRequest",
    "ProcessBase64Request",
    "ProcessImageResponse",
    "SupportedFormatsResponse",
    # System models
    "SystemStatus",
    "GreetResponse",
    # Enums
    "CropMode",
    "ImageFormat",
]
