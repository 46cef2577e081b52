"""
Types package - fundamental types without external dependencies.

This package contains basic types that are used throughout the system:
- Enums (ImageFormat, CropMode)
- Constants (ProcessingConstants, APIConstants, SystemConstants)
- Base models (CropArea)

IMPORTANT: This package must NOT import from any other project packages
(schemas, core, services, api) to avoid circular dependencies.
"""

# Export base models
from common.base import CropArea

# Export all constants
from common.constants import APIConstants, ProcessingConstants, SystemConstants

# Export all enums
from common.enums import FORMAT_ALIASES, CropMode, ImageFormat

__all__ = [
    # Enums
    "CropMode",
    "FORMAT_ALIASES",
    "ImageFormat",
    # Constants
    "APIConstants",
    "ProcessingConstants",
    "SystemConstants",
    # Base models
    "CropArea",
]
