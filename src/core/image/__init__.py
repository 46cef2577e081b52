"""
Image processing utilities - functional architecture.

This package provides focused image processing utilities as pure functions:
- converters: base64 decoding, image decoding and format-dispatched encoding
- roi: crop rectangle validation and extraction

All utilities are re-exported from this module for convenient access.
"""

# Converter functions
from core.image.converters import (
    decode_base64,
    decode_image,
    encode_image,
    image_size,
    load_image,
    normalize_quality,
)

# ROI functions
from core.image.roi import crop_image

__all__ = [
    # Converter functions
    "decode_base64",
    "decode_image",
    "encode_image",
    "image_size",
    "load_image",
    "normalize_quality",
    # ROI functions
    "crop_image",
]
