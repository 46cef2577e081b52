"""
Image processing API models.

This module contains models for image conversion:
- ProcessOptions, the per-call encode/crop options
- Requests for path-based and base64-based processing
- Responses for processing results and the format list
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from common.base import CropArea
from common.constants import ProcessingConstants


class ProcessOptions(BaseModel):
    """
    Options for a single processing call.

    ``format`` is kept as a plain string so unsupported or missing tags reach
    the encoder dispatch and fail with UnsupportedFormatError rather than a
    request validation error. ``quality`` is not range-checked here either:
    a null or out-of-range JPEG quality falls back to the configured default.
    """

    format: str = Field(default="", description="Output format tag: jpeg, png, gif or bmp")
    quality: Optional[int] = Field(
        default=ProcessingConstants.DEFAULT_JPEG_QUALITY,
        description="Encoding quality (1-100), used for JPEG only",
    )
    crop: Optional[CropArea] = Field(None, description="Optional crop rectangle")


class ProcessImageRequest(BaseModel):
    """Request to process an image file on disk"""

    path: str = Field(..., description="Path to the source image")
    options: ProcessOptions
    output_dir: Optional[str] = Field(
        None, description="Directory for the output file (defaults to the source directory)"
    )


class ProcessBase64Request(BaseModel):
    """Request to process a base64-encoded image"""

    data: str = Field(..., description="Base64 payload, optionally with a data URL prefix")
    options: ProcessOptions
    output_dir: Optional[str] = Field(None, description="Directory for the output file")
    filename: Optional[str] = Field(
        None, description="Original filename, used to name the output file"
    )


class ProcessImageResponse(BaseModel):
    """Result of a processing call"""

    output_path: str = Field(..., description="Path of the written file")
    format: str = Field(..., description="Format tag used for encoding")
    width: int = Field(..., description="Output width in pixels")
    height: int = Field(..., description="Output height in pixels")
    size_bytes: int = Field(..., description="Size of the written file")
    processing_time_ms: int = Field(..., description="Processing time in milliseconds")


class SupportedFormatsResponse(BaseModel):
    """Advertised output formats"""

    formats: List[str]
