"""
Image API Router - Image conversion operations
"""

import logging
import time

from fastapi import APIRouter, Depends

from api.dependencies import get_image_service
from api.exceptions import safe_endpoint
from schemas import (
    ProcessBase64Request,
    ProcessImageRequest,
    ProcessImageResponse,
    SupportedFormatsResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/process")
@safe_endpoint
def process_image(
    request: ProcessImageRequest, image_service=Depends(get_image_service)
) -> ProcessImageResponse:
    """
    Convert an image file on disk.

    Decodes the file, applies the optional crop, re-encodes it in the
    requested format and writes ``{basename}_processed.{format}`` next to
    the source or into ``output_dir``.

    Args:
        request: Source path, options and optional output directory
        image_service: Image service dependency

    Returns:
        ProcessImageResponse with the output path and image details
    """
    start_time = time.time()

    result = image_service.convert_file(
        request.path, request.options, output_dir=request.output_dir
    )

    return ProcessImageResponse(
        output_path=result.output_path,
        format=result.format,
        width=result.width,
        height=result.height,
        size_bytes=result.size_bytes,
        processing_time_ms=int((time.time() - start_time) * 1000),
    )


@router.post("/process-base64")
@safe_endpoint
def process_image_from_base64(
    request: ProcessBase64Request, image_service=Depends(get_image_service)
) -> ProcessImageResponse:
    """
    Convert a base64-encoded image.

    The payload is staged in a scratch file that is removed once the
    request finishes, successfully or not.

    Args:
        request: Base64 payload, options, optional output directory and filename
        image_service: Image service dependency

    Returns:
        ProcessImageResponse with the output path and image details
    """
    start_time = time.time()

    result = image_service.convert_base64(
        request.data,
        request.options,
        output_dir=request.output_dir,
        filename=request.filename,
    )

    return ProcessImageResponse(
        output_path=result.output_path,
        format=result.format,
        width=result.width,
        height=result.height,
        size_bytes=result.size_bytes,
        processing_time_ms=int((time.time() - start_time) * 1000),
    )


@router.get("/formats")
@safe_endpoint
async def list_supported_formats(
    image_service=Depends(get_image_service),
) -> SupportedFormatsResponse:
    """List advertised output formats"""
    return SupportedFormatsResponse(formats=image_service.list_supported_formats())
