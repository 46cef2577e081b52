"""
System API Router - Status and greeting
"""

import logging
import time

from fastapi import APIRouter, Depends, Request

from api.dependencies import get_processing_config
from api.exceptions import safe_endpoint
from common.constants import APIConstants
from common.enums import ImageFormat
from schemas import GreetResponse, SystemStatus

logger = logging.getLogger(__name__)

router = APIRouter()

# Track start time
START_TIME = time.time()


def greet(name: str) -> str:
    """Return the greeting for name."""
    return APIConstants.GREETING_TEMPLATE.format(name=name)


@router.get("/greet")
@safe_endpoint
async def get_greeting(name: str = "") -> GreetResponse:
    """Greet the caller"""
    return GreetResponse(message=greet(name))


@router.get("/status")
@safe_endpoint
async def get_status(request: Request, config=Depends(get_processing_config)) -> SystemStatus:
    """Get system status"""
    return SystemStatus(
        status="healthy",
        version=APIConstants.APP_VERSION,
        uptime=time.time() - START_TIME,
        environment=getattr(request.app.state, "environment", "production"),
        supported_formats=ImageFormat.tags(),
        crop_mode=config.crop_mode.value,
    )
