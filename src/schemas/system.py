"""
System-related API models.

This module contains models for system status and the greeting endpoint.
"""

from typing import List

from pydantic import BaseModel


class SystemStatus(BaseModel):
    """System status information"""

    status: str
    version: str
    uptime: float
    environment: str
    supported_formats: List[str]
    crop_mode: str


class GreetResponse(BaseModel):
    """Greeting message"""

    message: str
