"""
Service Layer - Business logic layer between routers and core utilities.

Services implement business rules on top of the pure functions in core
and provide a clean interface for routers.
"""

from .image_service import ImageService, ProcessResult

__all__ = ["ImageService", "ProcessResult"]
