"""
API Routers for Picverter
"""

from . import image, system

__all__ = ["image", "system"]
