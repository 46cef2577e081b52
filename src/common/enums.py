"""
Centralized enums for the Picverter backend.

This module contains all enumeration types used throughout the system,
providing a single source of truth for enum definitions.
"""

from enum import Enum
from typing import List


class ImageFormat(str, Enum):
    """Output encodings accepted by the encoder dispatch."""

    JPEG = "jpeg"
    PNG = "png"
    GIF = "gif"
    BMP = "bmp"

    @classmethod
    def from_tag(cls, tag: str) -> "ImageFormat":
        """
        Resolve a format tag to an ImageFormat.

        Matching is case-insensitive and accepts the "jpg" alias for JPEG.

        Args:
            tag: Requested format tag

        Returns:
            Matching ImageFormat

        Raises:
            ValueError: If tag is not an accepted format
        """
        normalized = (tag or "").lower()
        normalized = FORMAT_ALIASES.get(normalized, normalized)
        try:
            return cls(normalized)
        except ValueError:
            raise ValueError(f"unsupported format: {tag}") from None

    @classmethod
    def tags(cls) -> List[str]:
        """Advertised format tags in declaration order (aliases excluded)."""
        return [member.value for member in cls]


# Input-only aliases, never advertised by list_supported_formats
FORMAT_ALIASES = {
    "jpg": ImageFormat.JPEG.value,
}


class CropMode(str, Enum):
    """How crop rectangles outside the image bounds are treated."""

    STRICT = "strict"  # reject
    CLIP = "clip"  # clip to bounds, reject only if nothing is left
