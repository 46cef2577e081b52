"""
Base data models - fundamental types without dependencies.

This module contains basic Pydantic models used throughout the system:
- CropArea: rectangular crop region with bounds helpers

IMPORTANT: This module must NOT import from schemas, core, services, or api
to avoid circular dependencies.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class CropArea(BaseModel):
    """
    Crop rectangle in source-image pixel coordinates.

    Any integers are accepted at construction time; bounds are only known
    once the source image is decoded, so checks happen against the image
    via ``clip``, ``is_valid`` and ``validate_with_constraints``.
    """

    x: int = Field(..., description="Left edge")
    y: int = Field(..., description="Top edge")
    width: int = Field(..., description="Width in pixels")
    height: int = Field(..., description="Height in pixels")

    def to_dict(self) -> Dict[str, int]:
        """Convert to dictionary for service layer compatibility."""
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CropArea":
        """Create CropArea from dictionary."""
        return cls(
            x=int(data.get("x", 0)),
            y=int(data.get("y", 0)),
            width=int(data.get("width", 0)),
            height=int(data.get("height", 0)),
        )

    @classmethod
    def from_points(cls, x1: int, y1: int, x2: int, y2: int) -> "CropArea":
        """Create CropArea from two corner points."""
        return cls(x=min(x1, x2), y=min(y1, y2), width=abs(x2 - x1), height=abs(y2 - y1))

    @property
    def x2(self) -> int:
        """Get right edge coordinate (exclusive)."""
        return self.x + self.width

    @property
    def y2(self) -> int:
        """Get bottom edge coordinate (exclusive)."""
        return self.y + self.height

    def clip(self, image_width: int, image_height: int) -> "CropArea":
        """
        Clip rectangle to image bounds.

        Args:
            image_width: Maximum width (image width)
            image_height: Maximum height (image height)

        Returns:
            Clipped CropArea that fits within image bounds (may be empty)
        """
        x = max(0, min(self.x, image_width))
        y = max(0, min(self.y, image_height))
        x2 = max(x, min(self.x2, image_width))
        y2 = max(y, min(self.y2, image_height))

        return CropArea.from_points(x, y, x2, y2)

    def is_valid(
        self, image_width: Optional[int] = None, image_height: Optional[int] = None
    ) -> bool:
        """
        Check if rectangle is valid.

        Args:
            image_width: Optional image width for bounds checking
            image_height: Optional image height for bounds checking

        Returns:
            True if rectangle is non-empty and inside the given bounds
        """
        if self.width <= 0 or self.height <= 0:
            return False

        if self.x < 0 or self.y < 0:
            return False

        if image_width is not None and self.x2 > image_width:
            return False

        if image_height is not None and self.y2 > image_height:
            return False

        return True

    def validate_with_constraints(
        self,
        image_width: Optional[int] = None,
        image_height: Optional[int] = None,
        min_size: int = 1,
    ) -> None:
        """
        Validate rectangle against size and bounds constraints.

        Args:
            image_width: Optional image width for bounds checking
            image_height: Optional image height for bounds checking
            min_size: Minimum width/height (default: 1)

        Raises:
            ValueError: If rectangle is invalid with descriptive error message
        """
        if self.width < min_size or self.height < min_size:
            raise ValueError(f"crop too small: {self.width}x{self.height} (min: {min_size})")

        if self.x < 0 or self.y < 0:
            raise ValueError(f"crop has negative coordinates: ({self.x}, {self.y})")

        if image_width is not None or image_height is not None:
            if not self.is_valid(image_width, image_height):
                raise ValueError(
                    f"crop {self.to_dict()} exceeds image bounds {image_width}x{image_height}"
                )
