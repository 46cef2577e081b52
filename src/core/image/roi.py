"""
Crop rectangle handling.

Provides the crop stage of the processing pipeline. Works with the
CropArea Pydantic model from common.base.
"""

import logging
from typing import Dict, Union

import numpy as np

from common.base import CropArea
from common.enums import CropMode

logger = logging.getLogger(__name__)


def crop_image(
    image: np.ndarray,
    crop: Union[CropArea, Dict],
    mode: CropMode = CropMode.STRICT,
) -> np.ndarray:
    """
    Crop image to the sub-rectangle [x, x+width) x [y, y+height).

    Args:
        image: Input image
        crop: CropArea object or dictionary
        mode: STRICT rejects rectangles outside the image,
            CLIP clips them to the image bounds first

    Returns:
        Cropped image (a copy, never a view of the input)

    Raises:
        ValueError: If the rectangle is invalid for this image
    """
    if isinstance(crop, dict):
        crop = CropArea.from_dict(crop)

    img_height, img_width = image.shape[:2]

    if mode == CropMode.CLIP:
        clipped = crop.clip(img_width, img_height)
        if clipped.width <= 0 or clipped.height <= 0:
            raise ValueError(
                f"crop {crop.to_dict()} is empty after clipping to {img_width}x{img_height}"
            )
        if clipped != crop:
            logger.debug(f"Crop clipped from {crop.to_dict()} to {clipped.to_dict()}")
        crop = clipped
    else:
        crop.validate_with_constraints(image_width=img_width, image_height=img_height)

    return image[crop.y : crop.y2, crop.x : crop.x2].copy()
