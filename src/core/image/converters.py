"""
Image format conversions.

Decoding and encoding between raw bytes and OpenCV (BGR NumPy) buffers:
- base64 payload decoding
- content-sniffed image decoding (OpenCV, with Pillow for GIF and others)
- format dispatch for re-encoding
"""

import base64
import binascii
import io
import logging
import os
from typing import Optional

import cv2
import numpy as np
from PIL import Image, UnidentifiedImageError

from common.constants import ProcessingConstants
from common.enums import ImageFormat

logger = logging.getLogger(__name__)

# OpenCV encoder extensions; GIF goes through Pillow
OPENCV_EXTENSIONS = {
    ImageFormat.JPEG: ".jpg",
    ImageFormat.PNG: ".png",
    ImageFormat.BMP: ".bmp",
}

PIL_FORMATS = {
    ImageFormat.GIF: "GIF",
}


def decode_base64(data: str, max_size_bytes: Optional[int] = None) -> bytes:
    """
    Decode a base64 payload.

    Accepts surrounding whitespace and a ``data:<mime>;base64,`` prefix as
    produced by browser file readers.

    Args:
        data: Base64 text
        max_size_bytes: Optional limit on the decoded size

    Returns:
        Decoded bytes

    Raises:
        ValueError: If payload is empty, malformed or too large
    """
    if data is None:
        raise ValueError("payload is empty")

    payload = data.strip()
    if payload.startswith("data:"):
        marker = payload.find(ProcessingConstants.DATA_URL_MARKER)
        if marker < 0:
            raise ValueError("data URL is not base64-encoded")
        payload = payload[marker + len(ProcessingConstants.DATA_URL_MARKER) :]

    # Line breaks are ignored, as in MIME-wrapped output
    payload = payload.replace("\r", "").replace("\n", "")

    if not payload:
        raise ValueError("payload is empty")

    # Upper bound on decoded size, checked before decoding
    if max_size_bytes is not None and len(payload) * 3 // 4 > max_size_bytes:
        raise ValueError(f"payload exceeds {max_size_bytes} bytes")

    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValueError(f"illegal base64 data: {e}") from e


def decode_image(data: bytes) -> np.ndarray:
    """
    Decode encoded image bytes into a BGR image.

    The encoding is detected from content. OpenCV is tried first; encodings
    it cannot read (GIF on most builds) are decoded with Pillow.

    Args:
        data: Encoded image bytes

    Returns:
        Image as NumPy array (BGR, uint8)

    Raises:
        ValueError: If bytes are not a recognized image encoding
    """
    if not data:
        raise ValueError("image data is empty")

    buffer = np.frombuffer(data, dtype=np.uint8)
    image = cv2.imdecode(buffer, cv2.IMREAD_COLOR)
    if image is not None:
        return image

    try:
        with Image.open(io.BytesIO(data)) as pil_image:
            rgb = pil_image.convert("RGB")
            logger.debug(f"Decoded {pil_image.format} image with Pillow")
            return cv2.cvtColor(np.array(rgb), cv2.COLOR_RGB2BGR)
    except (UnidentifiedImageError, OSError) as e:
        raise ValueError(f"unrecognized image encoding: {e}") from e


def load_image(path: str) -> np.ndarray:
    """
    Load and decode an image file.

    Args:
        path: Path to image file

    Returns:
        Image as NumPy array (BGR, uint8)

    Raises:
        FileNotFoundError: If file does not exist
        OSError: If file cannot be read
        ValueError: If file is not a recognized image encoding
    """
    if not os.path.isfile(path):
        raise FileNotFoundError(f"image file not found: {path}")

    with open(path, "rb") as f:
        data = f.read()

    return decode_image(data)


def normalize_quality(
    quality: Optional[int], default: int = ProcessingConstants.DEFAULT_JPEG_QUALITY
) -> int:
    """
    Return quality if within 1-100 inclusive, otherwise the default.

    Args:
        quality: Requested quality
        default: Substitute for out-of-range values

    Returns:
        Quality to use
    """
    if (
        quality is None
        or quality < ProcessingConstants.MIN_JPEG_QUALITY
        or quality > ProcessingConstants.MAX_JPEG_QUALITY
    ):
        return default
    return quality


def encode_image(
    image: np.ndarray,
    image_format: ImageFormat,
    quality: int = ProcessingConstants.DEFAULT_JPEG_QUALITY,
) -> bytes:
    """
    Encode a BGR image into the given format.

    Args:
        image: Image as NumPy array (BGR)
        image_format: Target encoding
        quality: JPEG quality (1-100), ignored for other formats

    Returns:
        Encoded bytes

    Raises:
        ValueError: If format has no encoder or encoding fails
    """
    if image_format in PIL_FORMATS:
        return _encode_with_pil(image, PIL_FORMATS[image_format])

    extension = OPENCV_EXTENSIONS.get(image_format)
    if extension is None:
        raise ValueError(f"unsupported format: {image_format}")

    params = []
    if image_format is ImageFormat.JPEG:
        params = [cv2.IMWRITE_JPEG_QUALITY, int(quality)]

    success, buffer = cv2.imencode(extension, image, params)
    if not success:
        raise ValueError(f"failed to encode image as {image_format.value}")

    return buffer.tobytes()


def _encode_with_pil(image: np.ndarray, pil_format: str) -> bytes:
    """Encode BGR or grayscale image via Pillow with default settings."""
    if len(image.shape) == 2:
        pil_image = Image.fromarray(image)
    else:
        pil_image = Image.fromarray(cv2.cvtColor(image, cv2.COLOR_BGR2RGB))

    output = io.BytesIO()
    pil_image.save(output, format=pil_format)
    return output.getvalue()


def image_size(image: np.ndarray) -> tuple:
    """Return (width, height) of an image buffer."""
    height, width = image.shape[:2]
    return width, height
