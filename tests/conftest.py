"""
Pytest configuration and fixtures for Picverter tests
"""

import base64

import cv2
import numpy as np
import pytest

from config import ProcessingConfig
from services.image_service import ImageService


@pytest.fixture
def test_image():
    """Create a test image for testing"""
    image = np.zeros((480, 640, 3), dtype=np.uint8)
    # Add some content
    cv2.rectangle(image, (100, 100), (300, 300), (255, 255, 255), -1)
    cv2.circle(image, (450, 350), 50, (128, 128, 128), -1)
    image[0:20, 0:20] = (0, 0, 255)
    return image


@pytest.fixture
def source_dir(tmp_path):
    """Directory holding source images"""
    directory = tmp_path / "source"
    directory.mkdir()
    return directory


@pytest.fixture
def scratch_dir(tmp_path):
    """Directory used for scratch files"""
    directory = tmp_path / "scratch"
    directory.mkdir()
    return directory


@pytest.fixture
def png_path(source_dir, test_image):
    """Write the test image as PNG and return its path"""
    path = source_dir / "photo.png"
    assert cv2.imwrite(str(path), test_image)
    return str(path)


@pytest.fixture
def png_base64(png_path):
    """Base64 encoding of the test PNG"""
    with open(png_path, "rb") as f:
        return base64.b64encode(f.read()).decode("ascii")


@pytest.fixture
def processing_config(scratch_dir):
    """ProcessingConfig with scratch files in a temporary directory"""
    return ProcessingConfig(temp_dir=str(scratch_dir))


@pytest.fixture
def image_service(processing_config):
    """Create ImageService instance for testing"""
    return ImageService(config=processing_config)

