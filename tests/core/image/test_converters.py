"""
Tests for core.image.converters module.

Tests base64 decoding, content-sniffed image decoding and encoder dispatch.
"""

import base64
import io

import cv2
import numpy as np
import pytest
from PIL import Image

from common.enums import ImageFormat
from core.image.converters import (
    decode_base64,
    decode_image,
    encode_image,
    image_size,
    load_image,
    normalize_quality,
)


class TestDecodeBase64:
    """Tests for decode_base64 function."""

    def test_plain_payload(self):
        """Test decoding a plain base64 payload."""
        assert decode_base64(base64.b64encode(b"picture").decode()) == b"picture"

    def test_data_url_prefix(self):
        """Test decoding a payload with a data URL prefix."""
        payload = "data:image/png;base64," + base64.b64encode(b"picture").decode()

        assert decode_base64(payload) == b"picture"

    def test_surrounding_whitespace(self):
        """Test whitespace around the payload is ignored."""
        payload = "\n  " + base64.b64encode(b"picture").decode() + "  \n"

        assert decode_base64(payload) == b"picture"

    def test_line_wrapped_payload(self):
        """Test MIME-style line breaks inside the payload are skipped."""
        raw = bytes(range(256)) * 2
        wrapped = base64.encodebytes(raw).decode()
        assert "\n" in wrapped.strip()

        assert decode_base64(wrapped) == raw
        assert decode_base64(wrapped.replace("\n", "\r\n")) == raw

    def test_inner_spaces_rejected(self):
        """Test characters other than line breaks stay illegal."""
        encoded = base64.b64encode(b"picture").decode()

        with pytest.raises(ValueError, match="illegal base64"):
            decode_base64(encoded[:4] + " " + encoded[4:])

    @pytest.mark.parametrize("payload", ["not base64!!", "abc", "@@@@"])
    def test_malformed(self, payload):
        """Test malformed payloads are rejected."""
        with pytest.raises(ValueError, match="illegal base64"):
            decode_base64(payload)

    @pytest.mark.parametrize("payload", ["", "   ", "data:image/png;base64,", None])
    def test_empty(self, payload):
        """Test empty payloads are rejected."""
        with pytest.raises(ValueError, match="empty"):
            decode_base64(payload)

    def test_data_url_without_base64_marker(self):
        """Test non-base64 data URLs are rejected."""
        with pytest.raises(ValueError, match="not base64"):
            decode_base64("data:text/plain,hello")

    def test_size_limit(self):
        """Test oversize payloads are rejected before decoding."""
        payload = base64.b64encode(b"x" * 1000).decode()

        with pytest.raises(ValueError, match="exceeds"):
            decode_base64(payload, max_size_bytes=100)


class TestDecodeImage:
    """Tests for decode_image and load_image functions."""

    def test_decode_png(self, test_image):
        """Test decoding PNG bytes."""
        success, buffer = cv2.imencode(".png", test_image)
        assert success

        image = decode_image(buffer.tobytes())

        assert image.shape == (480, 640, 3)
        assert np.array_equal(image, test_image)

    def test_decode_gif(self):
        """Test decoding GIF bytes produced by Pillow."""
        output = io.BytesIO()
        Image.new("RGB", (32, 16), (255, 0, 0)).save(output, format="GIF")

        image = decode_image(output.getvalue())

        assert image.shape == (16, 32, 3)
        # Red in BGR order
        assert image[0, 0, 2] > 200
        assert image[0, 0, 0] < 50

    def test_decode_garbage(self):
        """Test non-image bytes are rejected."""
        with pytest.raises(ValueError, match="unrecognized image encoding"):
            decode_image(b"this is not an image")

    def test_decode_empty(self):
        """Test empty bytes are rejected."""
        with pytest.raises(ValueError, match="empty"):
            decode_image(b"")

    def test_load_image(self, png_path):
        """Test loading an image file."""
        image = load_image(png_path)

        assert image_size(image) == (640, 480)

    def test_load_missing_file(self, tmp_path):
        """Test loading a missing file."""
        with pytest.raises(FileNotFoundError):
            load_image(str(tmp_path / "missing.png"))

    def test_load_directory(self, tmp_path):
        """Test loading a directory path."""
        with pytest.raises(FileNotFoundError):
            load_image(str(tmp_path))


class TestNormalizeQuality:
    """Tests for normalize_quality function."""

    @pytest.mark.parametrize("quality", [1, 50, 100])
    def test_in_range(self, quality):
        assert normalize_quality(quality) == quality

    @pytest.mark.parametrize("quality", [0, -5, 101, 150, None])
    def test_out_of_range(self, quality):
        assert normalize_quality(quality) == 90

    def test_custom_default(self):
        assert normalize_quality(0, default=75) == 75


class TestEncodeImage:
    """Tests for encode_image function."""

    @pytest.mark.parametrize(
        "image_format,magic",
        [
            (ImageFormat.JPEG, b"\xff\xd8\xff"),
            (ImageFormat.PNG, b"\x89PNG"),
            (ImageFormat.GIF, b"GIF8"),
            (ImageFormat.BMP, b"BM"),
        ],
    )
    def test_signatures(self, test_image, image_format, magic):
        """Test each encoder produces its file signature."""
        data = encode_image(test_image, image_format, quality=80)

        assert data.startswith(magic)

    @pytest.mark.parametrize("image_format", list(ImageFormat))
    def test_dimensions_preserved(self, test_image, image_format):
        """Test encoded output decodes to the same dimensions."""
        data = encode_image(test_image, image_format, quality=80)

        decoded = decode_image(data)

        assert decoded.shape == test_image.shape

    def test_lossless_formats_exact(self, test_image):
        """Test PNG and BMP preserve pixels exactly."""
        for image_format in (ImageFormat.PNG, ImageFormat.BMP):
            decoded = decode_image(encode_image(test_image, image_format))
            assert np.array_equal(decoded, test_image)

    def test_jpeg_quality_affects_size(self, test_image):
        """Test lower JPEG quality gives smaller output."""
        noisy = np.random.default_rng(0).integers(0, 255, (120, 160, 3), dtype=np.uint8)

        low = encode_image(noisy, ImageFormat.JPEG, quality=10)
        high = encode_image(noisy, ImageFormat.JPEG, quality=95)

        assert len(low) < len(high)

    def test_gif_from_grayscale(self):
        """Test GIF encoding of a single-channel image."""
        gray = np.full((20, 30), 128, dtype=np.uint8)

        data = encode_image(gray, ImageFormat.GIF)

        assert decode_image(data).shape == (20, 30, 3)
