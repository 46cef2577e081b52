"""
Tests for image processing schemas.
"""

import pytest
from pydantic import ValidationError

from schemas import CropArea, ProcessBase64Request, ProcessImageRequest, ProcessOptions


class TestProcessOptions:
    """Tests for ProcessOptions model"""

    def test_wire_shape(self):
        """Test parsing the JSON wire shape"""
        options = ProcessOptions.model_validate(
            {"format": "jpeg", "quality": 85, "crop": {"x": 1, "y": 2, "width": 3, "height": 4}}
        )

        assert options.format == "jpeg"
        assert options.quality == 85
        assert options.crop == CropArea(x=1, y=2, width=3, height=4)

    def test_null_crop(self):
        """Test explicit null crop means no crop"""
        options = ProcessOptions.model_validate({"format": "png", "quality": 90, "crop": None})

        assert options.crop is None

    def test_defaults(self):
        """Test quality and crop defaults"""
        options = ProcessOptions(format="png")

        assert options.quality == 90
        assert options.crop is None

    def test_unknown_format_accepted(self):
        """Test format tags are not validated at parse time"""
        assert ProcessOptions(format="xml").format == "xml"

    def test_out_of_range_quality_accepted(self):
        """Test quality is not range-checked at parse time"""
        assert ProcessOptions(format="jpeg", quality=150).quality == 150

    def test_missing_format_and_null_quality(self):
        """Test absent format and null quality parse to empty values"""
        options = ProcessOptions.model_validate({"quality": None})

        assert options.format == ""
        assert options.quality is None

    def test_serializes_to_wire_shape(self):
        """Test dumping back to the wire shape"""
        options = ProcessOptions(format="gif", quality=70)

        assert options.model_dump() == {"format": "gif", "quality": 70, "crop": None}


class TestProcessRequests:
    """Tests for request models"""

    def test_process_image_request(self):
        request = ProcessImageRequest.model_validate(
            {"path": "/images/a.png", "options": {"format": "bmp", "quality": 90}}
        )

        assert request.path == "/images/a.png"
        assert request.output_dir is None

    def test_process_base64_request(self):
        request = ProcessBase64Request.model_validate(
            {"data": "AAAA", "options": {"format": "png"}, "filename": "a.png"}
        )

        assert request.filename == "a.png"
        assert request.options.format == "png"

    def test_missing_options(self):
        with pytest.raises(ValidationError):
            ProcessImageRequest.model_validate({"path": "/images/a.png"})
