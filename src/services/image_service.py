"""
Image Service - Business logic for image conversion.

This service implements the processing pipeline used by the API layer:
decode the source, optionally crop it, re-encode it into the requested
format and write it next to the source (or into an explicit directory).
"""

import logging
import os
from contextlib import ExitStack
from dataclasses import dataclass
from typing import Dict, List, Optional, Union

import numpy as np

from api.exceptions import (
    Base64DecodeError,
    DecodeError,
    InvalidCropError,
    TempFileError,
    UnsupportedFormatError,
    WriteError,
)
from common.base import CropArea
from common.enums import ImageFormat
from config import ProcessingConfig
from core.file_manager import build_output_path, scratch_file, write_output
from core.image import (
    crop_image,
    decode_base64,
    encode_image,
    image_size,
    load_image,
    normalize_quality,
)
from schemas import ProcessOptions

logger = logging.getLogger(__name__)


@dataclass
class ProcessResult:
    """Outcome of a successful processing call."""

    output_path: str
    format: str
    width: int
    height: int
    size_bytes: int


class ImageService:
    """
    Service for image conversion: load, crop, encode and write.

    Each call is independent; the service holds only its configuration.
    """

    def __init__(self, config: Optional[ProcessingConfig] = None):
        """
        Initialize image service.

        Args:
            config: Processing configuration (defaults from environment if omitted)
        """
        self.config = config or ProcessingConfig()

    def list_supported_formats(self) -> List[str]:
        """
        Get advertised output formats.

        Returns:
            ["jpeg", "png", "gif", "bmp"], always in this order
        """
        return ImageFormat.tags()

    def process_image(
        self,
        path: str,
        options: Union[ProcessOptions, Dict],
        output_dir: Optional[str] = None,
    ) -> str:
        """
        Process an image file and return the output path.

        Args:
            path: Path to the source image
            options: Processing options
            output_dir: Output directory (defaults to the source directory)

        Returns:
            Path of the written file

        Raises:
            DecodeError: If the source cannot be read or decoded
            InvalidCropError: If the crop rectangle does not fit the image
            UnsupportedFormatError: If the format is not accepted
            WriteError: If the output cannot be encoded or written
        """
        return self.convert_file(path, options, output_dir=output_dir).output_path

    def process_image_from_base64(
        self,
        data: str,
        options: Union[ProcessOptions, Dict],
        output_dir: Optional[str] = None,
        filename: Optional[str] = None,
    ) -> str:
        """
        Process a base64-encoded image and return the output path.

        Args:
            data: Base64 payload (a data URL prefix is accepted)
            options: Processing options
            output_dir: Output directory (defaults to config, then scratch directory)
            filename: Original filename used to name the output

        Returns:
            Path of the written file

        Raises:
            Base64DecodeError: If the payload is malformed
            TempFileError: If the scratch file cannot be created
            DecodeError, InvalidCropError, UnsupportedFormatError, WriteError:
                As for process_image
        """
        return self.convert_base64(
            data, options, output_dir=output_dir, filename=filename
        ).output_path

    def convert_file(
        self,
        path: str,
        options: Union[ProcessOptions, Dict],
        output_dir: Optional[str] = None,
        base_name: Optional[str] = None,
    ) -> ProcessResult:
        """
        Run the full pipeline on an image file.

        Args:
            path: Path to the source image
            options: Processing options
            output_dir: Output directory (defaults to the source directory)
            base_name: Name to derive the output from instead of the source name

        Returns:
            ProcessResult describing the written file
        """
        options = self._coerce_options(options)

        image = self._load(path)

        if options.crop is not None:
            image = self._crop(image, options.crop)

        format_tag = options.format
        output_path = build_output_path(
            path,
            format_tag,
            output_dir=output_dir,
            suffix=self.config.output_suffix,
            base_name=base_name,
        )

        data = self._encode(image, options, output_path)
        size_bytes = self._write(output_path, data)

        width, height = image_size(image)
        logger.info(
            f"Processed {path} -> {output_path} "
            f"({format_tag}, {width}x{height}, {size_bytes} bytes)"
        )

        return ProcessResult(
            output_path=output_path,
            format=format_tag,
            width=width,
            height=height,
            size_bytes=size_bytes,
        )

    def convert_base64(
        self,
        data: str,
        options: Union[ProcessOptions, Dict],
        output_dir: Optional[str] = None,
        filename: Optional[str] = None,
    ) -> ProcessResult:
        """
        Run the full pipeline on a base64 payload via a scratch file.

        The payload is validated before any file is touched; the scratch
        file is removed whether processing succeeds or fails.
        """
        options = self._coerce_options(options)

        try:
            payload = decode_base64(data, max_size_bytes=self.config.max_base64_size_bytes)
        except ValueError as e:
            raise Base64DecodeError(str(e)) from e

        target_dir = output_dir if output_dir is not None else self.config.output_dir
        base_name = os.path.basename(filename) if filename else None

        with ExitStack() as stack:
            try:
                scratch_path = stack.enter_context(
                    scratch_file(
                        payload,
                        temp_dir=self.config.temp_dir,
                        prefix=self.config.temp_prefix,
                        suffix=self.config.temp_suffix,
                    )
                )
            except OSError as e:
                raise TempFileError("create", str(e)) from e

            return self.convert_file(
                scratch_path, options, output_dir=target_dir, base_name=base_name
            )

    def _coerce_options(self, options: Union[ProcessOptions, Dict]) -> ProcessOptions:
        if isinstance(options, dict):
            return ProcessOptions.model_validate(options)
        return options

    def _load(self, path: str) -> np.ndarray:
        try:
            return load_image(path)
        except FileNotFoundError as e:
            raise DecodeError(path, str(e), status_code=404) from e
        except (OSError, ValueError) as e:
            raise DecodeError(path, str(e)) from e

    def _crop(self, image: np.ndarray, crop: CropArea) -> np.ndarray:
        try:
            return crop_image(image, crop, mode=self.config.crop_mode)
        except ValueError as e:
            raise InvalidCropError(crop.to_dict(), str(e)) from e

    def _encode(self, image: np.ndarray, options: ProcessOptions, output_path: str) -> bytes:
        try:
            image_format = ImageFormat.from_tag(options.format)
        except ValueError:
            raise UnsupportedFormatError(options.format, self.list_supported_formats()) from None

        quality = normalize_quality(options.quality, default=self.config.default_jpeg_quality)
        if image_format is ImageFormat.JPEG and quality != options.quality:
            logger.debug(f"JPEG quality {options.quality} out of range, using {quality}")

        try:
            return encode_image(image, image_format, quality)
        except ValueError as e:
            raise WriteError(output_path, str(e)) from e

    def _write(self, output_path: str, data: bytes) -> int:
        try:
            return write_output(output_path, data)
        except OSError as e:
            raise WriteError(output_path, str(e)) from e
