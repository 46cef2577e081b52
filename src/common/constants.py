"""
Constants and configuration values for the Picverter backend.
Centralizes all magic numbers and configuration constants.
"""


# Image Processing Constants
class ProcessingConstants:
    """Constants related to decoding, cropping and re-encoding images."""

    # Encoding
    DEFAULT_JPEG_QUALITY = 90
    MIN_JPEG_QUALITY = 1
    MAX_JPEG_QUALITY = 100

    # Output naming: {dir}/{basename}_processed.{format}
    OUTPUT_SUFFIX = "_processed"

    # Scratch files for base64 input
    TEMP_PREFIX = "picverter_"
    TEMP_SUFFIX = ".tmp"

    # Base64 payloads
    MAX_BASE64_SIZE_MB = 50
    DATA_URL_MARKER = ";base64,"


# API Constants
class APIConstants:
    """Constants for API endpoints."""

    # Server defaults (local desktop backend)
    DEFAULT_HOST = "127.0.0.1"
    DEFAULT_PORT = 34115

    # API versions
    APP_VERSION = "1.0.0"

    # Greeting returned by the system router
    GREETING_TEMPLATE = "Hello {name}, It's show time!"


# System Constants
class SystemConstants:
    """Constants for system operations."""

    # Logging
    LOG_LEVEL_DEFAULT = "INFO"
    LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

    # Environments
    VALID_ENVIRONMENTS = ["development", "staging", "production", "test"]
