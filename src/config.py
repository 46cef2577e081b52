"""
Configuration management using Pydantic for Picverter.
Provides type-safe configuration with validation and environment variable support.
"""

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from common.constants import APIConstants, ProcessingConstants, SystemConstants
from common.enums import CropMode

logger = logging.getLogger(__name__)


class ProcessingConfig(BaseSettings):
    """Image processing configuration."""

    default_jpeg_quality: int = Field(
        default=ProcessingConstants.DEFAULT_JPEG_QUALITY,
        ge=ProcessingConstants.MIN_JPEG_QUALITY,
        le=ProcessingConstants.MAX_JPEG_QUALITY,
        description="JPEG quality used when the requested quality is out of range",
    )
    output_suffix: str = Field(
        default=ProcessingConstants.OUTPUT_SUFFIX,
        description="Suffix appended to the output base name",
    )
    temp_dir: Optional[str] = Field(
        default=None, description="Directory for scratch files (system temp if unset)"
    )
    temp_prefix: str = Field(
        default=ProcessingConstants.TEMP_PREFIX, description="Scratch file name prefix"
    )
    temp_suffix: str = Field(
        default=ProcessingConstants.TEMP_SUFFIX, description="Scratch file name suffix"
    )
    output_dir: Optional[str] = Field(
        default=None,
        description="Default output directory for base64 input (scratch directory if unset)",
    )
    crop_mode: CropMode = Field(
        default=CropMode.STRICT, description="Handling of crop rectangles outside the image"
    )
    max_base64_size_mb: int = Field(
        default=ProcessingConstants.MAX_BASE64_SIZE_MB,
        ge=1,
        le=1000,
        description="Maximum decoded size of a base64 payload in MB",
    )

    @field_validator("temp_dir", "output_dir")
    @classmethod
    def create_directories(cls, v):
        """Ensure configured directories exist."""
        if v is None:
            return v
        path = Path(v)
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ValueError(f"Cannot create directory {v}: {e}")
        return str(path.absolute())

    @field_validator("output_suffix")
    @classmethod
    def validate_suffix(cls, v):
        """Reject suffixes that would change the output directory."""
        if "/" in v or "\\" in v:
            raise ValueError(f"Invalid output suffix: {v}")
        return v

    @property
    def max_base64_size_bytes(self) -> int:
        return self.max_base64_size_mb * 1024 * 1024

    model_config = SettingsConfigDict(env_prefix="PV_PROCESSING_", extra="ignore")


class APIConfig(BaseSettings):
    """API configuration."""

    host: str = Field(default=APIConstants.DEFAULT_HOST, description="API host address")
    port: int = Field(default=APIConstants.DEFAULT_PORT, ge=1, le=65535, description="API port")
    cors_enabled: bool = Field(default=True, description="Enable CORS")
    cors_origins: List[str] = Field(
        default_factory=list, description="CORS allowed origins (none by default)"
    )

    model_config = SettingsConfigDict(env_prefix="PV_API_", extra="ignore")


class SystemConfig(BaseSettings):
    """System configuration."""

    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default=SystemConstants.LOG_LEVEL_DEFAULT, description="Logging level")
    log_file: Optional[str] = Field(default=None, description="Log file path")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        v_upper = v.upper()
        if v_upper not in SystemConstants.VALID_LOG_LEVELS:
            raise ValueError(
                f"Invalid log level: {v}. Must be one of {SystemConstants.VALID_LOG_LEVELS}"
            )
        return v_upper

    model_config = SettingsConfigDict(env_prefix="PV_SYSTEM_", extra="ignore")


class Settings(BaseSettings):
    """Main application settings."""

    # Sub-configurations
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)
    api: APIConfig = Field(default_factory=APIConfig)
    system: SystemConfig = Field(default_factory=SystemConfig)

    # Environment
    environment: str = Field(
        default="production", description="Environment (development, staging, production)"
    )

    # Config file support
    config_file: Optional[str] = Field(default=None, description="Path to YAML config file")

    @model_validator(mode="before")
    @classmethod
    def load_config_file(cls, values):
        """Load configuration from YAML file if specified."""
        if not isinstance(values, dict):
            return values

        config_file = values.get("config_file") or os.getenv("PV_CONFIG_FILE")

        if config_file and Path(config_file).exists():
            try:
                with open(config_file, "r") as f:
                    file_config = yaml.safe_load(f)
                    if file_config:
                        # Merge file config with values (env vars take precedence)
                        for key, value in file_config.items():
                            if key not in values or values[key] is None:
                                values[key] = value
            except (OSError, yaml.YAMLError) as e:
                logger.warning(f"Failed to load config file {config_file}: {e}")

        return values

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v):
        """Validate environment value."""
        if v not in SystemConstants.VALID_ENVIRONMENTS:
            raise ValueError(
                f"Invalid environment: {v}. Must be one of {SystemConstants.VALID_ENVIRONMENTS}"
            )
        return v

    def to_dict(self) -> Dict[str, Any]:
        """Convert settings to dictionary."""
        return self.model_dump(mode="json", exclude_none=True)

    def save_to_file(self, path: str) -> None:
        """Save current configuration to YAML file."""
        config_dict = self.to_dict()
        with open(path, "w") as f:
            yaml.dump(config_dict, f, default_flow_style=False)

    model_config = SettingsConfigDict(
        env_prefix="PV_", case_sensitive=False, env_nested_delimiter="__", extra="ignore"
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings object with validated configuration
    """
    return Settings()


# Convenience function to reload settings (clears cache)
def reload_settings() -> Settings:
    """
    Reload settings, clearing the cache.

    Returns:
        Fresh Settings object
    """
    get_settings.cache_clear()
    return get_settings()
