# src/image_gateway/config/settings.py
from typing import Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """
    Single source of truth for all gateway settings.

    Configuration precedence:
    1. Environment variables (highest priority)
    2. .env file (if exists)
    3. Default values in this class (lowest priority)

    Usage:
        from image_gateway.config.settings import get_settings
        settings = get_settings()
        bucket_name = settings.s3_bucket
    """

    # S3 Configuration
    s3_bucket: str = Field(
        alias="S3_BUCKET",
        min_length=1,
        description="Destination bucket for uploaded images"
    )

    # AWS Core Settings
    aws_region: Optional[str] = Field(
        default=None,
        alias="AWS_REGION",
        description="Region for the S3 client (falls back to the default chain when unset)"
    )

    aws_endpoint_url: Optional[str] = Field(
        default=None,
        alias="AWS_ENDPOINT_URL",
        description="Custom S3 endpoint, e.g. a moto server or S3-compatible store"
    )

    # Auth
    api_token: str = Field(
        default="",
        alias="GO_S3_API_TOKEN",
        description="Shared secret expected in the X-API-Token header"
    )

    # Server
    host: str = Field(
        default="0.0.0.0",
        alias="HOST",
    )

    port: int = Field(
        default=8080,
        alias="PORT",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        alias="LOG_LEVEL",
        description="Logging level"
    )

    @field_validator('api_token')
    def validate_api_token(cls, v):
        """An unset token would make every request fail auth, so refuse to boot."""
        if not v:
            raise ValueError("GO_S3_API_TOKEN must be set to a non-empty value")
        return v

    @field_validator('log_level')
    def normalize_log_level(cls, v):
        return v.upper()

    @property
    def masked_api_token(self) -> str:
        """Token with everything but the last four characters hidden."""
        if len(self.api_token) <= 4:
            return "*" * len(self.api_token)
        return "*" * (len(self.api_token) - 4) + self.api_token[-4:]

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
        validate_default=True,
        frozen=True,
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    This ensures we only create one Settings instance per process.
    """
    return Settings()
