"""
Application configuration using Pydantic Settings
"""

from pydantic_settings import BaseSettings
from pydantic import field_validator


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    # Image Upload Settings
    image_upload_endpoint: str = ""
    upload_timeout: int = 300  # 5 minutes
    upload_chunk_size: int = 64 * 1024
    upload_field_name: str = "file"
    """
    image_upload_endpoint: base URL, requests go to <endpoint>/<user>/<signature>
    upload_timeout: total seconds allowed for one transfer
    upload_chunk_size: bytes per streamed body chunk (progress granularity)
    """

    # Identity Settings (used by SettingsIdentityProvider)
    posting_user: str = ""
    posting_key: str = ""

    # Logging Settings
    log_level: str = "INFO"
    log_format: str = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"
    log_date_format: str = "%Y-%m-%d %H:%M:%S"

    @field_validator("image_upload_endpoint")
    @classmethod
    def strip_endpoint(cls, v):
        """Drop surrounding whitespace and trailing slashes.

        Example:
            >>> strip_endpoint("https://images.example.com/ ")
            'https://images.example.com'
        """
        return (v or "").strip().rstrip("/")

    @field_validator("upload_chunk_size")
    @classmethod
    def positive_chunk_size(cls, v):
        if v <= 0:
            raise ValueError("upload_chunk_size must be positive")
        return v

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


# Global settings instance
settings = Settings()
