"""Configuration management for the curl logger service."""

from typing import List
from pydantic import field_validator
from pydantic_settings import BaseSettings

from .capture.encoding import check_charset


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # Application settings
    app_name: str = "curl-logger"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8000

    # Capture settings
    curl_logging_enabled: bool = True
    curl_skip_paths: List[str] = ["/health", "/live", "/docs", "/redoc", "/openapi.json"]
    default_charset: str = "utf-8"
    canonical_header_names: bool = True

    # Logging settings
    log_level: str = "DEBUG"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @field_validator("default_charset")
    @classmethod
    def validate_default_charset(cls, v):
        """Validate that the fallback charset can decode request bodies."""
        try:
            return check_charset(v)
        except (LookupError, UnicodeError) as e:
            raise ValueError(f"Unusable body encoding {v}: {e}")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
        "env_parse_none_str": True,
    }


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get application settings."""
    return settings
