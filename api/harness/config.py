"""Configuration management for the Security & Pagination Harness API."""

from typing import List, Optional
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # Application settings
    app_name: str = "Security & Pagination Harness API"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 3000

    # Rate limiting settings
    rate_limits: str = "general:100/15m,strict:5/m"
    rate_limit_strict_paths: List[str] = ["/api/login"]
    rate_limit_skip_paths: List[str] = ["/health", "/live", "/docs", "/redoc", "/openapi.json"]
    rate_limit_message: str = "Too many requests from this IP, please try again later."
    rate_limit_strict_message: str = "Too many attempts, please slow down."
    trust_proxy: bool = False

    # CORS settings
    cors_origins: List[str] = ["http://localhost:3000", "http://localhost:5173"]
    cors_allow_credentials: bool = True
    cors_allow_methods: List[str] = ["GET", "POST", "PUT", "DELETE"]
    cors_allow_headers: List[str] = ["Content-Type", "Authorization"]

    # Security header settings
    security_headers_enabled: bool = True
    hsts_max_age: int = Field(default=15552000, ge=0)

    # Logging settings
    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    log_requests: bool = True

    # Pagination settings
    default_page_size: int = Field(default=10, ge=1)
    max_page_size: int = Field(default=50, ge=1)
    cursor_default_limit: int = Field(default=10, ge=1)
    cursor_max_limit: Optional[int] = Field(default=None, ge=1)

    # Mock data settings
    user_count: int = Field(default=100, ge=0)
    product_count: int = Field(default=50, ge=0)
    data_seed: Optional[int] = None


    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @model_validator(mode="after")
    def validate_page_sizes(self):
        """Default page sizes must fit under their caps."""
        if self.default_page_size > self.max_page_size:
            raise ValueError("default_page_size must not exceed max_page_size")
        if self.cursor_max_limit is not None and self.cursor_default_limit > self.cursor_max_limit:
            raise ValueError("cursor_default_limit must not exceed cursor_max_limit")
        return self

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
        "env_parse_none_str": "null",
    }


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get application settings."""
    return settings
