"""HTTP server settings for the tracker API"""

import os
from pydantic_settings import BaseSettings
from pydantic import field_validator
from functools import lru_cache
from typing import Union

from job_tracker import __version__


class APISettings(BaseSettings):
    """API-specific settings loaded from environment"""

    # App info
    app_name: str = "Job Application Tracker"
    app_version: str = __version__
    environment: str = "development"
    debug: bool = False

    # Server settings
    host: str = "0.0.0.0"
    port: int = 3001
    workers: int = 1
    log_level: str = "info"

    # Requests slower than this are logged as warnings
    slow_request_seconds: float = 2.0

    # Dashboard origins - comma-separated string or list
    cors_origins: Union[str, list[str]] = "http://localhost:3000,http://127.0.0.1:3000"

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    @property
    def docs_enabled(self) -> bool:
        """Interactive docs are served in debug mode only"""
        return self.debug

    def get_cors_origins(self) -> list[str]:
        """Allowed origins, CORS_ORIGINS taking precedence"""
        env_origins = os.getenv("CORS_ORIGINS")
        if env_origins:
            return [o.strip() for o in env_origins.split(",") if o.strip()]
        return self.cors_origins


@lru_cache
def get_settings() -> APISettings:
    """Get cached settings instance"""
    return APISettings()
