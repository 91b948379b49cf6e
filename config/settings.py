"""
Configuration settings for JobTracker
"""

from pydantic_settings import BaseSettings
from pydantic import Field
from typing import Optional
from pathlib import Path


# SMTP hosts for the EMAIL_SERVICE shortcut names
KNOWN_EMAIL_SERVICES = {
    "gmail": "smtp.gmail.com",
    "outlook": "smtp.office365.com",
    "hotmail": "smtp.office365.com",
    "yahoo": "smtp.mail.yahoo.com",
    "icloud": "smtp.mail.me.com",
}


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Storage
    database_path: Path = Field(default_factory=lambda: Path(__file__).parent.parent / "data" / "applications.db")

    # Logging
    log_level: str = "info"

    # Weekly summary email (SMTP)
    email_service: str = "gmail"
    email_host: Optional[str] = None
    email_port: int = 587
    email_secure: bool = False  # True for direct TLS (port 465), False for STARTTLS
    email_user: Optional[str] = None
    email_password: Optional[str] = None
    email_from: str = "job-tracker@yourdomain.com"
    email_from_name: str = "AI Job Tracker"
    email_timeout: float = 30.0

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    @property
    def email_hostname(self) -> Optional[str]:
        """Explicit SMTP host, else the host for the named service"""
        if self.email_host:
            return self.email_host
        return KNOWN_EMAIL_SERVICES.get(self.email_service.lower())


# Global settings instance
settings = Settings()
