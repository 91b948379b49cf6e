"""Request models for API endpoints"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from job_tracker.insights.models import (
    ApplicationStatus,
    DEFAULT_RESUME_VERSION,
    DEFAULT_SOURCE,
)


class ApplicationCreate(BaseModel):
    """Create application request"""
    company: str = Field(..., min_length=1)
    role: Optional[str] = None
    position: Optional[str] = Field(None, description="Alias for role")
    status: ApplicationStatus = ApplicationStatus.APPLIED
    source: str = DEFAULT_SOURCE
    resume_version: str = DEFAULT_RESUME_VERSION
    applied_at: Optional[datetime] = None

    @model_validator(mode="after")
    def require_role(self):
        if not (self.role or self.position):
            raise ValueError("Either role or position is required")
        return self

    class Config:
        json_schema_extra = {
            "example": {
                "company": "Acme Corp",
                "role": "Backend Engineer",
                "status": "Applied",
                "source": "LinkedIn",
                "resume_version": "2.1"
            }
        }


class ApplicationUpdate(BaseModel):
    """Update application request, unset fields keep their current value"""
    company: Optional[str] = None
    role: Optional[str] = None
    position: Optional[str] = None
    status: Optional[ApplicationStatus] = None
    source: Optional[str] = None
    resume_version: Optional[str] = None
    applied_at: Optional[datetime] = None


class StatusUpdate(BaseModel):
    """Status change request"""
    status: ApplicationStatus


class WeeklySummaryRequest(BaseModel):
    """Weekly summary request"""
    to_email: Optional[str] = Field(None, description="Recipient; omit to only generate the report")
