"""Pydantic models for application records and insight reports"""

from datetime import datetime, timezone
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator


class ApplicationStatus(str, Enum):
    """Application lifecycle status"""
    APPLIED = "Applied"
    INTERVIEW = "Interview"
    OFFER = "Offer"
    REJECTED = "Rejected"
    WITHDRAWN = "Withdrawn"


# Statuses that count as a response from the employer
TERMINAL_STATUSES = (
    ApplicationStatus.INTERVIEW,
    ApplicationStatus.OFFER,
    ApplicationStatus.REJECTED,
)

DEFAULT_SOURCE = "Direct"
DEFAULT_RESUME_VERSION = "1.0"


class ApplicationRecord(BaseModel):
    """A single tracked job application"""
    id: int
    company: str
    role: str
    status: str = ApplicationStatus.APPLIED.value
    source: str = DEFAULT_SOURCE
    resume_version: str = DEFAULT_RESUME_VERSION
    applied_at: datetime

    @field_validator("applied_at")
    @classmethod
    def ensure_timezone(cls, v: datetime) -> datetime:
        """Naive timestamps are stored in UTC"""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    @field_validator("status", mode="before")
    @classmethod
    def coerce_status(cls, v):
        if isinstance(v, ApplicationStatus):
            return v.value
        return v

    class Config:
        json_schema_extra = {
            "example": {
                "id": 1,
                "company": "Acme Corp",
                "role": "Backend Engineer",
                "status": "Interview",
                "source": "LinkedIn",
                "resume_version": "2.1",
                "applied_at": "2025-03-01T09:30:00Z"
            }
        }


# ============== Grouped Aggregates ==============

class GroupStats(BaseModel):
    """Counts and rates for one group of applications"""
    total_applications: int = 0
    status_counts: Dict[str, int] = Field(default_factory=dict)
    rejection_count: int = 0
    interview_count: int = 0
    offer_count: int = 0
    rejection_rate: int = Field(0, ge=0, le=100)
    interview_rate: int = Field(0, ge=0, le=100)
    offer_rate: int = Field(0, ge=0, le=100)
    success_rate: int = Field(0, ge=0, le=100)


class SourceAggregate(GroupStats):
    """Rejection statistics for one application source"""
    source: str


class VersionAggregate(GroupStats):
    """Performance statistics for one resume version"""
    version: str


class SourceRejectionInsights(BaseModel):
    """Rejection rate by source"""
    insights: List[SourceAggregate] = Field(default_factory=list)
    total_applications: int = 0
    highest_rejection: Optional[SourceAggregate] = None
    lowest_rejection: Optional[SourceAggregate] = None
    narrative: str


class ResumeVersionInsights(BaseModel):
    """Resume version performance"""
    versions: List[VersionAggregate] = Field(default_factory=list)
    best_version: Optional[VersionAggregate] = None
    worst_version: Optional[VersionAggregate] = None
    narrative: str


class StatusTiming(BaseModel):
    """Average days from application to a status"""
    status: str
    average_days: int


class ResponseTimeInsights(BaseModel):
    """Average response time per terminal status"""
    averages: Dict[str, int] = Field(default_factory=dict)
    completed_applications: int = 0
    fastest: Optional[StatusTiming] = None
    slowest: Optional[StatusTiming] = None
    narrative: str


class DetailedInsights(BaseModel):
    """The three sub-reports behind a comprehensive report"""
    source_rejection: SourceRejectionInsights
    resume_performance: ResumeVersionInsights
    response_time: ResponseTimeInsights


class ComprehensiveInsights(BaseModel):
    """Combined report with narrative and structured detail"""
    narrative: str
    key_findings: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)
    detailed: DetailedInsights
    generated_at: datetime
