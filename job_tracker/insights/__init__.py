"""Insight engine: grouped statistics and narratives over application records"""

from .aggregator import compute_comprehensive_insights
from .models import (
    ApplicationRecord,
    ApplicationStatus,
    ComprehensiveInsights,
    DetailedInsights,
    ResponseTimeInsights,
    ResumeVersionInsights,
    SourceAggregate,
    SourceRejectionInsights,
    StatusTiming,
    VersionAggregate,
)
from .resume_version import compute_resume_version_insights
from .response_time import compute_response_time_insights
from .service import InsightService
from .source_rejection import compute_source_rejection_insights
from .store import ApplicationStore

__all__ = [
    "ApplicationRecord",
    "ApplicationStatus",
    "ApplicationStore",
    "ComprehensiveInsights",
    "DetailedInsights",
    "InsightService",
    "ResponseTimeInsights",
    "ResumeVersionInsights",
    "SourceAggregate",
    "SourceRejectionInsights",
    "StatusTiming",
    "VersionAggregate",
    "compute_comprehensive_insights",
    "compute_resume_version_insights",
    "compute_response_time_insights",
    "compute_source_rejection_insights",
]
