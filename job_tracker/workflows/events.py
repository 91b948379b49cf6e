"""Application lifecycle events"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Union

from job_tracker.insights.models import ApplicationRecord


@dataclass(frozen=True)
class ApplicationCreated:
    """A new application was stored"""
    application: ApplicationRecord


@dataclass(frozen=True)
class StatusUpdated:
    """An application moved from one status to another"""
    application_id: int
    old_status: str
    new_status: str


@dataclass(frozen=True)
class WeeklySummaryRequested:
    """A summary report was requested, optionally for delivery by email"""
    to_email: Optional[str] = None


LifecycleEvent = Union[ApplicationCreated, StatusUpdated, WeeklySummaryRequested]


@dataclass
class WorkflowResult:
    """Outcome of running the workflow for one event"""
    workflow: str
    success: bool
    data: Dict[str, Any] = field(default_factory=dict)
    error: Optional[str] = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
