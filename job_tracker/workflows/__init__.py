"""Lifecycle event dispatch and workflows"""

from .event_bus import EventBus
from .events import (
    ApplicationCreated,
    LifecycleEvent,
    StatusUpdated,
    WeeklySummaryRequested,
    WorkflowResult,
)
from .handlers import Workflows, build_event_bus

__all__ = [
    "ApplicationCreated",
    "EventBus",
    "LifecycleEvent",
    "StatusUpdated",
    "WeeklySummaryRequested",
    "WorkflowResult",
    "Workflows",
    "build_event_bus",
]
