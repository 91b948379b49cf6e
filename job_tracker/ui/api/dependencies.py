"""Dependency injection for FastAPI"""

from typing import Optional
import logging

from config.settings import settings as app_settings
from job_tracker.insights import InsightService
from job_tracker.workflows import EventBus, Workflows, build_event_bus

from .database import ApplicationDatabase, get_application_database
from .services import ApplicationService, SummaryEmailService

logger = logging.getLogger(__name__)

# Global instances (singletons)
_insight_service: Optional[InsightService] = None
_email_service: Optional[SummaryEmailService] = None
_event_bus: Optional[EventBus] = None
_application_service: Optional[ApplicationService] = None


def get_database() -> ApplicationDatabase:
    """Get the application database"""
    return get_application_database()


def get_insight_service() -> InsightService:
    """Get or create the insight service (singleton pattern)"""
    global _insight_service
    if _insight_service is None:
        _insight_service = InsightService(get_database())
    return _insight_service


def get_email_service() -> SummaryEmailService:
    """Get or create the summary email service"""
    global _email_service
    if _email_service is None:
        _email_service = SummaryEmailService(app_settings)
        if not _email_service.is_configured:
            logger.info("Email not configured, weekly summaries will be logged only")
    return _email_service


def get_event_bus() -> EventBus:
    """Get or create the event bus with all workflows registered"""
    global _event_bus
    if _event_bus is None:
        workflows = Workflows(
            store=get_database(),
            insight_service=get_insight_service(),
            email_service=get_email_service(),
        )
        _event_bus = build_event_bus(workflows)
        logger.info(f"Event bus ready with workflows: {', '.join(_event_bus.registered_events())}")
    return _event_bus


def get_application_service() -> ApplicationService:
    """Get or create the application service"""
    global _application_service
    if _application_service is None:
        _application_service = ApplicationService(get_database(), get_event_bus())
    return _application_service
