"""Workflow handlers for application lifecycle events"""

import logging
import math
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional

from job_tracker.exceptions import ApplicationNotFoundError
from job_tracker.insights.response_time import days_since
from job_tracker.insights.service import InsightService

from .event_bus import EventBus
from .events import ApplicationCreated, StatusUpdated, WeeklySummaryRequested

logger = logging.getLogger(__name__)


class Workflows:
    """
    Handlers for lifecycle events.

    The store needs `get_application(id)`; the email service needs
    `send_weekly_summary(to_email, insights)`. When no email service is
    given, summaries are only logged.
    """

    def __init__(
        self,
        store,
        insight_service: InsightService,
        email_service=None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.store = store
        self.insight_service = insight_service
        self.email_service = email_service
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    async def application_created(self, event: ApplicationCreated) -> Dict[str, Any]:
        app = event.application
        logger.info(
            f"New application {app.id}: {app.company} - {app.role} "
            f"(status={app.status}, source={app.source}, resume={app.resume_version}, "
            f"applied={app.applied_at.isoformat()})"
        )
        return {"application_id": app.id}

    async def status_updated(self, event: StatusUpdated) -> Dict[str, Any]:
        application = self.store.get_application(event.application_id)
        if application is None:
            raise ApplicationNotFoundError(event.application_id)

        response_time_days = math.floor(days_since(application.applied_at, self.clock()))

        logger.info(
            f"Application {application.id} ({application.company} - {application.role}): "
            f"{event.old_status} -> {event.new_status} after {response_time_days} days"
        )

        return {
            "application_id": application.id,
            "old_status": event.old_status,
            "new_status": event.new_status,
            "response_time_days": response_time_days,
            "company": application.company,
            "role": application.role,
        }

    async def weekly_summary(self, event: WeeklySummaryRequested) -> Dict[str, Any]:
        logger.info("Generating weekly summary")
        insights = self.insight_service.get_comprehensive_insights(now=self.clock())
        logger.info(f"Weekly summary report:\n{insights.narrative}")

        if event.to_email and self.email_service is not None:
            email_result = await self.email_service.send_weekly_summary(event.to_email, insights)

            if email_result.success:
                logger.info(f"Weekly summary email sent to {event.to_email}")
            elif email_result.logged:
                logger.info("Email not configured, summary logged instead")
            else:
                logger.warning(f"Failed to send weekly summary email: {email_result.message}")

            return {
                "insights_generated": True,
                "email_sent": email_result.success,
                "email_result": email_result.model_dump(),
            }

        return {
            "insights_generated": True,
            "insights": insights.model_dump(mode="json"),
            "email_sent": False,
            "message": "Weekly summary generated (no email sent)",
        }


def build_event_bus(workflows: Workflows) -> EventBus:
    """Event bus with every lifecycle workflow registered"""
    bus = EventBus()
    bus.register_many({
        ApplicationCreated: workflows.application_created,
        StatusUpdated: workflows.status_updated,
        WeeklySummaryRequested: workflows.weekly_summary,
    })
    return bus
