"""Application Service - CRUD over tracked applications with lifecycle events"""

import logging
from typing import List, Optional

from job_tracker.exceptions import ApplicationNotFoundError
from job_tracker.insights.models import ApplicationRecord
from job_tracker.workflows import (
    ApplicationCreated,
    EventBus,
    StatusUpdated,
    WeeklySummaryRequested,
    WorkflowResult,
)

from ..database.application_database import ApplicationDatabase
from ..models.requests import ApplicationCreate, ApplicationUpdate

logger = logging.getLogger(__name__)


class ApplicationService:
    """
    Coordinates:
    - Application storage
    - Lifecycle events for created applications and status changes
    - Weekly summary requests
    """

    def __init__(self, db: ApplicationDatabase, event_bus: EventBus):
        self.db = db
        self.event_bus = event_bus

    def list_applications(self) -> List[ApplicationRecord]:
        return self.db.fetch_all()

    def get_application(self, app_id: int) -> ApplicationRecord:
        application = self.db.get_application(app_id)
        if application is None:
            raise ApplicationNotFoundError(app_id)
        return application

    async def create_application(self, request: ApplicationCreate) -> ApplicationRecord:
        application = self.db.create_application({
            "company": request.company,
            "role": request.role or request.position,
            "status": request.status.value,
            "source": request.source,
            "resume_version": request.resume_version,
            "applied_at": request.applied_at,
        })

        result = await self.event_bus.emit(ApplicationCreated(application=application))
        if not result.success:
            logger.warning(f"applicationCreated workflow failed for {application.id}: {result.error}")

        return application

    async def update_status(self, app_id: int, status: str) -> ApplicationRecord:
        existing = self.get_application(app_id)

        updated = self.db.update_application_status(app_id, status)
        if updated is None:
            raise ApplicationNotFoundError(app_id)

        result = await self.event_bus.emit(StatusUpdated(
            application_id=app_id,
            old_status=existing.status,
            new_status=updated.status,
        ))
        if not result.success:
            logger.warning(f"statusUpdated workflow failed for {app_id}: {result.error}")

        return updated

    def update_application(self, app_id: int, request: ApplicationUpdate) -> ApplicationRecord:
        existing = self.get_application(app_id)

        merged = {
            "company": request.company or existing.company,
            "role": request.role or request.position or existing.role,
            "status": request.status.value if request.status else existing.status,
            "source": request.source or existing.source,
            "resume_version": request.resume_version or existing.resume_version,
            "applied_at": request.applied_at or existing.applied_at,
        }

        updated = self.db.update_application(app_id, merged)
        if updated is None:
            raise ApplicationNotFoundError(app_id)
        return updated

    def delete_application(self, app_id: int) -> None:
        self.get_application(app_id)
        if not self.db.delete_application(app_id):
            raise ApplicationNotFoundError(app_id)

    async def request_weekly_summary(self, to_email: Optional[str] = None) -> WorkflowResult:
        return await self.event_bus.emit(WeeklySummaryRequested(to_email=to_email))
