"""Applications API Router"""

from fastapi import APIRouter, Depends, HTTPException, Response
from typing import List
import logging

from job_tracker.exceptions import ApplicationNotFoundError
from job_tracker.insights import (
    ApplicationRecord,
    ComprehensiveInsights,
    InsightService,
    ResponseTimeInsights,
    ResumeVersionInsights,
    SourceRejectionInsights,
)

from ..dependencies import get_application_service, get_insight_service
from ..services.application_service import ApplicationService
from ..models.requests import (
    ApplicationCreate,
    ApplicationUpdate,
    StatusUpdate,
    WeeklySummaryRequest,
)
from ..models.responses import ErrorResponse, WorkflowResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/applications", tags=["applications"])

INSIGHT_ERRORS = {500: {"model": ErrorResponse}, 503: {"model": ErrorResponse}}


# ============== Insights ==============

@router.get(
    "/insights",
    response_model=ComprehensiveInsights,
    responses=INSIGHT_ERRORS,
    summary="Comprehensive insights",
    description="Key findings, recommendations and every detailed analysis over one snapshot",
)
async def get_comprehensive_insights(
    service: InsightService = Depends(get_insight_service),
) -> ComprehensiveInsights:
    return service.get_comprehensive_insights()


@router.get(
    "/insights/sources",
    response_model=SourceRejectionInsights,
    responses=INSIGHT_ERRORS,
    summary="Rejection rate by source",
)
async def get_source_insights(
    service: InsightService = Depends(get_insight_service),
) -> SourceRejectionInsights:
    return service.get_source_rejection_insights()


@router.get(
    "/insights/resume-versions",
    response_model=ResumeVersionInsights,
    responses=INSIGHT_ERRORS,
    summary="Resume version performance",
)
async def get_resume_version_insights(
    service: InsightService = Depends(get_insight_service),
) -> ResumeVersionInsights:
    return service.get_resume_version_insights()


@router.get(
    "/insights/response-times",
    response_model=ResponseTimeInsights,
    responses=INSIGHT_ERRORS,
    summary="Average response time",
    description="Average days from application to Interview, Offer and Rejected",
)
async def get_response_time_insights(
    service: InsightService = Depends(get_insight_service),
) -> ResponseTimeInsights:
    return service.get_response_time_insights()


@router.post(
    "/weekly-summary",
    response_model=WorkflowResponse,
    summary="Run the weekly summary",
    description="Generate the comprehensive report and email it when a recipient is given",
)
async def weekly_summary(
    request: WeeklySummaryRequest,
    service: ApplicationService = Depends(get_application_service),
) -> WorkflowResponse:
    result = await service.request_weekly_summary(request.to_email)
    return WorkflowResponse(
        workflow=result.workflow,
        success=result.success,
        timestamp=result.timestamp,
        error=result.error,
        data=result.data,
    )


# ============== Applications ==============

@router.get(
    "/",
    response_model=List[ApplicationRecord],
    summary="List applications",
    description="All tracked applications, newest first",
)
async def list_applications(
    service: ApplicationService = Depends(get_application_service),
) -> List[ApplicationRecord]:
    return service.list_applications()


@router.get(
    "/{app_id}",
    response_model=ApplicationRecord,
    responses={404: {"model": ErrorResponse}},
    summary="Get application",
)
async def get_application(
    app_id: int,
    service: ApplicationService = Depends(get_application_service),
) -> ApplicationRecord:
    try:
        return service.get_application(app_id)
    except ApplicationNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post(
    "/",
    response_model=ApplicationRecord,
    status_code=201,
    summary="Track a new application",
)
async def create_application(
    request: ApplicationCreate,
    service: ApplicationService = Depends(get_application_service),
) -> ApplicationRecord:
    """
    Store a new application.

    Missing fields default to status Applied, source Direct, resume
    version 1.0 and the current time.
    """
    return await service.create_application(request)


@router.patch(
    "/{app_id}/status",
    response_model=ApplicationRecord,
    responses={404: {"model": ErrorResponse}},
    summary="Update application status",
)
async def update_status(
    app_id: int,
    request: StatusUpdate,
    service: ApplicationService = Depends(get_application_service),
) -> ApplicationRecord:
    try:
        return await service.update_status(app_id, request.status.value)
    except ApplicationNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.put(
    "/{app_id}",
    response_model=ApplicationRecord,
    responses={404: {"model": ErrorResponse}},
    summary="Update application",
    description="Fields left out of the request keep their current value",
)
async def update_application(
    app_id: int,
    request: ApplicationUpdate,
    service: ApplicationService = Depends(get_application_service),
) -> ApplicationRecord:
    try:
        return service.update_application(app_id, request)
    except ApplicationNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete(
    "/{app_id}",
    status_code=204,
    responses={404: {"model": ErrorResponse}},
    summary="Delete application",
)
async def delete_application(
    app_id: int,
    service: ApplicationService = Depends(get_application_service),
) -> Response:
    try:
        service.delete_application(app_id)
    except ApplicationNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return Response(status_code=204)
