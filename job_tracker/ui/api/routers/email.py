"""Summary email API router"""

from fastapi import APIRouter, Depends
import logging

from ..dependencies import get_email_service
from ..services.email_service import EmailResult, SummaryEmailService
from ..models.responses import EmailStatusResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/email", tags=["email"])


@router.get(
    "/status",
    response_model=EmailStatusResponse,
    summary="Email configuration status",
    description="Whether weekly summaries are delivered by email or only logged",
)
async def email_status(
    service: SummaryEmailService = Depends(get_email_service),
) -> EmailStatusResponse:
    return EmailStatusResponse(
        configured=service.is_configured,
        host=service.settings.email_hostname,
        port=service.settings.email_port,
        sender=service.settings.email_from,
    )


@router.post(
    "/verify",
    response_model=EmailResult,
    summary="Verify SMTP credentials",
    description="Connect and log in to the SMTP server without sending anything",
)
async def verify_email(
    service: SummaryEmailService = Depends(get_email_service),
) -> EmailResult:
    result = await service.verify_configuration()
    if not result.success:
        logger.warning(f"Email verification failed: {result.error or result.message}")
    return result
