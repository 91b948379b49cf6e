"""API Services"""

from .application_service import ApplicationService
from .email_service import EmailResult, SummaryEmailService

__all__ = [
    "ApplicationService",
    "EmailResult",
    "SummaryEmailService",
]
