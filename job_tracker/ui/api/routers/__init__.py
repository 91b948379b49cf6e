"""API Routers"""

from .applications import router as applications_router
from .email import router as email_router

__all__ = [
    "applications_router",
    "email_router",
]
