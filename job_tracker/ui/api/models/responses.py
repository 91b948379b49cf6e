"""Response models for API endpoints"""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Error response"""
    error: str
    detail: Optional[str] = None
    path: Optional[str] = None


class WorkflowResponse(BaseModel):
    """Result of a workflow triggered through the API"""
    workflow: str
    success: bool
    timestamp: datetime
    error: Optional[str] = None
    data: Dict[str, Any] = {}


class EmailStatusResponse(BaseModel):
    """Whether summary email delivery is configured"""
    configured: bool
    host: Optional[str] = None
    port: int
    sender: str
