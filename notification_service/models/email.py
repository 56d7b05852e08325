"""
Email Models
Pydantic models for email operations
"""

from pydantic import BaseModel, Field
from typing import Optional
from enum import Enum


class EmailType(str, Enum):
    """Supported email types"""
    SIGNUP_CONFIRMATION = "signup_confirmation"
    PASSWORD_RESET = "password_reset"
    CUSTOM = "custom"


class SendEmailRequest(BaseModel):
    """Request model for POST /api/send-email

    Every field is optional here; the route reports missing ones with a 400
    and a message naming what is required.
    """

    to: Optional[str] = None
    type: Optional[str] = None
    name: Optional[str] = None
    token: Optional[str] = None
    app_url: Optional[str] = Field(None, alias="appUrl")

    # Custom emails only
    subject: Optional[str] = None
    html: Optional[str] = None

    model_config = {"populate_by_name": True}


class SendEmailResponse(BaseModel):
    """Response model for a sent email"""
    success: bool = True
    message: str = "Email sent successfully"
    messageId: Optional[str] = None


class HealthResponse(BaseModel):
    status: str = "ok"
    timestamp: str
    emailServiceReady: bool = True
