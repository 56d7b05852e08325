"""
Market insights models
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class UpdateStatusResponse(BaseModel):
    last_updated: datetime
    next_update: datetime
    frequency: str
    days_until_next_update: Optional[int] = None
    update_needed: bool


class UpdateRequest(BaseModel):
    frequency: str = "Weekly"


class UpdateResponse(BaseModel):
    success: bool
    message: str
    last_updated: Optional[datetime] = None
    next_update: Optional[datetime] = None


class UpdateNeededResponse(BaseModel):
    update_needed: bool
