"""
Solution catalog schemas for GO AI Hub
"""

from typing import Any, List, Optional
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, field_validator


# Text fields of a solution that are shown to readers in both languages
TRANSLATABLE_FIELDS = (
    'solution_name',
    'summary',
    'description',
    'clients',
    'ksa_customization_details',
    'tech_feedback',
    'business_feedback',
)


def ensure_string_list(value: Any) -> List[str]:
    """Coerce a list column that may be stored as a comma separated string"""
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value if item not in (None, "")]
    if isinstance(value, str):
        return [item.strip() for item in value.split(',') if item.strip()]
    return []


class SolutionStatus(str, Enum):
    """Solution review status"""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    RESUBMIT = "resubmit"


class Solution(BaseModel):
    """Catalog solution record"""
    model_config = ConfigDict(extra="allow")

    id: Optional[str] = None
    user_id: Optional[str] = None
    company_name: Optional[str] = None
    country: Optional[str] = None
    solution_name: str = ""
    summary: str = ""
    description: Optional[str] = None
    industry_focus: List[str] = []
    tech_categories: List[str] = []
    auto_tags: List[str] = []
    deployment_model: Optional[str] = None
    arabic_support: bool = False
    clients: Optional[str] = None
    ksa_customization: bool = False
    ksa_customization_details: Optional[str] = None
    status: SolutionStatus = SolutionStatus.PENDING
    tech_feedback: Optional[str] = None
    business_feedback: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator('industry_focus', 'tech_categories', 'auto_tags', mode='before')
    @classmethod
    def coerce_string_list(cls, v):
        return ensure_string_list(v)

    @field_validator('id', 'user_id', mode='before')
    @classmethod
    def id_as_string(cls, v):
        return str(v) if v is not None else None

    @field_validator('solution_name', 'summary', mode='before')
    @classmethod
    def none_as_empty(cls, v):
        return v or ""
