"""
Action payload models
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class ChatMessage(BaseModel):
    role: Literal["system", "user", "assistant"]
    content: str


class ChatOptions(BaseModel):
    model: Optional[str] = None
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None


class ChatRequest(BaseModel):
    messages: List[ChatMessage]
    options: Optional[ChatOptions] = None


class AnalyzeMessageRequest(BaseModel):
    message: str
    step: int


class SolutionContentRequest(BaseModel):
    """Payload of generateSummary and generateTags"""
    model_config = ConfigDict(populate_by_name=True)

    description: str = ""
    tech_categories: List[str] = Field(default_factory=list, alias="techCategories")
    industries: List[str] = Field(default_factory=list)


class RecommendationRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    solution: Dict[str, Any]
    user_need: str = Field("", alias="userNeed")


class Recommendation(BaseModel):
    score: Any = "0"
    strengths: List[Any] = []
    gaps: List[Any] = []
    considerations: List[Any] = []
    summary: Any = "No summary available"
