"""
Translation request and response models
"""

from typing import Any, Dict, List, Literal

from pydantic import BaseModel, Field

Language = Literal["en", "ar"]


class TranslateTextRequest(BaseModel):
    text: str = ""
    target: Language
    source: str = "auto"


class TranslateTextResponse(BaseModel):
    text: str
    target: str


class TranslateTextsRequest(BaseModel):
    texts: List[str] = Field(default_factory=list, max_length=200)
    target: Language
    source: str = "auto"


class TranslateTextsResponse(BaseModel):
    texts: List[str]
    target: str


class TranslateSolutionsRequest(BaseModel):
    solutions: List[Dict[str, Any]] = Field(default_factory=list, max_length=100)
    target: Language


class TranslateSolutionsResponse(BaseModel):
    solutions: List[Dict[str, Any]]
    target: str


class CacheStatsResponse(BaseModel):
    size: int
    keys: List[str]
