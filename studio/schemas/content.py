# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Request schemas for FAQs and social posts."""

from typing import Optional

from pydantic import BaseModel, Field

from studio.models.domain import LocalizedText


class FaqCreateRequest(BaseModel):
    question: LocalizedText
    answer: LocalizedText
    category: str = Field(default="general", min_length=1, max_length=50)
    order: int = Field(default=0, ge=0)
    is_published: bool = True
    tags: list[str] = Field(default_factory=list)


class FaqUpdateRequest(BaseModel):
    question: Optional[LocalizedText] = None
    answer: Optional[LocalizedText] = None
    category: Optional[str] = Field(default=None, min_length=1, max_length=50)
    order: Optional[int] = Field(default=None, ge=0)
    is_published: Optional[bool] = None
    tags: Optional[list[str]] = None


class SocialPostCreateRequest(BaseModel):
    project_id: str = Field(..., min_length=1)
    type: str = Field(..., pattern="^(image|video)$")
    url: str = Field(..., min_length=1, max_length=2048)
    caption: LocalizedText = Field(default_factory=LocalizedText)
    order: Optional[int] = Field(default=None, ge=0)
    uploaded_by: str = Field(default="admin", max_length=200)


class SocialPostUpdateRequest(BaseModel):
    type: Optional[str] = Field(default=None, pattern="^(image|video)$")
    url: Optional[str] = Field(default=None, min_length=1, max_length=2048)
    caption: Optional[LocalizedText] = None
    order: Optional[int] = Field(default=None, ge=0)


class ReorderRequest(BaseModel):
    ids: list[str] = Field(..., min_length=1)
