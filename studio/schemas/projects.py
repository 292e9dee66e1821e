# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Request schemas for projects."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from studio.models.domain import LocalizedText

STATUS_PATTERN = "^(draft|shooting_scheduled|in_editing|delivered|archived)$"


class ClientInfo(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(default=None, max_length=50)
    confidential: bool = False


class Timeline(BaseModel):
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None


class ProjectCreateRequest(BaseModel):
    title: LocalizedText
    description: LocalizedText = Field(default_factory=LocalizedText)
    event_type: str = Field(default="other", min_length=1, max_length=50)
    event_date: Optional[datetime] = None
    location: Optional[str] = Field(default=None, max_length=300)
    featured: bool = False
    tags: list[str] = Field(default_factory=list)
    client: Optional[ClientInfo] = None
    crew_members: list[str] = Field(default_factory=list)
    timeline: Optional[Timeline] = None
    cover_image: Optional[str] = Field(default=None, max_length=2048)


class ProjectUpdateRequest(BaseModel):
    """Partial update. Status changes go through the status endpoint."""
    title: Optional[LocalizedText] = None
    description: Optional[LocalizedText] = None
    event_type: Optional[str] = Field(default=None, min_length=1, max_length=50)
    event_date: Optional[datetime] = None
    location: Optional[str] = Field(default=None, max_length=300)
    featured: Optional[bool] = None
    tags: Optional[list[str]] = None
    client: Optional[ClientInfo] = None
    timeline: Optional[Timeline] = None
    cover_image: Optional[str] = Field(default=None, max_length=2048)


class StatusChangeRequest(BaseModel):
    status: str = Field(..., pattern=STATUS_PATTERN)
    changed_by: str = Field(default="admin", min_length=1, max_length=200)
    notes: Optional[str] = Field(default=None, max_length=2000)


class CrewAssignmentRequest(BaseModel):
    crew_member_ids: list[str] = Field(default_factory=list)


class RatingRequest(BaseModel):
    rating: int = Field(..., ge=1, le=5)
    feedback: Optional[str] = Field(default=None, max_length=2000)
