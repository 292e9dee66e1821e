# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Request schemas for task templates and generated project tasks."""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field

CATEGORY_PATTERN = "^(wedding|corporate|birthday|quinceanera|photoshoot|cultural|custom)$"
PRIORITY_PATTERN = "^(low|medium|high|urgent)$"


class TemplateTask(BaseModel):
    id: Optional[str] = None
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(default="", max_length=2000)
    type: str = Field(default="custom", max_length=50)
    order: Optional[int] = Field(default=None, ge=0)
    estimated_days: int = Field(default=1, ge=0, le=365)
    priority: str = Field(default="medium", pattern=PRIORITY_PATTERN)
    required: bool = True
    dependencies: list[str] = Field(default_factory=list)
    variables: list[str] = Field(default_factory=list)


class TemplateCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: str = Field(default="", max_length=2000)
    category: str = Field(default="custom", pattern=CATEGORY_PATTERN)
    tasks: list[TemplateTask] = Field(default_factory=list)
    default_priority: str = Field(default="medium", pattern=PRIORITY_PATTERN)
    created_by: str = Field(default="admin", max_length=200)
    tags: list[str] = Field(default_factory=list)
    is_public: bool = False
    notes: Optional[str] = Field(default=None, max_length=2000)


class TemplateUpdateRequest(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=2000)
    category: Optional[str] = Field(default=None, pattern=CATEGORY_PATTERN)
    status: Optional[str] = Field(default=None, pattern="^(active|inactive|archived)$")
    tasks: Optional[list[TemplateTask]] = None
    default_priority: Optional[str] = Field(default=None, pattern=PRIORITY_PATTERN)
    tags: Optional[list[str]] = None
    is_public: Optional[bool] = None
    notes: Optional[str] = Field(default=None, max_length=2000)


class PredefinedTemplateRequest(BaseModel):
    category: str = Field(..., pattern=CATEGORY_PATTERN)
    name: Optional[str] = Field(default=None, max_length=200)
    created_by: str = Field(default="admin", max_length=200)


class ApplyTemplateRequest(BaseModel):
    project_id: str = Field(..., min_length=1)
    variables: dict[str, Any] = Field(default_factory=dict)
    applied_by: str = Field(default="admin", max_length=200)
    start_date: Optional[datetime] = None


class TaskStatusRequest(BaseModel):
    status: str = Field(..., pattern="^(pending|in_progress|completed|skipped)$")
