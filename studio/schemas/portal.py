# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Request schemas for the client portal and site build trigger."""

from typing import Optional

from pydantic import BaseModel, EmailStr, Field


class ClientInviteRequest(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(default="", max_length=100)
    email: EmailStr
    projects: list[str] = Field(..., min_length=1)


class PublicAccessRequest(BaseModel):
    enabled: bool


class PortalMessageRequest(BaseModel):
    client_id: Optional[str] = None
    subject: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1, max_length=5000)
    type: str = Field(default="note", pattern="^(note|question|feedback|request)$")


class BuildTriggerRequest(BaseModel):
    reason: str = Field(default="content update", min_length=1, max_length=200)
