# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Request / Response schemas for contact intake and admin users.
"""

from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from studio.models.domain import CONTACT_SERVICES


class ContactFormRequest(BaseModel):
    """Public contact form submission."""
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    message: str = Field(..., min_length=10, max_length=1000)
    phone: Optional[str] = Field(default=None, max_length=50)
    event_type: Optional[str] = Field(
        default=None,
        pattern="^(casamiento|corporativos|culturales-artisticos|photoshoot|prensa|otros)$",
    )
    event_date: Optional[str] = Field(default=None, max_length=50)
    location: Optional[str] = Field(default=None, max_length=200)
    budget: Optional[str] = Field(default=None, max_length=100)
    services: Optional[list[str]] = None
    referral: Optional[str] = Field(default=None, max_length=200)
    consent: bool
    source: str = Field(default="contact_form", max_length=50)

    @field_validator("name", "message")
    @classmethod
    def strip_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @field_validator("services")
    @classmethod
    def known_services(cls, v: Optional[list[str]]) -> Optional[list[str]]:
        if v is None:
            return v
        unknown = [s for s in v if s not in CONTACT_SERVICES]
        if unknown:
            raise ValueError(f"services must be within {CONTACT_SERVICES}")
        return v

    @field_validator("consent")
    @classmethod
    def consent_given(cls, v: bool) -> bool:
        if not v:
            raise ValueError("consent is required")
        return v


class ContactStatusRequest(BaseModel):
    status: str = Field(..., pattern="^(new|in_progress|completed|archived)$")


class ContactAssignRequest(BaseModel):
    project_id: str = Field(..., min_length=1)


class ContactMessageResponse(BaseModel):
    id: str
    name: str
    email: str
    message: str
    phone: Optional[str] = None
    event_type: Optional[str] = None
    event_date: Optional[str] = None
    location: Optional[str] = None
    budget: Optional[str] = None
    services: Optional[list[str]] = None
    referral: Optional[str] = None
    source: str
    status: str
    is_read: bool
    project_id: Optional[str] = None
    email_sent: bool = False
    email_sent_at: Optional[str] = None
    email_results: Optional[list[dict]] = None
    email_error: Optional[str] = None
    created_at: str
    updated_at: Optional[str] = None


# ── Admin users ──

class EmailPreferences(BaseModel):
    contact_messages: bool = True


class AdminUserCreateRequest(BaseModel):
    email: EmailStr
    name: str = Field(..., min_length=1, max_length=200)
    role: str = Field(default="admin", pattern="^(admin|editor|viewer)$")
    is_active: bool = True
    email_notifications: EmailPreferences = Field(default_factory=EmailPreferences)


class AdminUserUpdateRequest(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    role: Optional[str] = Field(default=None, pattern="^(admin|editor|viewer)$")
    is_active: Optional[bool] = None
    email_notifications: Optional[EmailPreferences] = None

