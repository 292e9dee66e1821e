# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Request / Response schemas for crew members.
Used ONLY at the controller (HTTP) boundary.
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from studio.models.domain import LocalizedText


class SocialLinks(BaseModel):
    instagram: Optional[str] = None
    website: Optional[str] = None
    email: Optional[str] = None


class CrewMemberCreateRequest(BaseModel):
    name: LocalizedText
    role: LocalizedText = Field(default_factory=LocalizedText)
    bio: LocalizedText = Field(default_factory=LocalizedText)
    portrait: Optional[str] = Field(default=None, max_length=2048, description="Portrait image URL")
    social_links: SocialLinks = Field(default_factory=SocialLinks)
    skills: list[str] = Field(default_factory=list)
    order: Optional[int] = Field(default=None, ge=0, description="Position on the team page")

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: LocalizedText) -> LocalizedText:
        if not (v.es or v.en or v.pt):
            raise ValueError("name needs at least one translation")
        return v

    @field_validator("skills")
    @classmethod
    def normalise_skills(cls, v: list[str]) -> list[str]:
        return [s.strip().lower() for s in v if s.strip()]


class CrewMemberUpdateRequest(BaseModel):
    """Partial update; omitted fields are left untouched."""
    name: Optional[LocalizedText] = None
    role: Optional[LocalizedText] = None
    bio: Optional[LocalizedText] = None
    portrait: Optional[str] = Field(default=None, max_length=2048)
    social_links: Optional[SocialLinks] = None
    skills: Optional[list[str]] = None
    order: Optional[int] = Field(default=None, ge=0)

    @field_validator("skills")
    @classmethod
    def normalise_skills(cls, v: Optional[list[str]]) -> Optional[list[str]]:
        if v is None:
            return v
        return [s.strip().lower() for s in v if s.strip()]


class CrewReorderRequest(BaseModel):
    ids: list[str] = Field(..., min_length=1, description="Crew member ids in display order")


class CrewMemberResponse(BaseModel):
    id: str
    name: dict
    role: dict
    bio: dict
    portrait: Optional[str] = None
    social_links: dict
    skills: list[str]
    order: int
    created_at: str
    updated_at: Optional[str] = None
