"""Profile-related Pydantic schemas."""

from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


class ProfileRequest(BaseModel):
    """Create-or-update profile request. Only provided fields are written."""

    company: str | None = None
    website: str | None = None
    location: str | None = None
    bio: str | None = None
    status: str | None = None
    githubusername: str | None = None
    skills: str | None = None
    youtube: str | None = None
    twitter: str | None = None
    facebook: str | None = None
    linkedin: str | None = None
    instagram: str | None = None


class ExperienceRequest(BaseModel):
    """Request to add an experience entry."""

    model_config = ConfigDict(populate_by_name=True)

    title: str | None = None
    company: str | None = None
    location: str | None = None
    from_date: date | None = Field(default=None, alias="from")
    to_date: date | None = Field(default=None, alias="to")
    current: bool = False
    description: str | None = None

    @field_validator("from_date", "to_date", mode="before")
    @classmethod
    def blank_dates(cls, v: Any) -> Any:
        return _blank_to_none(v)


class EducationRequest(BaseModel):
    """Request to add an education entry."""

    model_config = ConfigDict(populate_by_name=True)

    school: str | None = None
    degree: str | None = None
    fieldofstudy: str | None = None
    from_date: date | None = Field(default=None, alias="from")
    to_date: date | None = Field(default=None, alias="to")
    current: bool = False
    description: str | None = None

    @field_validator("from_date", "to_date", mode="before")
    @classmethod
    def blank_dates(cls, v: Any) -> Any:
        return _blank_to_none(v)


class SocialLinks(BaseModel):
    """Social network links. Always present on a profile, fields may be empty."""

    youtube: str | None = None
    twitter: str | None = None
    facebook: str | None = None
    linkedin: str | None = None
    instagram: str | None = None


class OwnerSummary(BaseModel):
    """Public owner info joined onto profile reads."""

    id: str
    name: str
    avatar: str | None


class ExperienceResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    company: str
    location: str | None
    from_date: date = Field(alias="from")
    to_date: date | None = Field(default=None, alias="to")
    current: bool
    description: str | None


class EducationResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    school: str
    degree: str
    fieldofstudy: str
    from_date: date = Field(alias="from")
    to_date: date | None = Field(default=None, alias="to")
    current: bool
    description: str | None


class ProfileResponse(BaseModel):
    """
    Profile document.

    ``user`` is the owner summary on reads and the bare owner id on writes.
    """

    id: str
    user: OwnerSummary | str
    company: str | None
    website: str | None
    location: str | None
    bio: str | None
    status: str
    githubusername: str | None
    skills: list[str]
    social: SocialLinks
    experience: list[ExperienceResponse]
    education: list[EducationResponse]
    date: str | None
    updated_at: str | None


class MessageResponse(BaseModel):
    msg: str
