"""Pydantic schemas for request/response validation."""

from app.schemas.profile import (
    EducationRequest,
    EducationResponse,
    ExperienceRequest,
    ExperienceResponse,
    MessageResponse,
    OwnerSummary,
    ProfileRequest,
    ProfileResponse,
    SocialLinks,
)

__all__ = [
    "ProfileRequest",
    "ExperienceRequest",
    "EducationRequest",
    "ProfileResponse",
    "ExperienceResponse",
    "EducationResponse",
    "OwnerSummary",
    "SocialLinks",
    "MessageResponse",
]
