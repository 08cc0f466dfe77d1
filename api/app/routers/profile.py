"""Profile router for profile CRUD, experience/education entries and GitHub repos."""

from typing import Any

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.dependencies import get_current_identity
from app.auth.jwt import Identity
from app.database import get_db
from app.errors import NotFound
from app.models.profile import SOCIAL_NETWORKS, Profile
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
from app.services.github import GitHubClient, get_github_client
from app.services.profiles import (
    NO_PROFILE_MESSAGE,
    PROFILE_NOT_FOUND_MESSAGE,
    ProfileService,
    parse_owner_id,
)

router = APIRouter(prefix="/api/profile", tags=["Profile"])


def _to_response(profile: Profile, with_owner: bool = False) -> ProfileResponse:
    """Build the profile document, joining owner name/avatar when asked."""
    if with_owner and profile.user is not None:
        user: OwnerSummary | str = OwnerSummary(
            id=str(profile.user.id),
            name=profile.user.name,
            avatar=profile.user.avatar,
        )
    else:
        user = str(profile.user_id)

    return ProfileResponse(
        id=str(profile.user_id),
        user=user,
        company=profile.company,
        website=profile.website,
        location=profile.location,
        bio=profile.bio,
        status=profile.status,
        githubusername=profile.githubusername,
        skills=list(profile.skills or []),
        social=SocialLinks(**{network: getattr(profile, network) for network in SOCIAL_NETWORKS}),
        experience=[
            ExperienceResponse(
                id=str(entry.id),
                title=entry.title,
                company=entry.company,
                location=entry.location,
                from_date=entry.from_date,
                to_date=entry.to_date,
                current=entry.current,
                description=entry.description,
            )
            for entry in profile.experience
        ],
        education=[
            EducationResponse(
                id=str(entry.id),
                school=entry.school,
                degree=entry.degree,
                fieldofstudy=entry.fieldofstudy,
                from_date=entry.from_date,
                to_date=entry.to_date,
                current=entry.current,
                description=entry.description,
            )
            for entry in profile.education
        ],
        date=profile.created_at.isoformat() if profile.created_at else None,
        updated_at=profile.updated_at.isoformat() if profile.updated_at else None,
    )


# --- Profile ---


@router.get(
    "/me",
    response_model=ProfileResponse,
    status_code=status.HTTP_200_OK,
)
async def get_my_profile(
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
) -> ProfileResponse:
    """Get the authenticated user's profile with owner name and avatar."""
    owner_id = parse_owner_id(identity.id, NO_PROFILE_MESSAGE)
    profile = await ProfileService(db).get_by_owner(owner_id, with_owner=True)

    if profile is None:
        raise NotFound(NO_PROFILE_MESSAGE)

    return _to_response(profile, with_owner=True)


@router.post(
    "",
    response_model=ProfileResponse,
    status_code=status.HTTP_200_OK,
)
async def create_or_update_profile(
    data: ProfileRequest,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
) -> ProfileResponse:
    """
    Create the authenticated user's profile, or update it in place.

    Only fields present in the request are written; omitted fields keep their
    stored values. ``skills`` is a comma-separated string.
    """
    owner_id = parse_owner_id(identity.id, NO_PROFILE_MESSAGE)
    profile = await ProfileService(db).upsert(owner_id, data)
    return _to_response(profile)


@router.get(
    "",
    response_model=list[ProfileResponse],
    status_code=status.HTTP_200_OK,
)
async def list_profiles(
    db: AsyncSession = Depends(get_db),
) -> list[ProfileResponse]:
    """List every profile with owner name and avatar."""
    profiles = await ProfileService(db).list_all()
    return [_to_response(profile, with_owner=True) for profile in profiles]


@router.get(
    "/user/{user_id}",
    response_model=ProfileResponse,
    status_code=status.HTTP_200_OK,
)
async def get_profile_by_user_id(
    user_id: str,
    db: AsyncSession = Depends(get_db),
) -> ProfileResponse:
    """Get a profile by its owner's id. Malformed ids read as not found."""
    owner_id = parse_owner_id(user_id, PROFILE_NOT_FOUND_MESSAGE)
    profile = await ProfileService(db).get_by_owner(owner_id, with_owner=True)

    if profile is None:
        raise NotFound(PROFILE_NOT_FOUND_MESSAGE)

    return _to_response(profile, with_owner=True)


@router.delete(
    "",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
)
async def delete_account(
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
) -> MessageResponse:
    """Delete the authenticated user's posts, profile and account."""
    owner_id = parse_owner_id(identity.id, NO_PROFILE_MESSAGE)
    await ProfileService(db).delete_account(owner_id)
    return MessageResponse(msg="User deleted")


# --- Experience ---


@router.put(
    "/experience",
    response_model=ProfileResponse,
    status_code=status.HTTP_200_OK,
)
async def add_experience(
    data: ExperienceRequest,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
) -> ProfileResponse:
    """Add an experience entry at the top of the list."""
    owner_id = parse_owner_id(identity.id, NO_PROFILE_MESSAGE)
    profile = await ProfileService(db).add_experience(owner_id, data)
    return _to_response(profile)


@router.delete(
    "/experience/{experience_id}",
    response_model=ProfileResponse,
    status_code=status.HTTP_200_OK,
)
async def remove_experience(
    experience_id: str,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
) -> ProfileResponse:
    """Remove an experience entry. Unknown ids leave the profile unchanged."""
    owner_id = parse_owner_id(identity.id, NO_PROFILE_MESSAGE)
    profile = await ProfileService(db).remove_experience(owner_id, experience_id)
    return _to_response(profile)


# --- Education ---


@router.put(
    "/education",
    response_model=ProfileResponse,
    status_code=status.HTTP_200_OK,
)
async def add_education(
    data: EducationRequest,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
) -> ProfileResponse:
    """Add an education entry at the top of the list."""
    owner_id = parse_owner_id(identity.id, NO_PROFILE_MESSAGE)
    profile = await ProfileService(db).add_education(owner_id, data)
    return _to_response(profile)


@router.delete(
    "/education/{education_id}",
    response_model=ProfileResponse,
    status_code=status.HTTP_200_OK,
)
async def remove_education(
    education_id: str,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
) -> ProfileResponse:
    """Remove an education entry. Unknown ids leave the profile unchanged."""
    owner_id = parse_owner_id(identity.id, NO_PROFILE_MESSAGE)
    profile = await ProfileService(db).remove_education(owner_id, education_id)
    return _to_response(profile)


# --- GitHub ---


@router.get(
    "/github/{username}",
    status_code=status.HTTP_200_OK,
)
async def get_github_repos(
    username: str,
    github: GitHubClient = Depends(get_github_client),
) -> Any:
    """Forward the user's latest GitHub repositories verbatim."""
    return await github.list_repositories(username)
