"""Profile persistence: upsert, sub-collection mutations and account removal."""

from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.errors import NotFound, StoreFault, ValidationFailed, field_error
from app.logging import get_logger
from app.models.profile import SOCIAL_NETWORKS, Education, Experience, Profile
from app.models.user import Post, User
from app.schemas.profile import EducationRequest, ExperienceRequest, ProfileRequest

logger = get_logger("app.profiles")

NO_PROFILE_MESSAGE = "There is no profile for this user"
PROFILE_NOT_FOUND_MESSAGE = "Profile not found"
USER_NOT_FOUND_MESSAGE = "User not found"

PROFILE_REQUIRED = {
    "status": "Status is required",
    "skills": "Skills is required",
}
EXPERIENCE_REQUIRED = {
    "title": "Title is required",
    "company": "Company is required",
    "from": "From date is required",
}
EDUCATION_REQUIRED = {
    "school": "School is required",
    "degree": "Degree is required",
    "fieldofstudy": "Field of study is required",
    "from": "From date is required",
}

PROFILE_SCALARS = ("company", "website", "location", "bio", "status", "githubusername")

# Dialects with a native INSERT ... ON CONFLICT DO UPDATE
UPSERT_INSERTS = {
    "postgresql": postgresql_insert,
    "sqlite": sqlite_insert,
}


def parse_skills(raw: str) -> list[str]:
    """Split a comma-separated skills string, trimming each entry."""
    return [skill.strip() for skill in raw.split(",") if skill.strip()]


def missing_fields(data: dict[str, Any], required: dict[str, str]) -> list[dict[str, Any]]:
    """Return a field error for every required field that is absent or blank."""
    errors = []
    for param, msg in required.items():
        value = data.get(param)
        if value is None or (isinstance(value, str) and not value.strip()):
            errors.append(field_error(param, msg, value))
    return errors


def validate_required(data: dict[str, Any], required: dict[str, str]) -> None:
    """
    Check every required field is present and non-empty.

    Raises:
        ValidationFailed: listing every failing field, not just the first
    """
    errors = missing_fields(data, required)
    if errors:
        raise ValidationFailed(errors)


def validate_profile(data: ProfileRequest) -> None:
    """Check the profile required fields, including a skills list with at least one entry."""
    errors = missing_fields(data.model_dump(), PROFILE_REQUIRED)
    if data.skills and data.skills.strip() and not parse_skills(data.skills):
        errors.append(field_error("skills", PROFILE_REQUIRED["skills"], data.skills))
    if errors:
        raise ValidationFailed(errors)


def build_profile_fields(data: ProfileRequest) -> dict[str, Any]:
    """Collect the column values the caller actually provided."""
    fields: dict[str, Any] = {}
    for name in PROFILE_SCALARS:
        value = getattr(data, name)
        if value:
            fields[name] = value

    if data.skills:
        fields["skills"] = parse_skills(data.skills)

    for network in SOCIAL_NETWORKS:
        value = getattr(data, network)
        if value:
            fields[network] = value

    return fields


def parse_owner_id(value: str, message: str) -> UUID:
    """Parse an owner reference, mapping malformed ids to NotFound."""
    try:
        return UUID(str(value))
    except ValueError:
        logger.info("malformed_owner_id", owner_id=value)
        raise NotFound(message) from None


class ProfileService:
    """Service for reading and mutating profiles of a single store session."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_owner(self, owner_id: UUID, with_owner: bool = False) -> Profile | None:
        """Load a profile with its entries (and owner, if asked) freshly from the store."""
        options = [selectinload(Profile.experience), selectinload(Profile.education)]
        if with_owner:
            options.append(selectinload(Profile.user))

        result = await self.db.execute(
            select(Profile)
            .options(*options)
            .where(Profile.user_id == owner_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def require_profile(self, owner_id: UUID) -> Profile:
        profile = await self.get_by_owner(owner_id)
        if profile is None:
            raise NotFound(NO_PROFILE_MESSAGE)
        return profile

    async def list_all(self) -> list[Profile]:
        result = await self.db.execute(
            select(Profile)
            .options(
                selectinload(Profile.user),
                selectinload(Profile.experience),
                selectinload(Profile.education),
            )
            .order_by(Profile.created_at)
        )
        return list(result.scalars().all())

    async def upsert(self, owner_id: UUID, data: ProfileRequest) -> Profile:
        """
        Create the owner's profile or update the provided fields in place.

        Runs as a single INSERT ... ON CONFLICT statement keyed on the owner,
        so concurrent calls can never produce a second profile.
        """
        validate_profile(data)
        fields = build_profile_fields(data)

        owner_exists = await self.db.scalar(select(User.id).where(User.id == owner_id))
        if owner_exists is None:
            logger.info("profile_owner_missing", owner_id=str(owner_id))
            raise NotFound(USER_NOT_FOUND_MESSAGE)

        now = datetime.now(timezone.utc)

        dialect = self.db.get_bind().dialect.name
        insert = UPSERT_INSERTS.get(dialect)
        if insert is None:
            raise StoreFault(f"Upsert not supported on dialect '{dialect}'")

        stmt = insert(Profile).values(user_id=owner_id, updated_at=now, **fields)
        stmt = stmt.on_conflict_do_update(
            index_elements=["user_id"],
            set_={**fields, "updated_at": now},
        )
        await self.db.execute(stmt)
        await self.db.commit()

        logger.info("profile_saved", owner_id=str(owner_id), fields=sorted(fields))

        profile = await self.get_by_owner(owner_id)
        if profile is None:
            raise StoreFault("Profile missing after upsert")
        return profile

    async def add_experience(self, owner_id: UUID, data: ExperienceRequest) -> Profile:
        """Prepend an experience entry to the owner's profile."""
        validate_required(data.model_dump(by_alias=True), EXPERIENCE_REQUIRED)
        profile = await self.require_profile(owner_id)

        entry = Experience(
            title=data.title,
            company=data.company,
            location=data.location,
            from_date=data.from_date,
            to_date=None if data.current else data.to_date,
            current=data.current,
            description=data.description,
        )
        profile.experience.insert(0, entry)
        await self.db.commit()

        logger.info("experience_added", owner_id=str(owner_id), entry_id=str(entry.id))
        return await self.require_profile(owner_id)

    async def remove_experience(self, owner_id: UUID, entry_id: str) -> Profile:
        profile = await self.require_profile(owner_id)
        await self._remove_entry(profile, profile.experience, entry_id, "experience")
        return await self.require_profile(owner_id)

    async def add_education(self, owner_id: UUID, data: EducationRequest) -> Profile:
        """Prepend an education entry to the owner's profile."""
        validate_required(data.model_dump(by_alias=True), EDUCATION_REQUIRED)
        profile = await self.require_profile(owner_id)

        entry = Education(
            school=data.school,
            degree=data.degree,
            fieldofstudy=data.fieldofstudy,
            from_date=data.from_date,
            to_date=None if data.current else data.to_date,
            current=data.current,
            description=data.description,
        )
        profile.education.insert(0, entry)
        await self.db.commit()

        logger.info("education_added", owner_id=str(owner_id), entry_id=str(entry.id))
        return await self.require_profile(owner_id)

    async def remove_education(self, owner_id: UUID, entry_id: str) -> Profile:
        profile = await self.require_profile(owner_id)
        await self._remove_entry(profile, profile.education, entry_id, "education")
        return await self.require_profile(owner_id)

    async def _remove_entry(
        self,
        profile: Profile,
        entries: list,
        entry_id: str,
        kind: str,
    ) -> None:
        """Remove exactly the entry with ``entry_id``; an unknown id leaves the list unchanged."""
        try:
            target = UUID(entry_id)
        except ValueError:
            target = None
        entry = next((e for e in entries if e.id == target), None)
        if entry is None:
            logger.info(
                "entry_not_found",
                kind=kind,
                owner_id=str(profile.user_id),
                entry_id=entry_id,
            )
        else:
            entries.remove(entry)
            logger.info(
                "entry_removed",
                kind=kind,
                owner_id=str(profile.user_id),
                entry_id=entry_id,
            )
        await self.db.commit()

    async def delete_account(self, owner_id: UUID) -> None:
        """
        Remove the owner's posts, then their profile, then the user record.

        All three deletes share one transaction; a failure rolls back
        everything that was not yet committed.
        """
        result = await self.db.execute(delete(Post).where(Post.user_id == owner_id))
        logger.info("posts_deleted", owner_id=str(owner_id), count=result.rowcount)

        profile = await self.get_by_owner(owner_id)
        if profile is not None:
            await self.db.delete(profile)
            await self.db.flush()
        logger.info("profile_deleted", owner_id=str(owner_id), existed=profile is not None)

        result = await self.db.execute(delete(User).where(User.id == owner_id))
        logger.info("user_deleted", owner_id=str(owner_id), count=result.rowcount)

        await self.db.commit()
