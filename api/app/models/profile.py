"""Profile model with its experience and education entries."""

import uuid

from sqlalchemy import (
    JSON,
    TIMESTAMP,
    Boolean,
    Column,
    Date,
    ForeignKey,
    Integer,
    Text,
    Uuid,
    func,
    text,
)
from sqlalchemy.ext.orderinglist import ordering_list
from sqlalchemy.orm import relationship

from app.database import Base

SOCIAL_NETWORKS = ("youtube", "twitter", "facebook", "linkedin", "instagram")


class Profile(Base):
    """
    Developer profile.

    Keyed by its owner, so a user can never have more than one profile.
    Experience and education entries are kept newest first; ``position`` 0 is
    the most recently added entry.
    """

    __tablename__ = "profiles"

    user_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )
    company = Column(Text)
    website = Column(Text)
    location = Column(Text)
    bio = Column(Text)
    status = Column(Text, nullable=False)
    githubusername = Column(Text)
    skills = Column(JSON, nullable=False, default=list)

    # Social links
    youtube = Column(Text)
    twitter = Column(Text)
    facebook = Column(Text)
    linkedin = Column(Text)
    instagram = Column(Text)

    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), server_default=func.now())

    user = relationship("User", back_populates="profile")
    experience = relationship(
        "Experience",
        order_by="Experience.position",
        collection_class=ordering_list("position"),
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    education = relationship(
        "Education",
        order_by="Education.position",
        collection_class=ordering_list("position"),
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class Experience(Base):
    """Work experience entry on a profile."""

    __tablename__ = "experiences"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    profile_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("profiles.user_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    position = Column(Integer, nullable=False, default=0)
    title = Column(Text, nullable=False)
    company = Column(Text, nullable=False)
    location = Column(Text)
    from_date = Column(Date, nullable=False)
    to_date = Column(Date)
    current = Column(Boolean, nullable=False, default=False, server_default=text("false"))
    description = Column(Text)


class Education(Base):
    """Education entry on a profile."""

    __tablename__ = "educations"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    profile_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("profiles.user_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    position = Column(Integer, nullable=False, default=0)
    school = Column(Text, nullable=False)
    degree = Column(Text, nullable=False)
    fieldofstudy = Column(Text, nullable=False)
    from_date = Column(Date, nullable=False)
    to_date = Column(Date)
    current = Column(Boolean, nullable=False, default=False, server_default=text("false"))
    description = Column(Text)
