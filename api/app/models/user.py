"""User and Post models."""

import uuid

from sqlalchemy import (
    TIMESTAMP,
    Column,
    ForeignKey,
    Index,
    String,
    Text,
    Uuid,
    func,
)
from sqlalchemy.orm import relationship

from app.database import Base


class User(Base):
    """User account model."""

    __tablename__ = "users"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(Text, nullable=False)
    email = Column(String, unique=True, nullable=False)
    avatar = Column(Text)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())

    profile = relationship("Profile", back_populates="user", uselist=False)


class Post(Base):
    """Post authored by a user."""

    __tablename__ = "posts"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    text = Column(Text, nullable=False)
    name = Column(Text)
    avatar = Column(Text)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())

    __table_args__ = (Index("idx_posts_user", user_id),)
