"""Database models for the DevConnector API."""

from app.models.profile import Education, Experience, Profile
from app.models.user import Post, User

__all__ = [
    "User",
    "Post",
    "Profile",
    "Experience",
    "Education",
]
