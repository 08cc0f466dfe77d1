"""Services for the DevConnector API."""

from app.services.github import GitHubClient, get_github_client
from app.services.profiles import ProfileService

__all__ = ["ProfileService", "GitHubClient", "get_github_client"]
