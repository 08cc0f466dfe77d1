"""GitHub repository listing pass-through."""

from collections.abc import AsyncGenerator
from typing import Any

import httpx

from app.config import settings
from app.errors import NotFound, UpstreamFailure
from app.logging import get_logger

logger = get_logger("app.github")

REPOS_PER_PAGE = 5


class GitHubClient:
    """Single best-effort call to the GitHub REST API. No caching, no retry."""

    def __init__(
        self,
        http: httpx.AsyncClient,
        base_url: str = "https://api.github.com",
        client_id: str = "",
        client_secret: str = "",
    ):
        self.http = http
        self.base_url = base_url.rstrip("/")
        self.client_id = client_id
        self.client_secret = client_secret

    async def list_repositories(self, username: str) -> Any:
        """
        Return the user's five oldest-created repositories, verbatim.

        Raises:
            NotFound: upstream answered with anything other than 200
            UpstreamFailure: the request could not be completed
        """
        auth = None
        if self.client_id and self.client_secret:
            auth = httpx.BasicAuth(self.client_id, self.client_secret)

        try:
            response = await self.http.get(
                f"{self.base_url}/users/{username}/repos",
                params={"per_page": REPOS_PER_PAGE, "sort": "created:asc"},
                headers={"User-Agent": "devconnector-api"},
                auth=auth,
            )
        except httpx.HTTPError as exc:
            logger.error("github_request_failed", username=username, error=str(exc))
            raise UpstreamFailure() from exc

        if response.status_code != 200:
            logger.info(
                "github_profile_not_found",
                username=username,
                upstream_status=response.status_code,
            )
            raise NotFound("No Github profile found")

        return response.json()


async def get_github_client() -> AsyncGenerator[GitHubClient, None]:
    """Dependency that provides a GitHub client with its own HTTP connection."""
    async with httpx.AsyncClient(timeout=settings.github_timeout_seconds) as http:
        yield GitHubClient(
            http,
            base_url=settings.github_api_url,
            client_id=settings.github_client_id,
            client_secret=settings.github_secret,
        )
