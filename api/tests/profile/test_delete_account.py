"""Tests for DELETE /api/profile (posts, profile and user removal)."""

import uuid

from httpx import AsyncClient
from sqlalchemy import func, select

from app.models.profile import Experience, Profile
from app.models.user import Post, User


class TestDeleteAccount:
    """DELETE /api/profile tests."""

    async def test_delete_returns_message(
        self, async_client: AsyncClient, user_with_profile: dict, auth_headers
    ):
        response = await async_client.delete(
            "/api/profile",
            headers=auth_headers(user_with_profile["token"]),
        )
        assert response.status_code == 200
        assert response.json() == {"msg": "User deleted"}

    async def test_delete_removes_posts_profile_and_user(
        self,
        async_client: AsyncClient,
        user_with_profile: dict,
        auth_headers,
        create_post,
        valid_experience_data,
        db_session,
    ):
        headers = auth_headers(user_with_profile["token"])
        await async_client.put("/api/profile/experience", json=valid_experience_data, headers=headers)
        await create_post(user_with_profile, "first")
        await create_post(user_with_profile, "second")
        owner_id = uuid.UUID(user_with_profile["user_id"])

        await async_client.delete("/api/profile", headers=headers)

        for model, column in (
            (Post, Post.user_id),
            (Profile, Profile.user_id),
            (Experience, Experience.profile_id),
            (User, User.id),
        ):
            count = await db_session.scalar(
                select(func.count()).select_from(model).where(column == owner_id)
            )
            assert count == 0, model.__name__

    async def test_delete_keeps_other_users_data(
        self,
        async_client: AsyncClient,
        user_with_profile: dict,
        second_user: dict,
        auth_headers,
        create_post,
        db_session,
    ):
        await async_client.post(
            "/api/profile",
            json={"status": "Developer", "skills": "python"},
            headers=auth_headers(second_user["token"]),
        )
        await create_post(second_user)

        await async_client.delete(
            "/api/profile",
            headers=auth_headers(user_with_profile["token"]),
        )

        response = await async_client.get(f"/api/profile/user/{second_user['user_id']}")
        assert response.status_code == 200
        posts = await db_session.scalar(select(func.count()).select_from(Post))
        assert posts == 1

    async def test_profile_not_found_after_delete(
        self, async_client: AsyncClient, user_with_profile: dict, auth_headers
    ):
        headers = auth_headers(user_with_profile["token"])
        await async_client.delete("/api/profile", headers=headers)

        me = await async_client.get("/api/profile/me", headers=headers)
        assert me.status_code == 400
        assert me.json() == {"msg": "There is no profile for this user"}

        public = await async_client.get(f"/api/profile/user/{user_with_profile['user_id']}")
        assert public.status_code == 400
        assert public.json() == {"msg": "Profile not found"}

    async def test_delete_without_profile_still_removes_user(
        self, async_client: AsyncClient, test_user: dict, auth_headers, db_session
    ):
        response = await async_client.delete(
            "/api/profile",
            headers=auth_headers(test_user["token"]),
        )
        assert response.status_code == 200

        count = await db_session.scalar(
            select(func.count()).select_from(User).where(User.id == uuid.UUID(test_user["user_id"]))
        )
        assert count == 0

    async def test_create_profile_after_delete_returns_not_found(
        self, async_client: AsyncClient, user_with_profile: dict, auth_headers, db_session
    ):
        headers = auth_headers(user_with_profile["token"])
        await async_client.delete("/api/profile", headers=headers)

        response = await async_client.post(
            "/api/profile",
            json={"status": "Developer", "skills": "python"},
            headers=headers,
        )
        assert response.status_code == 400
        assert response.json() == {"msg": "User not found"}

        count = await db_session.scalar(select(func.count()).select_from(Profile))
        assert count == 0

    async def test_delete_requires_auth(self, async_client: AsyncClient):
        response = await async_client.delete("/api/profile")
        assert response.status_code == 401
