"""
Tests for education entry endpoints:
- PUT /api/profile/education
- DELETE /api/profile/education/{education_id}
"""

import uuid

from httpx import AsyncClient


class TestAddEducation:
    """PUT /api/profile/education tests."""

    async def test_add_education_returns_profile(
        self,
        async_client: AsyncClient,
        user_with_profile: dict,
        auth_headers,
        valid_education_data,
    ):
        response = await async_client.put(
            "/api/profile/education",
            json=valid_education_data,
            headers=auth_headers(user_with_profile["token"]),
        )
        assert response.status_code == 200
        entry = response.json()["education"][0]

        assert entry["school"] == "State University"
        assert entry["fieldofstudy"] == "Computer Science"
        assert entry["from"] == "2012-09-01"

    async def test_new_entry_is_first(
        self,
        async_client: AsyncClient,
        user_with_profile: dict,
        auth_headers,
        valid_education_data,
    ):
        headers = auth_headers(user_with_profile["token"])
        await async_client.put(
            "/api/profile/education",
            json={**valid_education_data, "degree": "BSc"},
            headers=headers,
        )
        response = await async_client.put(
            "/api/profile/education",
            json={**valid_education_data, "degree": "MSc"},
            headers=headers,
        )
        assert [entry["degree"] for entry in response.json()["education"]] == ["MSc", "BSc"]

    async def test_missing_fields_are_all_listed(
        self, async_client: AsyncClient, user_with_profile: dict, auth_headers
    ):
        response = await async_client.put(
            "/api/profile/education",
            json={},
            headers=auth_headers(user_with_profile["token"]),
        )
        assert response.status_code == 400
        params = [error["param"] for error in response.json()["errors"]]
        assert params == ["school", "degree", "fieldofstudy", "from"]

    async def test_invalid_date_returns_400(
        self,
        async_client: AsyncClient,
        user_with_profile: dict,
        auth_headers,
        valid_education_data,
    ):
        response = await async_client.put(
            "/api/profile/education",
            json={**valid_education_data, "from": "someday"},
            headers=auth_headers(user_with_profile["token"]),
        )
        assert response.status_code == 400
        assert response.json()["errors"][0]["param"] == "from"

    async def test_add_without_profile_returns_400(
        self, async_client: AsyncClient, test_user: dict, auth_headers, valid_education_data
    ):
        response = await async_client.put(
            "/api/profile/education",
            json=valid_education_data,
            headers=auth_headers(test_user["token"]),
        )
        assert response.status_code == 400
        assert response.json() == {"msg": "There is no profile for this user"}


class TestRemoveEducation:
    """DELETE /api/profile/education/{education_id} tests."""

    async def test_remove_education(
        self,
        async_client: AsyncClient,
        user_with_profile: dict,
        auth_headers,
        valid_education_data,
    ):
        headers = auth_headers(user_with_profile["token"])
        added = await async_client.put(
            "/api/profile/education", json=valid_education_data, headers=headers
        )
        entry_id = added.json()["education"][0]["id"]

        response = await async_client.delete(
            f"/api/profile/education/{entry_id}", headers=headers
        )
        assert response.status_code == 200
        assert response.json()["education"] == []

    async def test_remove_unknown_id_is_noop(
        self,
        async_client: AsyncClient,
        user_with_profile: dict,
        auth_headers,
        valid_education_data,
    ):
        headers = auth_headers(user_with_profile["token"])
        added = await async_client.put(
            "/api/profile/education", json=valid_education_data, headers=headers
        )

        response = await async_client.delete(
            f"/api/profile/education/{uuid.uuid4()}", headers=headers
        )
        assert response.status_code == 200
        assert response.json()["education"] == added.json()["education"]
