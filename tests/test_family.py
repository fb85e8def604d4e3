"""Tests for family groups and the missing/found member toggle."""

import pytest


@pytest.fixture
def group(client, user):
    _, headers = user
    response = client.post(
        "/api/safety/family",
        json={"name": "Bassey Family", "meetingPointName": "Millennium Park gate"},
        headers=headers,
    )
    assert response.status_code == 201
    return response.json()["group"]


@pytest.fixture
def member(client, user, group):
    _, headers = user
    response = client.post(
        f"/api/safety/family/{group['id']}/members",
        json={"fullName": "Little Edem", "role": "child", "age": 7},
        headers=headers,
    )
    assert response.status_code == 201
    return response.json()["member"]


class TestFamilyGroups:

    def test_create_group(self, group):
        assert group["name"] == "Bassey Family"
        assert group["isActive"] is True
        assert group["members"] == []

    def test_blank_name(self, client, user):
        _, headers = user
        response = client.post("/api/safety/family", json={"name": "  "}, headers=headers)
        assert response.status_code == 400
        assert response.json()["error"] == "Group name is required"

    def test_list_includes_members(self, client, user, group, member):
        _, headers = user
        groups = client.get("/api/safety/family", headers=headers).json()["groups"]
        assert [g["id"] for g in groups] == [group["id"]]
        assert [m["id"] for m in groups[0]["members"]] == [member["id"]]

    def test_other_user_cannot_see_group(self, client, other_user, group):
        _, headers = other_user
        response = client.get(f"/api/safety/family/{group['id']}", headers=headers)
        assert response.status_code == 404
        assert response.json()["error"] == "Family group not found"

    def test_update_meeting_point(self, client, user, group):
        _, headers = user
        response = client.patch(
            f"/api/safety/family/{group['id']}",
            json={"meetingPointLat": 4.97, "meetingPointLng": 8.34},
            headers=headers,
        )
        assert response.status_code == 200
        assert response.json()["group"]["meetingPointLat"] == 4.97
        assert response.json()["group"]["name"] == "Bassey Family"

    def test_delete_is_soft(self, client, user, group):
        _, headers = user
        assert client.delete(f"/api/safety/family/{group['id']}", headers=headers).status_code == 200
        assert client.get(f"/api/safety/family/{group['id']}", headers=headers).status_code == 404
        assert client.get("/api/safety/family", headers=headers).json()["groups"] == []


class TestFamilyMembers:

    def test_add_member(self, member):
        assert member["role"] == "child"
        assert member["isMissing"] is False

    def test_invalid_role(self, client, user, group):
        _, headers = user
        response = client.post(
            f"/api/safety/family/{group['id']}/members",
            json={"fullName": "Uncle Bassey", "role": "uncle"},
            headers=headers,
        )
        assert response.status_code == 400

    def test_mark_missing_then_found(self, client, user, group, member):
        _, headers = user
        url = f"/api/safety/family/{group['id']}/members/{member['id']}"

        missing = client.patch(
            url, json={"isMissing": True, "lastSeenLat": 4.951, "lastSeenLng": 8.321}, headers=headers
        ).json()["member"]
        assert missing["isMissing"] is True
        assert missing["lastSeenAt"] is not None
        assert missing["lastSeenLat"] == 4.951
        assert missing["foundAt"] is None

        found = client.patch(url, json={"isMissing": False}, headers=headers).json()["member"]
        assert found["isMissing"] is False
        assert found["foundAt"] is not None
        assert found["lastSeenAt"] == missing["lastSeenAt"]

    def test_unknown_member(self, client, user, group):
        _, headers = user
        response = client.patch(f"/api/safety/family/{group['id']}/members/nope", json={"isMissing": True},
                                headers=headers)
        assert response.status_code == 404
