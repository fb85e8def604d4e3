"""Tests for share codes and live location sharing."""

from datetime import datetime, timedelta
from unittest.mock import patch

import pytest

from carnival.controller.location_share_controller import (
    SHARE_CODE_LENGTH, URL_SAFE_ALPHABET, generate_share_code
)
from carnival.database import utcnow
from carnival.models.safety_model import LocationShare


@pytest.fixture
def share(client, user):
    _, headers = user
    response = client.post(
        "/api/safety/location-share",
        json={"latitude": 4.95, "longitude": 8.32, "name": "Ada at the parade"},
        headers=headers,
    )
    assert response.status_code == 201
    return response.json()["share"]


class TestShareCodes:

    def test_code_shape(self):
        allowed = set(URL_SAFE_ALPHABET.upper())
        for _ in range(1000):
            code = generate_share_code()
            assert len(code) == SHARE_CODE_LENGTH
            assert code == code.upper()
            assert set(code) <= allowed

    def test_codes_do_not_repeat(self):
        codes = {generate_share_code() for _ in range(1000)}
        assert len(codes) == 1000


class TestLocationShares:

    def test_create(self, share):
        assert len(share["shareCode"]) == 8
        assert share["viewCount"] == 0
        assert len(share["locationHistory"]) == 1
        assert share["locationHistory"][0]["lat"] == 4.95

    def test_list_active_only(self, client, user, share, db):
        _, headers = user
        expired = LocationShare(
            user_id=share["userId"], share_code="EXPIRED1", current_lat=4.9, current_lng=8.3,
            location_history=[], expires_at=utcnow() - timedelta(minutes=5),
        )
        db.add(expired)
        db.commit()
        shares = client.get("/api/safety/location-share", headers=headers).json()["shares"]
        assert [s["id"] for s in shares] == [share["id"]]

    def test_public_view_counts(self, client, share):
        code = share["shareCode"]
        assert client.get(f"/api/safety/location-share/{code}").json()["share"]["viewCount"] == 1
        assert client.get(f"/api/safety/location-share/{code.lower()}").json()["share"]["viewCount"] == 2

    def test_expired_share(self, client, share, db):
        stored = db.query(LocationShare).filter(LocationShare.id == share["id"]).first()
        stored.expires_at = utcnow() - timedelta(seconds=1)
        db.commit()
        response = client.get(f"/api/safety/location-share/{share['shareCode']}")
        assert response.status_code == 404
        assert response.json()["code"] == "SHARE_EXPIRED"

    def test_unknown_code(self, client):
        response = client.get("/api/safety/location-share/ZZZZZZZZ")
        assert response.status_code == 404
        assert response.json()["error"] == "Location share not found"

    def test_owner_update_appends_history(self, client, user, share):
        _, headers = user
        response = client.patch(
            f"/api/safety/location-share/{share['shareCode']}",
            json={"latitude": 4.96, "longitude": 8.33},
            headers=headers,
        )
        assert response.status_code == 200
        updated = response.json()["share"]
        assert updated["currentLat"] == 4.96
        assert len(updated["locationHistory"]) == 2
        assert updated["locationHistory"][-1]["lng"] == 8.33
        assert updated["lastUpdated"] is not None

    def test_non_owner_update(self, client, other_user, share):
        _, headers = other_user
        response = client.patch(
            f"/api/safety/location-share/{share['shareCode']}",
            json={"latitude": 4.96, "longitude": 8.33},
            headers=headers,
        )
        assert response.status_code == 404
        assert response.json()["error"] == "Location share not found or not owned by user"

    def test_expired_code_collision_retries(self, client, user, db):
        user_id, headers = user
        db.add(LocationShare(
            user_id=user_id, share_code="OLDCODE1", current_lat=4.9, current_lng=8.3,
            location_history=[], expires_at=utcnow() - timedelta(hours=2),
        ))
        db.commit()

        with patch("carnival.controller.location_share_controller.generate_share_code",
                   side_effect=["OLDCODE1", "NEWCODE1"]):
            response = client.post(
                "/api/safety/location-share", json={"latitude": 4.95, "longitude": 8.32}, headers=headers
            )
        assert response.status_code == 201
        assert response.json()["share"]["shareCode"] == "NEWCODE1"

    def test_active_code_skipped_before_insert(self, client, user, share):
        _, headers = user
        with patch("carnival.controller.location_share_controller.generate_share_code",
                   side_effect=[share["shareCode"], "NEWCODE2"]):
            response = client.post(
                "/api/safety/location-share", json={"latitude": 4.95, "longitude": 8.32}, headers=headers
            )
        assert response.json()["share"]["shareCode"] == "NEWCODE2"

    def test_codes_exhausted(self, client, user, share):
        _, headers = user
        with patch("carnival.controller.location_share_controller.generate_share_code",
                   return_value=share["shareCode"]):
            response = client.post(
                "/api/safety/location-share", json={"latitude": 4.95, "longitude": 8.32}, headers=headers
            )
        assert response.status_code == 500
        assert response.json()["error"] == "Could not allocate a share code"

    @pytest.mark.parametrize("minutes", [0, -5, 10 ** 9])
    def test_expiry_out_of_range(self, client, user, minutes):
        _, headers = user
        response = client.post(
            "/api/safety/location-share",
            json={"latitude": 4.95, "longitude": 8.32, "expiresInMinutes": minutes},
            headers=headers,
        )
        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"

    def test_expiry_respected(self, client, user):
        _, headers = user
        response = client.post(
            "/api/safety/location-share",
            json={"latitude": 4.95, "longitude": 8.32, "expiresInMinutes": 1},
            headers=headers,
        )
        share = response.json()["share"]
        remaining = datetime.fromisoformat(share["expiresAt"]) - datetime.fromisoformat(share["createdAt"])
        assert remaining <= timedelta(minutes=1, seconds=5)
