"""Tests for registration, login and the session gate."""

from datetime import timedelta

from carnival.database import utcnow
from carnival.models.user_model import AuthSession, UserProfile


class TestRegister:

    def test_register_creates_user_profile_and_session(self, client, db):
        """Registration returns the user, a default profile and a session cookie."""
        response = client.post(
            "/api/auth/register",
            json={"email": "Ada@Example.com", "password": "carnival2024", "fullName": "Ada Bassey"},
        )
        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["user"]["email"] == "ada@example.com"
        assert body["profile"]["fullName"] == "Ada Bassey"
        assert body["profile"]["role"] == "user"
        assert body["profile"]["languagePreference"] == "en"
        assert response.cookies.get("cx_session") == body["token"]

        profile = db.query(UserProfile).filter(UserProfile.id == body["user"]["id"]).first()
        assert profile is not None

    def test_duplicate_email_rejected(self, client, register):
        register(email="ada@example.com")
        response = client.post(
            "/api/auth/register",
            json={"email": "ADA@example.com", "password": "carnival2024"},
        )
        assert response.status_code == 400
        assert response.json()["code"] == "EMAIL_EXISTS"

    def test_missing_fields(self, client):
        response = client.post("/api/auth/register", json={"fullName": "No Email"})
        assert response.status_code == 400
        error = response.json()["error"]
        assert error.startswith("Missing required fields")
        assert "email" in error
        assert "password" in error

    def test_short_password(self, client):
        response = client.post("/api/auth/register", json={"email": "a@example.com", "password": "short"})
        assert response.status_code == 400
        assert response.json()["success"] is False


class TestLogin:

    def test_login_and_me(self, client, register):
        user_id, _ = register()
        response = client.post("/api/auth/login", json={"email": "ada@example.com", "password": "carnival2024"})
        assert response.status_code == 200
        token = response.json()["token"]
        client.cookies.clear()

        me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert me.status_code == 200
        assert me.json()["user"]["id"] == user_id

    def test_cookie_authenticates(self, client):
        client.post("/api/auth/register", json={"email": "ada@example.com", "password": "carnival2024"})
        assert client.get("/api/auth/me").status_code == 200

    def test_wrong_password(self, client, register):
        register()
        response = client.post("/api/auth/login", json={"email": "ada@example.com", "password": "wrong-pass"})
        assert response.status_code == 401
        assert response.json()["error"] == "Invalid email or password"


class TestSessionGate:

    def test_no_token(self, client):
        response = client.get("/api/auth/me")
        assert response.status_code == 401
        assert response.json() == {"success": False, "error": "Unauthorized", "code": "UNAUTHORIZED"}

    def test_unknown_token(self, client):
        response = client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-token"})
        assert response.status_code == 401

    def test_expired_session_is_removed(self, client, user, db):
        user_id, headers = user
        auth_session = db.query(AuthSession).filter(AuthSession.user_id == user_id).first()
        auth_session.expires_at = utcnow() - timedelta(minutes=1)
        db.commit()

        assert client.get("/api/auth/me", headers=headers).status_code == 401
        db.expire_all()
        assert db.query(AuthSession).filter(AuthSession.user_id == user_id).count() == 0

    def test_logout_ends_session(self, client, user):
        _, headers = user
        assert client.post("/api/auth/logout", headers=headers).status_code == 200
        assert client.get("/api/auth/me", headers=headers).status_code == 401
