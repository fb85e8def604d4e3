"""Tests for persisted concierge sessions and messages."""


def open_session(client, headers, title=None):
    response = client.post("/api/concierge/sessions", json={"title": title} if title else None, headers=headers)
    assert response.status_code == 201
    return response.json()["session"]


class TestSessions:

    def test_create_and_list_with_counts(self, client, user):
        _, headers = user
        first = open_session(client, headers, "Where to eat")
        second = open_session(client, headers)
        client.post(f"/api/concierge/sessions/{first['id']}/messages",
                    json={"role": "user", "content": "Best pepper soup?"}, headers=headers)

        sessions = client.get("/api/concierge/sessions", headers=headers).json()["sessions"]
        counts = {s["id"]: s["messageCount"] for s in sessions}
        assert counts == {first["id"]: 1, second["id"]: 0}
        # the session with the newest message comes first
        assert sessions[0]["id"] == first["id"]

    def test_latest_alias(self, client, user):
        _, headers = user
        open_session(client, headers, "Older")
        newest = open_session(client, headers, "Newer")
        body = client.get("/api/concierge/sessions/latest", headers=headers).json()
        assert body["session"]["id"] == newest["id"]
        assert body["messages"] == []

    def test_latest_without_sessions(self, client, user):
        _, headers = user
        response = client.get("/api/concierge/sessions/latest", headers=headers)
        assert response.status_code == 404
        assert response.json()["error"] == "No active session found"

    def test_closed_sessions_skipped_by_latest(self, client, user):
        _, headers = user
        chat_session = open_session(client, headers)
        response = client.patch(f"/api/concierge/sessions/{chat_session['id']}", json={"isActive": False},
                                headers=headers)
        assert response.json()["session"]["isActive"] is False
        assert client.get("/api/concierge/sessions/latest", headers=headers).status_code == 404

    def test_other_users_session(self, client, user, other_user):
        _, headers = user
        _, other_headers = other_user
        chat_session = open_session(client, headers)
        response = client.get(f"/api/concierge/sessions/{chat_session['id']}", headers=other_headers)
        assert response.status_code == 404
        assert response.json()["error"] == "Session not found"


class TestMessages:

    def test_messages_in_order(self, client, user):
        _, headers = user
        chat_session = open_session(client, headers)
        url = f"/api/concierge/sessions/{chat_session['id']}/messages"
        client.post(url, json={"role": "user", "content": "Hi"}, headers=headers)
        response = client.post(url, json={"role": "assistant", "content": "Welcome to Calabar!"}, headers=headers)
        assert response.status_code == 201
        assert response.json()["message"]["sessionId"] == chat_session["id"]

        messages = client.get(url, headers=headers).json()["messages"]
        assert [m["role"] for m in messages] == ["user", "assistant"]

    def test_invalid_role(self, client, user):
        _, headers = user
        chat_session = open_session(client, headers)
        response = client.post(f"/api/concierge/sessions/{chat_session['id']}/messages",
                               json={"role": "robot", "content": "beep"}, headers=headers)
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid role. Must be user, assistant, or system"

    def test_empty_content(self, client, user):
        _, headers = user
        chat_session = open_session(client, headers)
        response = client.post(f"/api/concierge/sessions/{chat_session['id']}/messages",
                               json={"role": "user", "content": ""}, headers=headers)
        assert response.status_code == 400
        assert response.json()["error"] == "Role and content are required"
