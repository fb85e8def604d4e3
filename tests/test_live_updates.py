"""Tests for the live update feed and its websocket broadcast."""

from unittest.mock import AsyncMock, patch

import pytest

from carnival.controller.ws_manager import ConnectionManager


class TestLiveUpdates:

    def test_non_admin_forbidden(self, client, user):
        _, headers = user
        response = client.post("/api/live-updates", json={"content": "Parade starts"}, headers=headers)
        assert response.status_code == 403
        assert response.json()["error"] == "Forbidden: Admin access required"

    def test_admin_posts_and_broadcasts(self, client, admin):
        _, headers = admin
        with patch("carnival.controller.live_update_controller.live_update_manager.broadcast",
                   new_callable=AsyncMock) as broadcast:
            response = client.post(
                "/api/live-updates",
                json={"content": "Parade starts at noon", "location": "Stadium"},
                headers=headers,
            )
        assert response.status_code == 201
        update = response.json()["update"]
        assert update["content"] == "Parade starts at noon"

        message = broadcast.await_args.args[0]
        assert message["event"] == "new_live_update"
        assert message["data"]["id"] == update["id"]
        assert isinstance(message["data"]["createdAt"], str)

    def test_blank_content(self, client, admin):
        _, headers = admin
        response = client.post("/api/live-updates", json={"content": "   "}, headers=headers)
        assert response.status_code == 400
        assert response.json()["error"] == "Content is required"

    def test_pinned_first(self, client, admin):
        _, headers = admin
        client.post("/api/live-updates", json={"content": "Pinned notice", "isPinned": True}, headers=headers)
        client.post("/api/live-updates", json={"content": "Newest"}, headers=headers)
        updates = client.get("/api/live-updates").json()["updates"]
        assert [u["content"] for u in updates] == ["Pinned notice", "Newest"]


class TestConnectionManager:

    @pytest.mark.asyncio
    async def test_broadcast_drops_dead_connections(self):
        manager = ConnectionManager()
        alive = AsyncMock()
        dead = AsyncMock()
        dead.send_json.side_effect = RuntimeError("closed")
        await manager.connect(alive)
        await manager.connect(dead)

        await manager.broadcast({"event": "new_live_update"})

        alive.send_json.assert_awaited_once_with({"event": "new_live_update"})
        assert manager.active_connections == [alive]

    @pytest.mark.asyncio
    async def test_disconnect_unknown_is_noop(self):
        manager = ConnectionManager()
        manager.disconnect(AsyncMock())
        assert manager.active_connections == []
