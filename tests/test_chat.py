"""Tests for the stateless concierge chat and its offline fallback."""

from unittest.mock import AsyncMock, Mock, patch

import pytest

from carnival.controller.chat_assistant import build_fallback_response, generate_chat_response


def completion(content):
    message = Mock()
    message.content = content
    return Mock(choices=[Mock(message=message)])


class TestFallback:

    def test_quotes_last_user_message(self):
        reply = build_fallback_response([
            {"role": "user", "content": "first question"},
            {"role": "assistant", "content": "answer"},
            {"role": "user", "content": "  where is the parade?  "},
        ])
        assert 'regarding "where is the parade?"' in reply
        assert "first question" not in reply

    def test_long_message_truncated(self):
        reply = build_fallback_response([{"role": "user", "content": "x" * 300}])
        assert f'"{"x" * 157}…"' in reply

    def test_no_user_message(self):
        reply = build_fallback_response([{"role": "system", "content": "hello"}])
        assert "regarding" not in reply
        assert reply.endswith("Please try again in a bit once connectivity is restored.")


class TestGenerateChatResponse:

    @pytest.mark.asyncio
    async def test_without_client_uses_fallback(self):
        with patch("carnival.controller.chat_assistant.get_client", return_value=None):
            reply = await generate_chat_response([{"role": "user", "content": "hi"}])
        assert 'regarding "hi"' in reply

    @pytest.mark.asyncio
    async def test_model_reply(self):
        client = Mock()
        client.chat.completions.create = AsyncMock(return_value=completion("Try Marian Market."))
        with patch("carnival.controller.chat_assistant.get_client", return_value=client):
            reply = await generate_chat_response([{"role": "user", "content": "Where to eat?"}])
        assert reply == "Try Marian Market."

        sent = client.chat.completions.create.await_args.kwargs["messages"]
        assert sent[0]["role"] == "system"
        assert sent[-1] == {"role": "user", "content": "Where to eat?"}

    @pytest.mark.asyncio
    async def test_upstream_error_uses_fallback(self):
        client = Mock()
        client.chat.completions.create = AsyncMock(side_effect=RuntimeError("timeout"))
        with patch("carnival.controller.chat_assistant.get_client", return_value=client):
            reply = await generate_chat_response([{"role": "user", "content": "hi"}])
        assert "warming up" in reply


class TestChatRoute:

    def test_chat_route(self, client):
        with patch("carnival.controller.chat_assistant.get_client", return_value=None):
            response = client.post("/api/chat", json={"messages": [{"role": "user", "content": "hello"}]})
        assert response.status_code == 200
        assert 'regarding "hello"' in response.json()["message"]

    def test_messages_required(self, client):
        response = client.post("/api/chat", json={})
        assert response.status_code == 400
        assert response.json()["error"] == "Missing required fields: messages"
