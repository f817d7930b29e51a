"""
Tests for the Anthropic client wrapper

Tests for reelgen/services/anthropic.py with the SDK call mocked out.
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock

import httpx
import pytest
from anthropic import APIConnectionError

from reelgen.services import anthropic as anthropic_service
from reelgen.services.anthropic import AnthropicClient


def text_response(text: str):
    return SimpleNamespace(content=[SimpleNamespace(text=text)])


@pytest.fixture
def client(monkeypatch) -> AnthropicClient:
    monkeypatch.setattr(anthropic_service.asyncio, "sleep", AsyncMock())
    return AnthropicClient(api_key="test-key", model="test-model", max_retries=3)


class TestAnthropicClient:
    """Tests for AnthropicClient."""

    def test_requires_api_key(self, monkeypatch):
        monkeypatch.setattr(anthropic_service.config, "anthropic_api_key", "")
        with pytest.raises(ValueError, match="ANTHROPIC_API_KEY"):
            AnthropicClient()

    @pytest.mark.asyncio
    async def test_returns_text(self, client):
        create = AsyncMock(return_value=text_response('{"ok": true}'))
        client._client.messages.create = create

        response = await client.create_message("prompt", max_tokens=100, system="sys", temperature=0.2)

        assert response == '{"ok": true}'
        kwargs = create.call_args.kwargs
        assert kwargs["model"] == "test-model"
        assert kwargs["system"] == "sys"
        assert kwargs["temperature"] == 0.2
        assert kwargs["messages"] == [{"role": "user", "content": "prompt"}]

    @pytest.mark.asyncio
    async def test_retries_connection_errors(self, client):
        error = APIConnectionError(request=httpx.Request("POST", "https://api.anthropic.com"))
        create = AsyncMock(side_effect=[error, text_response("done")])
        client._client.messages.create = create

        assert await client.create_message("prompt") == "done"
        assert create.await_count == 2
        anthropic_service.asyncio.sleep.assert_awaited_once_with(1.0)

    @pytest.mark.asyncio
    async def test_gives_up_after_max_retries(self, client):
        error = APIConnectionError(request=httpx.Request("POST", "https://api.anthropic.com"))
        client._client.messages.create = AsyncMock(side_effect=error)

        with pytest.raises(APIConnectionError):
            await client.create_message("prompt")

        assert client._client.messages.create.await_count == 3
