"""Tests for the httpx-backed AI processor and HTTP clients."""

import json

import httpx
import pytest

from core.exceptions import CompletionError
from integrations.ai_processor import AIProcessorClient
from integrations.http_client import HttpxClient


@pytest.mark.unit
class TestAIProcessorClient:

    @pytest.mark.asyncio
    async def test_posts_prompt_with_bearer_key(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["auth"] = request.headers["Authorization"]
            seen["payload"] = json.loads(request.content)
            return httpx.Response(200, json={"text": "done"})

        client = AIProcessorClient("https://ai.test/process", api_key="svc", transport=httpx.MockTransport(handler))
        response = await client.complete("Summarize", "summary", "user-1", "fast")

        assert response == {"text": "done"}
        assert seen["auth"] == "Bearer svc"
        assert seen["payload"] == {
            "prompt": "Summarize",
            "useCase": "summary",
            "userId": "user-1",
            "preferences": {"provider": "fast"},
        }

    @pytest.mark.asyncio
    async def test_error_status_raises_completion_error(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(429))
        client = AIProcessorClient("https://ai.test/process", transport=transport)

        with pytest.raises(CompletionError) as exc:
            await client.complete("p", None, "u")
        assert exc.value.status == 429

    @pytest.mark.asyncio
    async def test_unconfigured_client(self):
        with pytest.raises(CompletionError) as exc:
            await AIProcessorClient("").complete("p", None, "u")
        assert exc.value.status == 503


@pytest.mark.unit
class TestHttpxClient:

    @pytest.mark.asyncio
    async def test_returns_status_and_decoded_body(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["body"] = request.content.decode()
            return httpx.Response(201, json={"id": 1})

        client = HttpxClient(transport=httpx.MockTransport(handler))
        response = await client.call("post", "https://api.test/items", body='{"a": 1}')

        assert response.ok
        assert response.status == 201
        assert response.body == {"id": 1}
        assert seen == {"method": "POST", "body": '{"a": 1}'}

    @pytest.mark.asyncio
    async def test_text_body_when_not_json(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(503, text="unavailable"))
        response = await HttpxClient(transport=transport).call("GET", "https://api.test")

        assert not response.ok
        assert response.body == "unavailable"
