"""Tests for the OpenAI-compatible provider client."""

import asyncio
import json

import httpx
import pytest

from app.services.openai_service import OpenAIService
from app.utils.result import FailureReason


def _service(handler, **kwargs) -> OpenAIService:
    return OpenAIService(
        api_key="test-key",
        base_url="https://api.example.com/v1",
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


@pytest.mark.asyncio
async def test_generate_embedding_success():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"data": [{"embedding": [0.1, 0.2, 0.3]}]})

    service = _service(handler, embedding_model="embed-small")
    outcome = await service.generate_embedding("hello")

    assert outcome.ok
    assert outcome.value == pytest.approx([0.1, 0.2, 0.3])
    assert seen[0].url.path == "/v1/embeddings"
    assert seen[0].headers["Authorization"] == "Bearer test-key"
    assert json.loads(seen[0].content) == {"model": "embed-small", "input": "hello"}
    await service.aclose()


@pytest.mark.asyncio
async def test_missing_key_reports_config_absent_without_network():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json={})

    service = OpenAIService(api_key=None, transport=httpx.MockTransport(handler))
    embedding = await service.generate_embedding("hello")
    chat = await service.generate_chat_response("hello")

    assert embedding.failure == FailureReason.CONFIG_ABSENT
    assert chat.failure == FailureReason.CONFIG_ABSENT
    assert calls == []
    assert not service.enabled


@pytest.mark.asyncio
async def test_http_error_maps_to_provider_error():
    service = _service(lambda request: httpx.Response(429, json={"error": "quota"}))
    outcome = await service.generate_embedding("hello")
    assert outcome.failure == FailureReason.PROVIDER_ERROR
    assert outcome.value is None


@pytest.mark.asyncio
async def test_network_error_maps_to_provider_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    outcome = await _service(handler).generate_chat_response("hello")
    assert outcome.failure == FailureReason.PROVIDER_ERROR


@pytest.mark.asyncio
async def test_malformed_embedding_maps_to_parse_error():
    service = _service(lambda request: httpx.Response(200, json={"data": []}))
    outcome = await service.generate_embedding("hello")
    assert outcome.failure == FailureReason.PARSE_ERROR


@pytest.mark.asyncio
async def test_non_json_body_maps_to_parse_error():
    service = _service(lambda request: httpx.Response(200, text="<html>oops</html>"))
    outcome = await service.generate_embedding("hello")
    assert outcome.failure == FailureReason.PARSE_ERROR


@pytest.mark.asyncio
async def test_slow_provider_hits_deadline():
    async def handler(request: httpx.Request) -> httpx.Response:
        await asyncio.sleep(1)
        return httpx.Response(200, json={"data": [{"embedding": [1.0]}]})

    service = _service(handler, timeout=0.05)
    outcome = await service.generate_embedding("hello")
    assert outcome.failure == FailureReason.PROVIDER_ERROR


@pytest.mark.asyncio
async def test_chat_response_sends_messages_and_format():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(json.loads(request.content))
        return httpx.Response(
            200, json={"choices": [{"message": {"role": "assistant", "content": "Hi"}}]}
        )

    service = _service(handler, chat_model="chat-mini")
    outcome = await service.generate_chat_response(
        "question", system_prompt="be brief", response_format={"type": "json_object"}
    )

    assert outcome.ok
    assert outcome.value == "Hi"
    assert seen[0]["model"] == "chat-mini"
    assert seen[0]["messages"] == [
        {"role": "system", "content": "be brief"},
        {"role": "user", "content": "question"},
    ]
    assert seen[0]["response_format"] == {"type": "json_object"}


@pytest.mark.asyncio
async def test_client_created_once_under_concurrent_first_use(monkeypatch):
    service = _service(
        lambda request: httpx.Response(200, json={"data": [{"embedding": [1.0]}]})
    )
    built = []
    original = service._build_client

    def counting_build():
        built.append(1)
        return original()

    monkeypatch.setattr(service, "_build_client", counting_build)
    outcomes = await asyncio.gather(*(service.generate_embedding("x") for _ in range(5)))

    assert all(o.ok for o in outcomes)
    assert len(built) == 1
    await service.aclose()


@pytest.mark.asyncio
async def test_failed_initialization_is_not_retried(monkeypatch):
    service = _service(lambda request: httpx.Response(200, json={}))
    attempts = []

    def broken_build():
        attempts.append(1)
        raise RuntimeError("bad config")

    monkeypatch.setattr(service, "_build_client", broken_build)
    first = await service.generate_embedding("x")
    second = await service.generate_chat_response("x")

    assert first.failure == FailureReason.PROVIDER_ERROR
    assert second.failure == FailureReason.PROVIDER_ERROR
    assert len(attempts) == 1


@pytest.mark.asyncio
async def test_unexpected_transport_error_maps_to_provider_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise RuntimeError("event loop is closed")

    service = _service(handler)
    embedding = await service.generate_embedding("hello")
    chat = await service.generate_chat_response("hello")

    assert embedding.failure == FailureReason.PROVIDER_ERROR
    assert chat.failure == FailureReason.PROVIDER_ERROR
