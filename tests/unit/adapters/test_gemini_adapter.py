"""Tests for the google-genai adapter using a fake SDK client."""

from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from gimme_readme.core.types import DispatchConfig, ModelResponse, UsageMetrics
from gimme_readme.pipeline.adapters import GenerationAdapter
from gimme_readme.pipeline.adapters.gemini import GoogleGenAIAdapter, extract_usage_metrics


def _client(response):
    generate = AsyncMock(return_value=response)
    client = SimpleNamespace(aio=SimpleNamespace(models=SimpleNamespace(generate_content=generate)))
    return client, generate


def _usage(prompt=120, output=30, cached=None):
    return SimpleNamespace(
        prompt_token_count=prompt,
        candidates_token_count=output,
        cached_content_token_count=cached,
    )


@pytest.mark.unit
@pytest.mark.asyncio
async def test_single_call_with_model_and_temperature():
    client, generate = _client(SimpleNamespace(text="# README", usage_metadata=None))
    adapter = GoogleGenAIAdapter("k", client=client)

    response = await adapter.infer_text("prompt", DispatchConfig("gemini-1.5-pro", 0.0))

    assert response == ModelResponse(text="# README")
    generate.assert_awaited_once()
    kwargs = generate.await_args.kwargs
    assert kwargs["model"] == "gemini-1.5-pro"
    assert kwargs["contents"] == "prompt"
    assert kwargs["config"].temperature == 0.0


@pytest.mark.unit
@pytest.mark.asyncio
async def test_usage_reported_only_when_requested():
    reply = SimpleNamespace(text="OK", usage_metadata=_usage(cached=20))
    client, _ = _client(reply)
    adapter = GoogleGenAIAdapter("k", client=client)

    plain = await adapter.infer_text("p", DispatchConfig("m", 0.5))
    metered = await adapter.infer_text("p", DispatchConfig("m", 0.5, wants_usage_metrics=True))

    assert plain.usage is None
    assert metered.usage == UsageMetrics(prompt_tokens=120, output_tokens=30, cached_tokens=20)
    assert metered.usage.total_tokens == 130


@pytest.mark.unit
@pytest.mark.asyncio
async def test_missing_text_raises_with_finish_reason():
    reply = SimpleNamespace(
        text=None,
        candidates=[SimpleNamespace(finish_reason=SimpleNamespace(name="SAFETY"))],
        usage_metadata=None,
    )
    client, _ = _client(reply)
    adapter = GoogleGenAIAdapter("k", client=client)

    with pytest.raises(RuntimeError, match="finish_reason=SAFETY"):
        await adapter.infer_text("p", DispatchConfig("m", 0.5))


@pytest.mark.unit
@pytest.mark.asyncio
async def test_sdk_errors_propagate_to_dispatcher():
    client, generate = _client(None)
    generate.side_effect = ConnectionError("unreachable")
    adapter = GoogleGenAIAdapter("k", client=client)

    with pytest.raises(ConnectionError):
        await adapter.infer_text("p", DispatchConfig("m", 0.5))


@pytest.mark.unit
def test_extract_usage_handles_missing_and_bad_counts():
    assert extract_usage_metrics(SimpleNamespace()) is None
    usage = extract_usage_metrics(
        SimpleNamespace(usage_metadata=_usage(prompt="n/a", output=None))
    )
    assert usage == UsageMetrics(prompt_tokens=0, output_tokens=0, cached_tokens=0)


@pytest.mark.unit
def test_requires_api_key_without_client():
    with pytest.raises(ValueError, match="API key"):
        GoogleGenAIAdapter("")


@pytest.mark.unit
def test_satisfies_generation_adapter_protocol():
    client, _ = _client(None)
    assert isinstance(GoogleGenAIAdapter("k", client=client), GenerationAdapter)
