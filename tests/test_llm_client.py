import asyncio

import pytest

from config import LLMSettings
from src.ai_layer.llm_client import (
    AnthropicClient,
    GeminiClient,
    GroqClient,
    OpenAIClient,
    create_llm_client,
)


@pytest.mark.parametrize(
    "provider, cls",
    [
        ("gemini", GeminiClient),
        ("OpenAI", OpenAIClient),
        ("groq", GroqClient),
        ("anthropic", AnthropicClient),
    ],
)
def test_factory(provider, cls):
    client = create_llm_client(LLMSettings(provider=provider, api_key="k", model_name="m"))
    assert type(client) is cls
    assert client.model == "m"


def test_unknown_provider():
    with pytest.raises(ValueError):
        create_llm_client(LLMSettings(provider="carrier-pigeon"))


def test_gemini_request_body(monkeypatch):
    client = GeminiClient(LLMSettings(api_key="k", model_name="gemini-test", temperature=0.3))
    captured = {}

    async def fake_post(url, headers, body):
        captured.update(url=url, headers=headers, body=body)
        return {"candidates": [{"content": {"parts": [{"text": "{\"a\": "}, {"text": "1}"}]}}]}

    monkeypatch.setattr(client, "_post", fake_post)

    text = asyncio.run(client.generate("hi", system_prompt="be brief", json_mode=True))
    assert text == '{"a": 1}'
    assert captured["url"].endswith("/gemini-test:generateContent")
    assert captured["headers"]["x-goog-api-key"] == "k"
    assert captured["body"]["generationConfig"]["responseMimeType"] == "application/json"
    assert captured["body"]["generationConfig"]["temperature"] == 0.3
    assert captured["body"]["systemInstruction"]["parts"][0]["text"] == "be brief"
