"""
LLM client wrapper. Supports Gemini, OpenAI, Groq and Anthropic providers.
"""

from abc import ABC, abstractmethod
from typing import Optional

import httpx

from config import LLMSettings, get_settings


class LLMClient(ABC):
    """Abstract LLM client interface."""

    def __init__(self, settings: Optional[LLMSettings] = None):
        settings = settings or get_settings().llm
        self.model = settings.model_name
        self.api_key = settings.api_key
        self.temperature = settings.temperature
        self.max_tokens = settings.max_tokens
        self.timeout = settings.timeout_seconds

    @abstractmethod
    async def generate(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        json_mode: bool = False,
        temperature: Optional[float] = None,
    ) -> str:
        ...

    async def _post(self, url: str, headers: dict, body: dict) -> dict:
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.post(url, headers=headers, json=body)
            response.raise_for_status()
            return response.json()


class GeminiClient(LLMClient):
    """Google Gemini generateContent API."""

    BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models"

    async def generate(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        json_mode: bool = False,
        temperature: Optional[float] = None,
    ) -> str:
        generation_config = {
            "temperature": temperature if temperature is not None else self.temperature,
            "maxOutputTokens": self.max_tokens,
        }
        if json_mode:
            generation_config["responseMimeType"] = "application/json"

        body = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": generation_config,
        }
        if system_prompt:
            body["systemInstruction"] = {"parts": [{"text": system_prompt}]}

        data = await self._post(
            f"{self.BASE_URL}/{self.model}:generateContent",
            headers={"x-goog-api-key": self.api_key, "Content-Type": "application/json"},
            body=body,
        )
        parts = data["candidates"][0]["content"]["parts"]
        return "".join(part.get("text", "") for part in parts)


class OpenAIClient(LLMClient):
    """OpenAI chat completions API."""

    BASE_URL = "https://api.openai.com/v1/chat/completions"

    async def generate(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        json_mode: bool = False,
        temperature: Optional[float] = None,
    ) -> str:
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        body = {
            "model": self.model,
            "messages": messages,
            "temperature": temperature if temperature is not None else self.temperature,
            "max_tokens": self.max_tokens,
        }
        if json_mode:
            body["response_format"] = {"type": "json_object"}

        data = await self._post(
            self.BASE_URL,
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json",
            },
            body=body,
        )
        return data["choices"][0]["message"]["content"]


class GroqClient(OpenAIClient):
    """
    Groq API client (OpenAI-compatible).
    Models: llama-3.1-8b-instant, llama-3.3-70b-versatile
    """

    BASE_URL = "https://api.groq.com/openai/v1/chat/completions"


class AnthropicClient(LLMClient):
    """Anthropic Claude API client."""

    BASE_URL = "https://api.anthropic.com/v1/messages"

    async def generate(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        json_mode: bool = False,
        temperature: Optional[float] = None,
    ) -> str:
        body = {
            "model": self.model,
            "max_tokens": self.max_tokens,
            "temperature": temperature if temperature is not None else self.temperature,
            "messages": [{"role": "user", "content": prompt}],
        }
        if system_prompt:
            body["system"] = system_prompt

        data = await self._post(
            self.BASE_URL,
            headers={
                "x-api-key": self.api_key,
                "anthropic-version": "2023-06-01",
                "Content-Type": "application/json",
            },
            body=body,
        )
        return data["content"][0]["text"]


PROVIDERS = {
    "gemini": GeminiClient,
    "openai": OpenAIClient,
    "groq": GroqClient,
    "anthropic": AnthropicClient,
}


def create_llm_client(settings: Optional[LLMSettings] = None) -> LLMClient:
    """Factory: create an LLM client based on settings."""
    settings = settings or get_settings().llm
    provider = settings.provider.lower()

    if provider not in PROVIDERS:
        raise ValueError(
            f"Unknown LLM provider: {provider}. Use one of: {', '.join(PROVIDERS)}"
        )
    return PROVIDERS[provider](settings)
