"""
LLM client abstraction layer to support multiple providers.

This module provides a unified interface for OpenAI, Gemini and Ollama so
the generator can stay the same whichever provider is configured. Each
client turns its SDK's exceptions into the failure kinds from ``errors``;
vendor specifics only survive as the opaque ``detail`` string.

Clients are plain objects: build one with ``get_llm_client(settings)`` and
pass it to whoever needs it.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List

import httpx
import ollama
import openai
from google import genai
from google.genai import errors as genai_errors
from google.genai import types as genai_types

from config import SUPPORTED_PROVIDERS, Settings
from errors import ConfigurationError, ContentPolicyError, TransportError

# Request lines from the SDK transports drown out our own log
logging.getLogger("httpx").setLevel(logging.WARNING)

_BLOCKED_FINISH_REASONS = {"SAFETY", "PROHIBITED_CONTENT", "BLOCKLIST", "SPII", "RECITATION"}

_GEMINI_SAFETY_CATEGORIES = (
    genai_types.HarmCategory.HARM_CATEGORY_HARASSMENT,
    genai_types.HarmCategory.HARM_CATEGORY_HATE_SPEECH,
    genai_types.HarmCategory.HARM_CATEGORY_SEXUALLY_EXPLICIT,
    genai_types.HarmCategory.HARM_CATEGORY_DANGEROUS_CONTENT,
)


class LLMResponse:
    """Unified response object for LLM responses."""

    def __init__(self, content: str, usage: Any = None):
        self.message = MessageContent(content)
        self.usage = usage


class MessageContent:
    """Message content wrapper."""

    def __init__(self, content: str):
        self.content = content


class LLMClient(ABC):
    """Abstract base class for LLM clients."""

    provider = ""

    def __init__(self, params: Dict[str, Any] | None = None):
        self.params = dict(params or {})

    @abstractmethod
    def chat(self, model: str, messages: List[Dict[str, str]]) -> LLMResponse:
        """Send a chat request to the LLM provider."""


class OpenAIClient(LLMClient):
    """OpenAI client implementation."""

    provider = "openai"

    def __init__(self, api_key: str, params: Dict[str, Any] | None = None, sdk: Any = None):
        super().__init__(params)
        self.client = sdk or openai.OpenAI(api_key=api_key)

    def chat(self, model: str, messages: List[Dict[str, str]]) -> LLMResponse:
        """Send a chat request to OpenAI."""
        try:
            response = self.client.chat.completions.create(
                model=model,
                messages=messages,
                temperature=self.params.get("temperature", 0.7),
                top_p=self.params.get("top_p", 0.9),
                max_tokens=self.params.get("max_tokens", 4000),
            )
        except openai.APIStatusError as e:
            raise TransportError(f"OpenAI API returned HTTP {e.status_code}",
                                 detail=e.message) from e
        except openai.APIConnectionError as e:
            raise TransportError("Could not connect to the OpenAI API", detail=str(e)) from e
        except openai.OpenAIError as e:
            raise TransportError("OpenAI API request failed", detail=str(e)) from e

        if not response.choices:
            raise ContentPolicyError("No choices in OpenAI response - possible content policy violation")
        choice = response.choices[0]
        if choice.finish_reason == "content_filter" and not choice.message.content:
            raise ContentPolicyError("OpenAI response was blocked by the content filter",
                                     detail="finish_reason=content_filter")
        return LLMResponse(choice.message.content or "", usage=response.usage)


class GeminiClient(LLMClient):
    """Gemini client implementation (google-genai SDK)."""

    provider = "gemini"

    def __init__(self, api_key: str, params: Dict[str, Any] | None = None, sdk: Any = None):
        super().__init__(params)
        self.client = sdk or genai.Client(api_key=api_key)

    def _config(self, system_instruction: str | None) -> genai_types.GenerateContentConfig:
        return genai_types.GenerateContentConfig(
            system_instruction=system_instruction,
            temperature=self.params.get("temperature", 0.7),
            top_p=self.params.get("top_p", 0.8),
            top_k=self.params.get("top_k", 40),
            max_output_tokens=self.params.get("max_tokens", 8192),
            safety_settings=[
                genai_types.SafetySetting(
                    category=category,
                    threshold=genai_types.HarmBlockThreshold.BLOCK_NONE,
                )
                for category in _GEMINI_SAFETY_CATEGORIES
            ],
        )

    @staticmethod
    def _split_messages(messages: List[Dict[str, str]]):
        system = "\n\n".join(m["content"] for m in messages if m["role"] == "system") or None
        contents = [
            genai_types.Content(
                role="model" if m["role"] == "assistant" else "user",
                parts=[genai_types.Part(text=m["content"])],
            )
            for m in messages
            if m["role"] != "system"
        ]
        return system, contents

    def chat(self, model: str, messages: List[Dict[str, str]]) -> LLMResponse:
        """Send a chat request to Gemini."""
        system, contents = self._split_messages(messages)
        try:
            response = self.client.models.generate_content(
                model=model, contents=contents, config=self._config(system)
            )
        except genai_errors.APIError as e:
            raise TransportError(f"Gemini API returned HTTP {e.code}",
                                 detail=f"{e.status}: {e.message}") from e
        except httpx.HTTPError as e:
            raise TransportError("Could not connect to the Gemini API", detail=str(e)) from e

        if not response.candidates:
            feedback = response.prompt_feedback
            reason = feedback.block_reason if feedback else None
            raise ContentPolicyError(
                "No candidates in Gemini response - possible content policy violation",
                detail=f"block_reason={_enum_name(reason)}" if reason else "",
            )
        text = response.text or ""
        finish = _enum_name(response.candidates[0].finish_reason)
        if not text and finish in _BLOCKED_FINISH_REASONS:
            raise ContentPolicyError("Gemini stopped generating for policy reasons",
                                     detail=f"finish_reason={finish}")
        return LLMResponse(text, usage=response.usage_metadata)


class OllamaClient(LLMClient):
    """Ollama client implementation."""

    provider = "ollama"

    def __init__(self, host: str, params: Dict[str, Any] | None = None, sdk: Any = None):
        super().__init__(params)
        self.host = host
        self.client = sdk or ollama.Client(host=host)

    def chat(self, model: str, messages: List[Dict[str, str]]) -> LLMResponse:
        """Send a chat request to Ollama."""
        options = {
            "temperature": self.params.get("temperature", 0.7),
            "top_p": self.params.get("top_p", 0.9),
            "num_predict": self.params.get("max_tokens", 4096),
        }
        try:
            response = self.client.chat(model=model, messages=messages, options=options)
        except ollama.ResponseError as e:
            raise TransportError(f"Ollama returned HTTP {e.status_code}", detail=e.error) from e
        except (ConnectionError, httpx.HTTPError) as e:
            raise TransportError(f"Could not connect to Ollama at {self.host}", detail=str(e)) from e
        return LLMResponse(response.message.content or "")


def _enum_name(value: Any) -> str:
    return getattr(value, "name", None) or str(value)


def _require_key(settings: Settings, label: str) -> str:
    if not settings.api_key:
        env_var = settings.key_env_var
        raise ConfigurationError(
            f"{label} API key not found. Please set {env_var} in your environment variables.",
            env_var=env_var,
        )
    return settings.api_key


def get_llm_client(settings: Settings) -> LLMClient:
    """Factory: build the client for `settings.provider`.

    Raises ConfigurationError when the provider is unknown or its key is missing;
    nothing is sent over the network here.
    """
    provider = settings.provider
    if provider == "openai":
        return OpenAIClient(_require_key(settings, "OpenAI"), settings.params)
    if provider == "gemini":
        return GeminiClient(_require_key(settings, "Gemini"), settings.params)
    if provider == "ollama":
        return OllamaClient(settings.ollama_base_url, settings.params)
    raise ConfigurationError(
        f"Unsupported LLM provider: {provider}",
        detail=f"Set LLM_PROVIDER to one of: {', '.join(SUPPORTED_PROVIDERS)}",
        env_var="LLM_PROVIDER",
        example=SUPPORTED_PROVIDERS[0],
    )
