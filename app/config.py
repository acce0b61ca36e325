"""
Configuration settings for the PortfoliAI application.

This file contains configuration for the different LLM providers and models.
You can switch between providers by setting LLM_PROVIDER in the environment
(or in a .env file next to the project).
"""

from __future__ import annotations

from dotenv import load_dotenv
load_dotenv()          # ← must be before os.getenv(...)
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping

# LLM Provider Configuration
# Set to "openai", "gemini" or "ollama"
LLM_PROVIDER = os.getenv("LLM_PROVIDER", "openai").lower()

SUPPORTED_PROVIDERS = ("openai", "gemini", "ollama")

# Model Configuration
DEFAULT_MODEL = {
    "openai": os.getenv("OPENAI_MODEL", "gpt-4o"),
    "gemini": os.getenv("GEMINI_MODEL", "gemini-2.5-flash"),
    "ollama": os.getenv("OLLAMA_MODEL", "deepseek-coder-v2"),
}

# Environment variables searched (in order) for each provider's API key.
# Ollama runs locally and needs none.
API_KEY_ENV = {
    "openai": ("OPENAI_API_KEY",),
    "gemini": ("GEMINI_API_KEY", "GOOGLE_API_KEY"),
    "ollama": (),
}

# Where users get a key; shown on the setup page when one is missing.
API_KEY_URL = {
    "openai": "https://platform.openai.com/api-keys",
    "gemini": "https://aistudio.google.com/app/apikey",
}

# Sampling parameters, fixed per provider
MODEL_PARAMS: Dict[str, Dict[str, Any]] = {
    "openai": {"temperature": 0.7, "top_p": 0.9, "max_tokens": 4000},
    "gemini": {"temperature": 0.7, "top_p": 0.8, "top_k": 40, "max_tokens": 8192},
    "ollama": {"temperature": 0.7, "top_p": 0.9, "max_tokens": 4096},
}

# Prompt flavour per provider ("concise" or "creative"), PROMPT_STYLE overrides
PROMPT_STYLE = {
    "openai": "concise",
    "gemini": "creative",
    "ollama": "concise",
}

# Ollama Configuration
OLLAMA_BASE_URL = os.getenv("OLLAMA_BASE_URL", "http://localhost:11434")

# A portfolio page can't be produced in fewer characters than this
MIN_RESPONSE_CHARS = 100

# Run html5lib/cssutils over successful output and report findings
VALIDATE_OUTPUT = os.getenv("VALIDATE_OUTPUT", "1") not in ("0", "false", "no")


@dataclass(frozen=True)
class Settings:
    """Everything the generation pipeline needs to know about its environment."""

    provider: str
    model: str
    api_key: str | None = None
    params: Dict[str, Any] = field(default_factory=dict)
    prompt_style: str = "concise"
    ollama_base_url: str = OLLAMA_BASE_URL
    min_response_chars: int = MIN_RESPONSE_CHARS
    validate_output: bool = VALIDATE_OUTPUT

    @property
    def key_env_var(self) -> str:
        names = API_KEY_ENV.get(self.provider, ())
        return names[0] if names else ""

    def __repr__(self) -> str:  # keep keys out of logs and tracebacks
        masked = "set" if self.api_key else "missing"
        return (f"Settings(provider={self.provider!r}, model={self.model!r}, "
                f"api_key={masked}, prompt_style={self.prompt_style!r})")


def get_model_for_provider(provider: str | None = None) -> str:
    """Get the default model for the specified provider."""
    provider = (provider or LLM_PROVIDER).lower()
    return DEFAULT_MODEL.get(provider, DEFAULT_MODEL["openai"])


def resolve_api_key(provider: str, environ: Mapping[str, str] | None = None) -> str | None:
    """Look the provider's API key up in the environment at call time."""
    environ = os.environ if environ is None else environ
    for name in API_KEY_ENV.get(provider.lower(), ()):
        value = (environ.get(name) or "").strip()
        if value:
            return value
    return None


def load_settings(
    provider: str | None = None,
    model: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """Build Settings from the environment. Never raises for a missing key."""
    environ = os.environ if environ is None else environ
    provider = (provider or environ.get("LLM_PROVIDER") or LLM_PROVIDER).lower()
    style = (environ.get("PROMPT_STYLE") or PROMPT_STYLE.get(provider, "concise")).lower()
    return Settings(
        provider=provider,
        model=model or get_model_for_provider(provider),
        api_key=resolve_api_key(provider, environ),
        params=dict(MODEL_PARAMS.get(provider, MODEL_PARAMS["openai"])),
        prompt_style=style,
        ollama_base_url=environ.get("OLLAMA_BASE_URL", OLLAMA_BASE_URL),
    )
