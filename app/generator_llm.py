"""
LLM-based portfolio website generator.

• One request/response cycle per call against the configured provider
  (OpenAI, Gemini or a local Ollama model) – no caching, no retries, so
  "regenerate" really asks the model again.
• Every expected failure (missing key, transport error, blocked or too-short
  response) comes back as a diagnostic page instead of an exception.
• Successful output is checked with html5lib/cssutils; findings are reported
  next to the artifact, never acted on.
• Only one generation may be in flight per generator.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from config import Settings, load_settings
from errors import ConfigurationError, GenerationError, GenerationInProgress, MalformedResponseError
from extractor import find_document, parse_generated_code
from fallback import diagnostic_artifact
from llm_client import LLMClient, get_llm_client
from prompt_builder import STYLES, build_messages
from schema_profile import GeneratedArtifact, UserProfile
from utils import get_logger, preview_text
from validator import validate_html_css

logger = get_logger(__name__)


@dataclass(frozen=True)
class GenerationResult:
    artifact: GeneratedArtifact
    failure: Optional[GenerationError] = None
    warnings: Tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return self.failure is None


class WebsiteGenerator:
    """Turns a UserProfile into a GeneratedArtifact through one model call.

    Build it once (``WebsiteGenerator.from_settings(load_settings())``) and
    hand it to whatever triggers generation. ``client`` may be any
    ``LLMClient``; when it is None the generator answers every request with
    the configuration diagnostic held in ``config_error``.
    """

    def __init__(
        self,
        settings: Settings,
        client: LLMClient | None,
        config_error: ConfigurationError | None = None,
    ):
        self.settings = settings
        self.client = client
        self.config_error = config_error
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "WebsiteGenerator":
        settings = settings or load_settings()
        try:
            client = get_llm_client(settings)
        except ConfigurationError as e:
            logger.warning("LLM client not configured: %s", e)
            return cls(settings, None, config_error=e)
        logger.info("Using %s with model %s", settings.provider, settings.model)
        return cls(settings, client)

    @property
    def busy(self) -> bool:
        return self._lock.locked()

    def generate(
        self,
        profile: UserProfile,
        status_callback: Callable[[str], None] | None = None,
    ) -> GenerationResult:
        """Run the pipeline once. Raises GenerationInProgress if a run is pending."""
        if not self._lock.acquire(blocking=False):
            raise GenerationInProgress("A website generation is already in progress")
        try:
            return self._generate(profile.model_copy(deep=True), status_callback)
        finally:
            self._lock.release()

    def generate_website(self, profile: UserProfile) -> GeneratedArtifact:
        return self.generate(profile).artifact

    def _generate(self, profile: UserProfile, status_callback) -> GenerationResult:
        def status(msg: str) -> None:
            if status_callback:
                status_callback(msg)

        try:
            text = self._request(profile, status)
        except GenerationError as e:
            logger.error("Generation failed [%s]: %s", e.kind, e.message)
            if e.detail:
                logger.error("Details: %s", e.detail)
            status(f"❌ {e.message}")
            return GenerationResult(diagnostic_artifact(profile, e, self.settings), failure=e)

        if find_document(text) is None:
            logger.warning("No <!DOCTYPE html>…</html> span in response; using the raw text as HTML")
        artifact = parse_generated_code(text)

        warnings: Tuple[str, ...] = ()
        if self.settings.validate_output:
            status("🔍 Validating generated Website (HTML/CSS)...")
            warnings = tuple(validate_html_css(artifact.html))
            for w in warnings:
                logger.warning("Validation: %s", w)
        status("✅ Website generated!")
        return GenerationResult(artifact, warnings=warnings)

    def _request(self, profile: UserProfile, status: Callable[[str], None]) -> str:
        if self.client is None:
            raise self.config_error or ConfigurationError(
                "No LLM client configured", env_var=self.settings.key_env_var
            )
        if self.settings.prompt_style not in STYLES:
            raise ConfigurationError(
                f"Unknown prompt style: {self.settings.prompt_style}",
                detail=f"Set PROMPT_STYLE to one of: {', '.join(STYLES)}",
                env_var="PROMPT_STYLE",
                example=STYLES[0],
            )

        messages = build_messages(profile, self.settings.prompt_style)
        prompt = messages[-1]["content"]
        logger.info("Generating website for %s (%d prompt chars)", profile.name, len(prompt))
        logger.debug("Prompt preview: %s", preview_text(prompt))

        status(f"🤖 Calling {self.settings.provider} ({self.settings.model})...")
        rsp = self.client.chat(self.settings.model, messages)
        text = rsp.message.content or ""
        logger.info("Received %d characters from %s", len(text), self.settings.provider)
        if rsp.usage is not None:
            logger.info("Usage: %s", rsp.usage)

        if len(text.strip()) < self.settings.min_response_chars:
            raise MalformedResponseError(
                f"Response too short or empty from {self.settings.provider} API",
                detail=f"Length: {len(text.strip())}, Content: {preview_text(text.strip(), 100)!r}",
            )
        return text
