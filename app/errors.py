"""
Failure kinds of the website generation pipeline.

Every variant carries a human-readable ``message`` plus an opaque ``detail``
string holding whatever the vendor SDK reported (status code, body, block
reason). Callers branch on the class or on ``kind``; nobody pokes at vendor
exception attributes outside ``llm_client``.
"""

from __future__ import annotations


class GenerationError(Exception):
    """Base class for expected failures; always recoverable via a diagnostic page."""

    kind = "generation"
    title = "Website Generation Failed"

    def __init__(self, message: str, detail: str = ""):
        super().__init__(message)
        self.message = message
        self.detail = detail

    def __str__(self) -> str:
        return f"{self.message} ({self.detail})" if self.detail else self.message


class ConfigurationError(GenerationError):
    """Credential missing, or provider or prompt style not configured.

    ``example`` is the value shown next to ``env_var`` on the setup page.
    """

    kind = "configuration"
    title = "API Configuration Required"

    def __init__(self, message: str, detail: str = "", env_var: str = "",
                 example: str = "your_api_key_here"):
        super().__init__(message, detail)
        self.env_var = env_var
        self.example = example


class TransportError(GenerationError):
    """Network failure, non-2xx status, auth or rate limiting."""

    kind = "transport"
    title = "Could Not Reach the AI Service"


class ContentPolicyError(GenerationError):
    """The service returned no usable candidates (safety filtering)."""

    kind = "content_policy"
    title = "Response Blocked by Content Policy"


class MalformedResponseError(GenerationError):
    """Text came back but is empty or too short to be a website."""

    kind = "malformed_response"
    title = "Unusable Response from the AI Service"


class GenerationInProgress(RuntimeError):
    """Raised when a generation is requested while another one is pending."""
