import threading
from dataclasses import replace

import pytest

from config import load_settings
from conftest import SITE, FakeClient
from errors import ContentPolicyError, GenerationInProgress, TransportError
from extractor import CSS_PLACEHOLDER, JS_PLACEHOLDER
from fallback import ERROR_CSS_PLACEHOLDER, ERROR_JS_PLACEHOLDER
from generator_llm import WebsiteGenerator


def test_successful_generation(profile, settings, fake_client):
    messages = []
    gen = WebsiteGenerator(settings, fake_client)
    result = gen.generate(profile, status_callback=messages.append)

    assert result.ok
    assert result.artifact.html.startswith("<!DOCTYPE html>")
    assert "font-family: sans-serif" in result.artifact.css
    assert "classList.add" in result.artifact.js
    assert result.artifact.preview == result.artifact.html
    assert messages[-1] == "✅ Website generated!"

    model, sent = fake_client.calls[0]
    assert model == "gpt-4o"
    assert sent[0]["role"] == "system"
    assert "Jane Doe" in sent[1]["content"]


def test_missing_credential_yields_setup_page_without_request(profile):
    settings = load_settings(provider="openai", environ={})
    gen = WebsiteGenerator.from_settings(settings)
    assert gen.client is None

    result = gen.generate(profile)
    art = result.artifact

    assert not result.ok
    assert result.failure.kind == "configuration"
    assert "Jane Doe" in art.html
    assert "API Configuration Required" in art.html
    assert "OPENAI_API_KEY=your_api_key_here" in art.html
    assert art.css == ERROR_CSS_PLACEHOLDER
    assert art.js == ERROR_JS_PLACEHOLDER


def test_transport_failure_becomes_diagnostic(profile, settings):
    client = FakeClient(exc=TransportError("OpenAI API returned HTTP 429", detail="rate limited"))
    result = WebsiteGenerator(settings, client).generate(profile)

    assert result.failure.kind == "transport"
    assert "HTTP 429" in result.artifact.html
    assert "rate limited" in result.artifact.html
    assert "Setup Instructions" not in result.artifact.html


def test_blocked_response_becomes_diagnostic(profile, settings):
    client = FakeClient(exc=ContentPolicyError("No candidates in Gemini response"))
    result = WebsiteGenerator(settings, client).generate(profile)

    assert result.failure.kind == "content_policy"
    assert "Response Blocked by Content Policy" in result.artifact.html


@pytest.mark.parametrize("text", ["", "   ", "<html></html>"])
def test_short_response_is_malformed(profile, settings, text):
    result = WebsiteGenerator(settings, FakeClient(text=text)).generate(profile)

    assert result.failure.kind == "malformed_response"
    assert "Response too short or empty from openai API" in result.artifact.html
    assert result.artifact.html.strip()


def test_response_without_doctype_is_kept_verbatim(profile, settings):
    text = "<div>" + "Portfolio content " * 10 + "</div>"
    result = WebsiteGenerator(settings, FakeClient(text=text)).generate(profile)

    assert result.ok
    assert result.artifact.html == text
    assert result.artifact.css == CSS_PLACEHOLDER
    assert result.artifact.js == JS_PLACEHOLDER


def test_validation_findings_are_reported_not_acted_on(profile, settings):
    text = SITE.replace("<!DOCTYPE html>\n", "<!DOCTYPE html>\n<div>") + "\n"
    gen = WebsiteGenerator(replace(settings, validate_output=True), FakeClient(text=text))
    result = gen.generate(profile)

    assert result.ok
    assert isinstance(result.warnings, tuple)
    assert result.warnings
    assert any(w.startswith("HTML line") for w in result.warnings)
    assert result.artifact.html.startswith("<!DOCTYPE html>")


def test_regenerate_asks_the_model_again(profile, settings, fake_client):
    gen = WebsiteGenerator(settings, fake_client)
    first = gen.generate_website(profile)
    second = gen.generate_website(profile)

    assert len(fake_client.calls) == 2
    assert first.html and second.html


def test_second_request_while_busy_is_rejected(profile, settings, fake_client):
    gen = WebsiteGenerator(settings, fake_client)
    gen._lock.acquire()
    try:
        assert gen.busy
        with pytest.raises(GenerationInProgress):
            gen.generate(profile)
    finally:
        gen._lock.release()
    assert not gen.busy
    assert fake_client.calls == []


def test_concurrent_callers_one_wins(profile, settings):
    entered, release = threading.Event(), threading.Event()

    class SlowClient(FakeClient):
        def chat(self, model, messages):
            entered.set()
            release.wait(5)
            return super().chat(model, messages)

    gen = WebsiteGenerator(settings, SlowClient())
    results = []
    worker = threading.Thread(target=lambda: results.append(gen.generate(profile)))
    worker.start()
    assert entered.wait(5)
    with pytest.raises(GenerationInProgress):
        gen.generate(profile)
    release.set()
    worker.join(5)
    assert results[0].ok


def test_caller_profile_is_not_touched(profile, settings, fake_client):
    before = profile.model_dump()
    WebsiteGenerator(settings, fake_client).generate(profile)
    assert profile.model_dump() == before


def test_unknown_prompt_style_yields_setup_page(profile, fake_client):
    settings = load_settings(provider="openai", environ={"OPENAI_API_KEY": "sk", "PROMPT_STYLE": "fancy"})
    result = WebsiteGenerator(settings, fake_client).generate(profile)

    assert not result.ok
    assert result.failure.kind == "configuration"
    assert result.failure.env_var == "PROMPT_STYLE"
    assert "PROMPT_STYLE=concise" in result.artifact.html
    assert "Get an API key" not in result.artifact.html
    assert "Jane Doe" in result.artifact.html
    assert fake_client.calls == []
