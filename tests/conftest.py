import pytest

from config import Settings
from llm_client import LLMClient, LLMResponse
from schema_profile import UserProfile

SITE = """<!DOCTYPE html>
<html lang="en">
<head>
<title>Jane Doe</title>
<style>
body { font-family: sans-serif; color: #222; }
</style>
</head>
<body>
<h1>Jane Doe</h1>
<p>Full-Stack Developer building accessible web apps.</p>
<script>
document.querySelector("h1").classList.add("ready");
</script>
</body>
</html>"""


class FakeClient(LLMClient):
    """Returns canned text (or raises) and records every request."""

    provider = "fake"

    def __init__(self, text: str = SITE, exc: Exception | None = None):
        super().__init__({})
        self.text = text
        self.exc = exc
        self.calls = []

    def chat(self, model, messages):
        self.calls.append((model, messages))
        if self.exc is not None:
            raise self.exc
        return LLMResponse(self.text)


@pytest.fixture
def profile():
    return UserProfile(
        name="Jane Doe",
        title="Full-Stack Developer",
        bio="I build accessible web apps for small teams.",
        work_history=[{
            "position": "Senior Engineer",
            "company": "Acme",
            "start_month": "01",
            "start_year": "2020",
            "is_present": True,
            "bullets": ["Led the checkout rewrite", "Cut page load time by 40%"],
        }],
        projects=[{
            "title": "Tracker",
            "description": "Habit tracking app",
            "stack": ["Python", "React"],
            "url": "https://tracker.example.com",
            "github": "https://github.com/jane/tracker",
        }],
        skills=["Python", "React", "python"],
        education=[{
            "school": "State University",
            "degree": "BSc Computer Science",
            "start_month": "09",
            "start_year": "2014",
            "end_month": "06",
            "end_year": "2018",
            "cgpa": "3.8",
        }],
    )


@pytest.fixture
def settings():
    return Settings(provider="openai", model="gpt-4o", api_key="sk-test",
                    params={"temperature": 0.7, "top_p": 0.9, "max_tokens": 4000},
                    validate_output=False)


@pytest.fixture
def fake_client():
    return FakeClient()
