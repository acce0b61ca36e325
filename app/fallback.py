"""
Diagnostic pages substituted for the portfolio when generation fails.

The page names the failure and echoes a summary of the profile that was
about to be sent, so the user can see their data arrived.
"""

from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from config import API_KEY_URL, Settings
from errors import GenerationError
from schema_profile import GeneratedArtifact, UserProfile

ERROR_CSS_PLACEHOLDER = "/* Error page CSS is embedded in HTML */"
ERROR_JS_PLACEHOLDER = "/* No JavaScript needed for error page */"

env = Environment(loader=FileSystemLoader(Path(__file__).parent / "templates"),
                  autoescape=True, trim_blocks=True, lstrip_blocks=True)


def render_diagnostic(profile: UserProfile, error: GenerationError, settings: Settings) -> str:
    html = env.get_template("diagnostic.html").render(
        profile=profile,
        error=error,
        provider=settings.provider,
        model=settings.model,
        key_url=API_KEY_URL.get(settings.provider, ""),
    )
    return html.strip()


def diagnostic_artifact(profile: UserProfile, error: GenerationError, settings: Settings) -> GeneratedArtifact:
    html = render_diagnostic(profile, error, settings)
    return GeneratedArtifact(html=html, css=ERROR_CSS_PLACEHOLDER, js=ERROR_JS_PLACEHOLDER, preview=html)
