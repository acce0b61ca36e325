"""
LLM text ➜ GeneratedArtifact
– takes the first <!DOCTYPE html> … </html> span (case-insensitive, greedy
  up to the last closing tag)
– copies <style> / <script> bodies out as separate CSS / JS
– anything without a doctype span is passed through verbatim

This is pattern matching, not parsing: nested documents, "</style>" inside a
string literal or unclosed blocks all produce wrong splits.
"""
import re
from typing import List

from schema_profile import GeneratedArtifact

CSS_PLACEHOLDER = "/* CSS is embedded in the HTML file */"
JS_PLACEHOLDER = "/* JavaScript is embedded in the HTML file */"

_DOCUMENT_RE = re.compile(r"<!DOCTYPE\s+html[^>]*>.*</html>", re.I | re.S)
_STYLE_RE = re.compile(r"<style[^>]*>(.*?)</style>", re.I | re.S)
_SCRIPT_RE = re.compile(r"<script[^>]*>(.*?)</script>", re.I | re.S)


def find_document(text: str) -> str | None:
    m = _DOCUMENT_RE.search(text or "")
    return m.group(0) if m else None


def _bodies(pattern: re.Pattern, html: str) -> List[str]:
    # <script src="..."></script> contributes nothing
    return [body for body in pattern.findall(html) if body.strip()]


def extract_css(html: str) -> str:
    return "\n\n".join(_bodies(_STYLE_RE, html))


def extract_js(html: str) -> str:
    return "\n\n".join(_bodies(_SCRIPT_RE, html))


def parse_generated_code(text: str) -> GeneratedArtifact:
    html = find_document(text)
    if html is None:
        return GeneratedArtifact(html=text, css=CSS_PLACEHOLDER, js=JS_PLACEHOLDER, preview=text)
    return GeneratedArtifact(
        html=html,
        css=extract_css(html) or CSS_PLACEHOLDER,
        js=extract_js(html) or JS_PLACEHOLDER,
        preview=html,
    )


def has_separate_css(artifact: GeneratedArtifact) -> bool:
    return bool(artifact.css.strip()) and not _is_placeholder(artifact.css)


def has_separate_js(artifact: GeneratedArtifact) -> bool:
    return bool(artifact.js.strip()) and not _is_placeholder(artifact.js)


def _is_placeholder(code: str) -> bool:
    code = code.strip()
    return code.startswith("/*") and code.endswith("*/") and code.count("*/") == 1
