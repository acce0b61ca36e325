"""
Tiny regex syntax colouring for the "View Code" tab.

The code is HTML-escaped first and then scanned once with a single combined
pattern per language, so spans inserted for one token are never matched
again by another rule. Display only: callers pass a string and get a new one.
"""

import html
import re
from typing import List, Tuple

from extractor import has_separate_css, has_separate_js

COLORS = {
    "punct": "#e06c75",
    "tag": "#61afef",
    "attr": "#d19a66",
    "string": "#98c379",
    "prop": "#e06c75",
    "color": "#d19a66",
    "selector": "#61afef",
    "keyword": "#c678dd",
    "literal": "#d19a66",
    "comment": "#7f848e",
}

_PATTERNS = {
    "html": re.compile(
        r"(?P<comment>&lt;!--.*?--&gt;)"
        r"|(?P<open>&lt;/?)(?P<tag>[a-zA-Z][a-zA-Z0-9-]*)"
        r"|(?P<attr>[a-zA-Z_:][\w:.-]*)(?==)"
        r"|(?P<string>\"[^\"]*\")"
        r"|(?P<close>/?&gt;)",
        re.S,
    ),
    "css": re.compile(
        r"(?P<comment>/\*.*?\*/)"
        r"|(?P<color>#[0-9a-fA-F]{3,8}\b|rgba?\([^)]*\)|hsla?\([^)]*\))"
        r"|(?P<lead>[{;]\s*)(?P<prop>-{0,2}[a-zA-Z][\w-]*)(?=\s*:)"
        r"|(?P<selector>[.#][a-zA-Z_][\w-]*|::?[a-zA-Z][\w-]*(?=[^;{}]*\{))",
        re.S,
    ),
    "javascript": re.compile(
        r"(?P<comment>//[^\n]*|/\*.*?\*/)"
        r"|(?P<string>\"(?:\\.|[^\"\\\n])*\"|'(?:\\.|[^'\\\n])*'|`(?:\\.|[^`\\])*`)"
        r"|(?P<keyword>\b(?:function|const|let|var|if|else|for|while|do|return|class|extends"
        r"|new|import|export|from|async|await|try|catch|finally|throw|switch|case|break|continue)\b)"
        r"|(?P<literal>\b(?:true|false|null|undefined|this)\b)",
        re.S,
    ),
}
_PATTERNS["js"] = _PATTERNS["javascript"]


def _span(kind: str, text: str) -> str:
    return f'<span style="color: {COLORS[kind]};">{text}</span>'


def _paint(m: re.Match) -> str:
    if m.lastgroup == "tag":
        return _span("punct", m.group("open")) + _span("tag", m.group("tag"))
    if m.lastgroup == "close":
        return _span("punct", m.group(0))
    if m.lastgroup == "prop":
        # a property name only counts right after "{" or ";"
        return m.group("lead") + _span("prop", m.group("prop"))
    return _span(m.lastgroup, m.group(0))


def highlight_syntax(code: str, language: str) -> str:
    """Escaped `code` with coloured spans; unknown languages are only escaped."""
    escaped = html.escape(code or "", quote=False)
    pattern = _PATTERNS.get((language or "").lower())
    if pattern is None:
        return escaped
    return pattern.sub(_paint, escaped)


def code_block(code: str, language: str) -> str:
    """<pre><code> wrapper ready for st.markdown(..., unsafe_allow_html=True)."""
    return (
        '<pre style="background:#282c34;color:#abb2bf;padding:1rem;border-radius:8px;'
        'max-height:32rem;overflow:auto;font-size:0.85rem;line-height:1.5;">'
        f"<code>{highlight_syntax(code, language)}</code></pre>"
    )


def code_views(artifact) -> List[Tuple[str, str, str]]:
    """(label, code, language) per View Code tab; CSS/JS only when extracted."""
    views = [("HTML", artifact.html, "html")]
    if has_separate_css(artifact):
        views.append(("CSS", artifact.css, "css"))
    if has_separate_js(artifact):
        views.append(("JavaScript", artifact.js, "javascript"))
    return views
