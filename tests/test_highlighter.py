from conftest import SITE
from extractor import parse_generated_code
from highlighter import COLORS, code_block, code_views, highlight_syntax


def span(kind, text):
    return f'<span style="color: {COLORS[kind]};">{text}</span>'


def test_html_tags_and_attributes():
    out = highlight_syntax('<div class="card">Hi</div>', "html")

    assert span("tag", "div") in out
    assert span("attr", "class") in out
    assert span("string", '"card"') in out
    assert span("punct", "&lt;/") in out
    assert "<div" not in out


def test_css_tokens():
    out = highlight_syntax(".card { color: #fff; }", "css")

    assert span("selector", ".card") in out
    assert span("prop", "color") in out
    assert span("color", "#fff") in out


def test_javascript_tokens():
    out = highlight_syntax("const x = 'a'; // done", "javascript")

    assert span("keyword", "const") in out
    assert span("string", "'a'") in out
    assert span("comment", "// done") in out
    assert highlight_syntax("return null", "js") == span("keyword", "return") + " " + span("literal", "null")


def test_unknown_language_is_only_escaped():
    assert highlight_syntax("a < b && c", "python") == "a &lt; b &amp;&amp; c"


def test_empty_input():
    assert highlight_syntax("", "html") == ""
    assert "<code></code>" in code_block("", "css")


def test_css_pseudo_class_selector_is_not_a_property():
    out = highlight_syntax("a:hover { color: red; background: blue }", "css")

    assert span("prop", "a") not in out
    assert out.startswith("a" + span("selector", ":hover"))
    assert span("prop", "color") in out
    assert span("prop", "background") in out


def test_css_values_are_not_selectors():
    out = highlight_syntax("p{margin:auto;--gap:4px}", "css")

    assert span("prop", "margin") in out
    assert span("prop", "--gap") in out
    assert span("selector", ":auto") not in out


def test_code_views_follow_extraction():
    full = code_views(parse_generated_code(SITE))
    assert [(label, lang) for label, _, lang in full] == [
        ("HTML", "html"), ("CSS", "css"), ("JavaScript", "javascript"),
    ]
    assert full[0][1] == SITE

    inline = code_views(parse_generated_code("<!DOCTYPE html><html><body>x</body></html>"))
    assert [label for label, _, _ in inline] == ["HTML"]
