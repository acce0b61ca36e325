from config import Settings
from conftest import SITE
from errors import TransportError
from extractor import (
    CSS_PLACEHOLDER,
    JS_PLACEHOLDER,
    find_document,
    has_separate_css,
    has_separate_js,
    parse_generated_code,
)
from fallback import render_diagnostic


def test_document_is_cut_out_of_chatter():
    art = parse_generated_code("Sure! Here is your site:\n```html\n" + SITE + "\n```\nEnjoy.")

    assert art.html == SITE
    assert art.preview == SITE
    assert art.css.strip() == "body { font-family: sans-serif; color: #222; }"
    assert art.js.strip() == 'document.querySelector("h1").classList.add("ready");'
    assert has_separate_css(art) and has_separate_js(art)


def test_doctype_match_is_case_insensitive():
    text = "<!doctype HTML><html><body><p>hello</p></body></HTML>"
    assert find_document(text) == text


def test_multiple_blocks_are_joined():
    html = ("<!DOCTYPE html><html><head><style>a{}</style><style>b{}</style></head>"
            "<body><script src='x.js'></script><script>one()</script><script>two()</script></body></html>")
    art = parse_generated_code(html)

    assert art.css == "a{}\n\nb{}"
    assert art.js == "one()\n\ntwo()"


def test_missing_blocks_use_placeholders():
    art = parse_generated_code("<!DOCTYPE html><html><body>plain</body></html>")

    assert art.css == CSS_PLACEHOLDER
    assert art.js == JS_PLACEHOLDER
    assert not has_separate_css(art)
    assert not has_separate_js(art)


def test_text_without_document_is_kept_verbatim():
    art = parse_generated_code("<p>no doctype here</p>")

    assert art.html == "<p>no doctype here</p>"
    assert art.preview == art.html
    assert art.css == CSS_PLACEHOLDER


def test_diagnostic_page_survives_extraction(profile):
    settings = Settings(provider="openai", model="gpt-4o")
    page = render_diagnostic(profile, TransportError("boom"), settings)
    art = parse_generated_code(page)

    assert art.html == page
    assert "background" in art.css
