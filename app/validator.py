"""
HTML / CSS checks for generated websites.

Findings are advisory: the generator reports them next to the artifact and
never retries or rejects because of them.
"""

from __future__ import annotations

import logging
from typing import List

import cssutils
import html5lib
from bs4 import BeautifulSoup

# Configure cssutils logging to be less verbose for common errors
cssutils.log.setLevel(logging.CRITICAL)

MAX_FINDINGS = 20


class _CaptureCSSLogHandler(logging.Handler):
    def __init__(self, error_list: List[str], block: int):
        super().__init__()
        self.error_list = error_list
        self.block = block

    def emit(self, record):
        # record.getMessage() gives the formatted log message from cssutils
        self.error_list.append(f"CSS <style> block {self.block}: {record.getMessage()}")


def validate_html(html_content: str) -> List[str]:
    """html5lib parse; one entry per parse error it records."""
    parser = html5lib.HTMLParser(strict=False)
    parser.parse(html_content)
    errors = []
    for (line, col), code, data in parser.errors:
        errors.append(f"HTML line {line}, col {col}: {code.replace('-', ' ')}")
    return errors


def validate_css(html_content: str) -> List[str]:
    """Run every <style> block through cssutils and collect what it logs."""
    soup = BeautifulSoup(html_content, "html.parser")
    css_logger = logging.getLogger("CSSUTILS")  # the name cssutils logs under
    errors: List[str] = []

    for n, style_tag in enumerate(soup.find_all("style"), start=1):
        if not style_tag.string:
            continue
        handler = _CaptureCSSLogHandler(errors, n)
        original_level = css_logger.level
        css_logger.addHandler(handler)
        css_logger.setLevel(logging.WARNING)
        try:
            parser = cssutils.CSSParser(validate=True, raiseExceptions=False)
            parser.parseString(style_tag.string)
        finally:
            css_logger.removeHandler(handler)
            css_logger.setLevel(original_level)
    return errors


def validate_html_css(html_content: str) -> List[str]:
    """Validates HTML structure and embedded CSS. Returns a list of findings."""
    return (validate_html(html_content) + validate_css(html_content))[:MAX_FINDINGS]
