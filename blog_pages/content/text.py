"""Reading statistics for Markdown bodies.

Words are counted on the rendered text of the body rather than the raw
Markdown, so link targets, emphasis markers, and HTML tags are not counted.
"""

from __future__ import annotations

from bs4 import BeautifulSoup
from markdown import markdown

_EXTENSIONS = ["fenced_code", "tables", "sane_lists"]


def plain_text(body: str) -> str:
    """Render ``body`` as Markdown and return its visible text."""
    if not body.strip():
        return ""
    html = markdown(body, extensions=_EXTENSIONS)
    return BeautifulSoup(html, "html.parser").get_text(" ")


def count_words(body: str) -> int:
    """Return the number of whitespace-separated words in the rendered body."""
    return len(plain_text(body).split())


def read_time(word_count: int, words_per_minute: int) -> int:
    """Return whole minutes needed to read ``word_count`` words."""
    return word_count // words_per_minute


__all__ = ["count_words", "plain_text", "read_time"]
