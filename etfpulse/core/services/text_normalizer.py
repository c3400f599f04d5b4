"""Flatten HTML markup into single-line plain text for pattern extraction."""

from __future__ import annotations

import re

from bs4 import BeautifulSoup

_WHITESPACE_RE = re.compile(r"[\s\u00a0]+")

_DROPPED_TAGS = ["script", "style", "noscript", "template"]


def normalize_text(markup: str) -> str:
    """Return ``markup`` as whitespace-collapsed plain text.

    Script and style blocks are dropped and comments never reach the text.
    Entities are decoded exactly once. Never raises.
    """
    if not markup:
        return ""

    soup = BeautifulSoup(markup, "html.parser")
    for tag in soup.find_all(_DROPPED_TAGS):
        tag.decompose()
    return _WHITESPACE_RE.sub(" ", soup.get_text(" ")).strip()


__all__ = ["normalize_text"]
