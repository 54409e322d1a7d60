"""
Renderer callbacks for markdown converted to HTML.

Markdown renderers call these with the already rendered inner text.
"""

from __future__ import annotations

from typing import Optional
from urllib.parse import urlsplit

from ..consts import TRUSTED_LINK_HOST_REGEX


def _is_trusted_link(href: str) -> bool:
    try:
        hostname = urlsplit(href).hostname
    except ValueError:
        # Malformed URL, e.g. an unbalanced IPv6 bracket
        return False
    return bool(hostname and TRUSTED_LINK_HOST_REGEX.search(hostname))


def set_nofollow_links(href: str, title: Optional[str], text: str) -> str:
    """
    Renders a link; links leaving the platform get rel="nofollow" and open in a new tab.

    The title, when set, is used as the link text.
    """
    label = title or text
    if _is_trusted_link(href):
        return f'<a href="{href}">{label}</a>'
    return f'<a rel="nofollow" target="_blank" href="{href}">{label}</a>'


def decrease_heads_level(text: str, level: int) -> str:
    """Renders a heading one level lower: h1 -> h2."""
    level += 1
    return f"<h{level}>{text}</h{level}>"


__all__ = ["set_nofollow_links", "decrease_heads_level"]
