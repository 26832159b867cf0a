"""Shared text and URL helpers for Productboard payloads."""

import re

ENTITY_URL_TEMPLATE = "https://zapier.productboard.com/feature-board/165206/detail/{entity_type}/{entity_id}"

_TAG_RE = re.compile(r"<[^>]*>")
_WHITESPACE_RE = re.compile(r"\s+")

# Decoded in order, after tags are stripped.
_HTML_ENTITIES = (
    ("&nbsp;", " "),
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&#39;", "'"),
)


def sanitize_html(html: str | None) -> str:
    """Strip HTML markup and decode a fixed set of entities into plain text.

    Args:
        html: Rich-text HTML as returned by Productboard, or None

    Returns:
        Plain text with whitespace collapsed, or an empty string
    """
    if not html:
        return ""

    text = _TAG_RE.sub("", str(html))
    for entity, replacement in _HTML_ENTITIES:
        text = text.replace(entity, replacement)
    return _WHITESPACE_RE.sub(" ", text).strip()


def build_entity_url(entity_type: str, entity_id: str) -> str:
    """Build the Productboard web URL for an entity."""
    return ENTITY_URL_TEMPLATE.format(entity_type=entity_type, entity_id=entity_id)
