"""Class markers used by exported chat transcripts."""

from __future__ import annotations

from bs4.element import PageElement, Tag

EMBED_TAG = "div"
EMBED_CLASS = "chatlog__embed-text"
TITLE_CLASS = "chatlog__embed-title"
MARKDOWN_PRESERVE_CLASS = "chatlog__markdown chatlog__markdown-preserve"
FIELDS_CLASS = "chatlog__embed-fields"
DESCRIPTION_CLASS = "chatlog__embed-description"


def has_class(node: PageElement | None, class_name: str) -> bool:
    """Return True when ``node`` is an element whose class equals ``class_name``.

    This is an exact string comparison, not token-set membership.
    """
    if not isinstance(node, Tag):
        return False
    value = node.get("class")
    if isinstance(value, list):
        value = " ".join(value)
    return value == class_name
