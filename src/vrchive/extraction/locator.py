"""Locate embed containers in a parsed document."""

from __future__ import annotations

from typing import Iterator

from bs4.element import Tag

from vrchive.extraction.markers import EMBED_CLASS, EMBED_TAG, has_class


def is_embed(node: object) -> bool:
    return isinstance(node, Tag) and node.name == EMBED_TAG and has_class(node, EMBED_CLASS)


def iter_embeds(tree: Tag) -> Iterator[Tag]:
    """Yield embed roots in document order (pre-order, depth-first).

    Nested embeds are yielded as well; the root itself is considered.
    """
    if is_embed(tree):
        yield tree
    for node in tree.descendants:
        if is_embed(node):
            yield node
