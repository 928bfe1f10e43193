"""Turn an embed subtree into a :class:`SearchResult`.

Extraction is a fixed sequence of lookups. Each step tolerates missing
markup by returning an empty value, so a record is always produced:

1. the title is read from ``embed-title > markdown-preserve``;
2. link sections (``embed-fields`` / ``embed-description`` children) are only
   considered once a title was found;
3. each section is narrowed to its link container;
4. anchors in the container are classified as source and/or download links
   by the text they contain, later anchors overriding earlier ones.
"""

from __future__ import annotations

import logging
from typing import Iterable, Iterator, List, Optional, Tuple

from bs4.element import Comment, NavigableString, PageElement, Tag

from vrchive.extraction.markers import (
    DESCRIPTION_CLASS,
    FIELDS_CLASS,
    MARKDOWN_PRESERVE_CLASS,
    TITLE_CLASS,
    has_class,
)
from vrchive.models import SearchResult
from vrchive.utils.text import contains_ignore_case

LOGGER = logging.getLogger(__name__)

SOURCE_KEYWORD = "Source"
DOWNLOAD_KEYWORD = "Download"


def _child_tags(node: Tag) -> Iterator[Tag]:
    for child in node.children:
        if isinstance(child, Tag):
            yield child


def find_first_with_class(node: PageElement | None, class_name: str) -> Optional[Tag]:
    """Depth-first search for the first node carrying ``class_name``, ``node`` included."""
    if not isinstance(node, Tag):
        return None
    if has_class(node, class_name):
        return node
    return node.find(lambda tag: has_class(tag, class_name))


def has_text(node: PageElement, keyword: str) -> bool:
    """Return True if any text node in ``node``'s subtree contains ``keyword``, ignoring case."""
    if isinstance(node, NavigableString):
        return contains_ignore_case(str(node), keyword)
    return any(contains_ignore_case(text, keyword) for text in node.strings)


def find_title(embed: Tag) -> str:
    """Text of the title's preserved markdown; the last one found wins."""
    name = ""
    for child in _child_tags(embed):
        if not has_class(child, TITLE_CLASS):
            continue
        for text_child in _child_tags(child):
            if not has_class(text_child, MARKDOWN_PRESERVE_CLASS):
                continue
            first = next(iter(text_child.contents), None)
            if isinstance(first, NavigableString) and not isinstance(first, Comment):
                name = str(first)
    return name


def find_link_sections(embed: Tag, name: str) -> List[Tag]:
    """Children holding links. Without a title there are none."""
    if not name:
        return []
    return [
        child
        for child in _child_tags(embed)
        if has_class(child, FIELDS_CLASS) or has_class(child, DESCRIPTION_CLASS)
    ]


def find_link_container(section: Tag) -> Optional[Tag]:
    container = find_first_with_class(section, FIELDS_CLASS)
    if container is None:
        container = find_first_with_class(section, DESCRIPTION_CLASS)
    return container


def iter_anchors(container: Optional[Tag]) -> Iterator[Tag]:
    """Yield ``<a>`` elements under ``container`` in document order.

    The subtree of a matched anchor is not searched again.
    """
    if container is None:
        return
    stack = [container]
    while stack:
        node = stack.pop()
        if node.name == "a":
            yield node
            continue
        stack.extend(reversed(list(_child_tags(node))))


def classify_links(anchors: Iterable[Tag]) -> Tuple[str, str]:
    """Return ``(source_link, download_link)``; the last matching anchor wins."""
    source_link = ""
    download_link = ""
    for anchor in anchors:
        href = anchor.get("href") or ""
        LOGGER.debug("Found link %s on element %s", href, anchor.name)
        if has_text(anchor, SOURCE_KEYWORD):
            source_link = href
        if has_text(anchor, DOWNLOAD_KEYWORD):
            download_link = href
    return source_link, download_link


def extract_record(embed: Tag) -> SearchResult:
    name = find_title(embed)
    LOGGER.debug("Found title: %s", name)

    sections = find_link_sections(embed, name)
    anchors: List[Tag] = []
    for section in sections:
        container = find_link_container(section)
        LOGGER.debug("Found link container: %s", container.name if container else None)
        anchors.extend(iter_anchors(container))

    source_link, download_link = classify_links(anchors)
    LOGGER.debug("Found source: %s", source_link)
    LOGGER.debug("Found download: %s", download_link)

    return SearchResult(name=name, source_link=source_link, download_link=download_link)
