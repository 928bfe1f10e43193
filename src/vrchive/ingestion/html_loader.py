"""HTML document loading and parsing.

Uses BeautifulSoup with the stdlib ``html.parser`` backend. ``class`` is kept
as the literal attribute string so class markers compare exactly.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator, Tuple

from bs4 import BeautifulSoup

from vrchive.config import DEFAULT_SUFFIX
from vrchive.utils.files import iter_document_paths, read_document

LOGGER = logging.getLogger(__name__)

PARSER_FEATURES = "html.parser"
DOCUMENT_ENCODING = "utf-8"


def parse_document(content: bytes) -> BeautifulSoup:
    """Parse raw bytes into a navigable tree."""
    return BeautifulSoup(
        content,
        PARSER_FEATURES,
        from_encoding=DOCUMENT_ENCODING,
        multi_valued_attributes=None,
    )


def load_documents(
    folder: Path, suffix: str = DEFAULT_SUFFIX
) -> Iterator[Tuple[Path, BeautifulSoup]]:
    """Yield ``(path, tree)`` for every readable document in ``folder``.

    An unlistable folder is logged and yields nothing. Files that cannot be
    read or parsed are logged and skipped.
    """
    try:
        paths = iter_document_paths(folder, suffix)
    except OSError as exc:
        LOGGER.error("Error reading directory %s: %s", folder, exc)
        return

    for path in paths:
        LOGGER.info("Searching file %s", path)
        try:
            content = read_document(path)
        except OSError as exc:
            LOGGER.error("Error reading file %s: %s", path, exc)
            continue

        try:
            tree = parse_document(content)
        except Exception as exc:
            LOGGER.error("Error parsing HTML in file %s: %s", path, exc)
            continue

        yield path, tree
