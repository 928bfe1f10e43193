"""Case-insensitive substring filter over extracted records."""

from __future__ import annotations

import logging
from typing import Iterable, Iterator

from vrchive.models import SearchResult
from vrchive.utils.text import contains_ignore_case

LOGGER = logging.getLogger(__name__)


def matches(record: SearchResult, text: str) -> bool:
    """Return True if any field of ``record`` contains ``text``.

    Both sides are lowercased. An empty ``text`` matches every record, even
    one whose fields are all empty.
    """
    return any(contains_ignore_case(field, text) for field in record.fields())


def filter_records(records: Iterable[SearchResult], text: str) -> Iterator[SearchResult]:
    for record in records:
        if matches(record, text):
            LOGGER.debug("Result found for %r: %s", text, record)
            yield record
        else:
            LOGGER.debug("No match for %r: %s", text, record)
