"""Shared fixtures building exported chat transcript markup."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterable, Tuple

import pytest


def make_embed(
    title: str | None,
    links: Iterable[Tuple[str, str]] = (),
    *,
    section_class: str = "chatlog__embed-fields",
    embed_class: str = "chatlog__embed-text",
) -> str:
    """Build one embed block. ``links`` are ``(href, inner_html)`` pairs."""
    title_html = ""
    if title is not None:
        title_html = (
            '<div class="chatlog__embed-title">'
            f'<div class="chatlog__markdown chatlog__markdown-preserve">{title}</div>'
            "</div>"
        )
    anchors = " ".join(f'<a href="{href}">{inner}</a>' for href, inner in links)
    section_html = ""
    if anchors:
        section_html = (
            f'<div class="{section_class}">'
            '<div class="chatlog__embed-field">'
            f'<div class="chatlog__markdown chatlog__markdown-preserve">{anchors}</div>'
            "</div>"
            "</div>"
        )
    return f'<div class="{embed_class}">{title_html}{section_html}</div>'


def make_document(*embeds: str) -> str:
    body = "".join(
        f'<div class="chatlog__message"><div class="chatlog__embed">{embed}</div></div>'
        for embed in embeds
    )
    return f"<!DOCTYPE html><html><head><title>Export</title></head><body>{body}</body></html>"


CITY_PACK = make_embed(
    "Cool World — City Pack",
    [("http://a", "<strong>Source</strong>"), ("http://b", "<em>Download</em>")],
)


@pytest.fixture
def write_document(tmp_path: Path) -> Callable[..., Path]:
    def _write(name: str, *embeds: str, folder: Path | None = None) -> Path:
        target = (folder or tmp_path) / name
        target.write_text(make_document(*embeds), encoding="utf-8")
        return target

    return _write
