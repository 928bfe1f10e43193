"""Tests for embed location."""

from __future__ import annotations

from vrchive.extraction.locator import is_embed, iter_embeds
from vrchive.ingestion.html_loader import parse_document


def _tree(html: str):
    return parse_document(html.encode("utf-8"))


class TestIterEmbeds:
    """Test iter_embeds function."""

    def test_finds_nested_embeds_in_order(self) -> None:
        """Should find embeds at any depth in document order."""
        tree = _tree(
            "<body>"
            '<div><section><div class="chatlog__embed-text" id="first"></div></section></div>'
            '<div class="chatlog__embed-text" id="second"></div>'
            '<div><div><div><div class="chatlog__embed-text" id="third"></div></div></div></div>'
            "</body>"
        )

        ids = [embed["id"] for embed in iter_embeds(tree)]

        assert ids == ["first", "second", "third"]

    def test_exact_class_match_only(self) -> None:
        """Should not match when the class has extra tokens."""
        tree = _tree(
            '<div class="chatlog__embed-text extra" id="extra"></div>'
            '<div class="other chatlog__embed-text" id="other"></div>'
            '<div class="chatlog__embed-text" id="exact"></div>'
        )

        ids = [embed["id"] for embed in iter_embeds(tree)]

        assert ids == ["exact"]

    def test_only_div_containers(self) -> None:
        """Should ignore non-div elements with the marker."""
        tree = _tree('<span class="chatlog__embed-text"></span><p class="chatlog__embed-text"></p>')

        assert list(iter_embeds(tree)) == []

    def test_nested_embed_inside_embed(self) -> None:
        """Should yield the outer embed before an embed nested in it."""
        tree = _tree(
            '<div class="chatlog__embed-text" id="outer">'
            '<div class="chatlog__embed-text" id="inner"></div>'
            "</div>"
        )

        assert [embed["id"] for embed in iter_embeds(tree)] == ["outer", "inner"]

    def test_no_embeds(self) -> None:
        tree = _tree("<html><body><p>Hello</p></body></html>")

        assert list(iter_embeds(tree)) == []

    def test_is_lazy(self) -> None:
        """Should return a generator rather than a list."""
        tree = _tree('<div class="chatlog__embed-text"></div>')

        embeds = iter_embeds(tree)

        assert next(embeds).name == "div"

    def test_is_embed_on_text_node(self) -> None:
        tree = _tree("<p>text</p>")

        assert is_embed(tree.p.string) is False
