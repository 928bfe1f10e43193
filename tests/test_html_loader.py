"""Tests for HTML loading and parsing."""

from __future__ import annotations

import logging
from pathlib import Path
from unittest.mock import patch

import pytest

from conftest import CITY_PACK
from vrchive.ingestion.html_loader import load_documents, parse_document
from vrchive.utils.files import read_document


class TestParseDocument:
    """Test parse_document function."""

    def test_class_kept_as_string(self) -> None:
        """Should keep the class attribute verbatim."""
        tree = parse_document(b'<div class="a  b">x</div>')

        assert tree.div["class"] == "a  b"

    def test_parses_text_nodes(self) -> None:
        tree = parse_document("<p>café</p>".encode("utf-8"))

        assert tree.p.string == "café"


class TestLoadDocuments:
    """Test load_documents function."""

    def test_yields_parsed_documents(self, write_document, tmp_path: Path) -> None:
        """Should yield a parsed tree for each html file."""
        write_document("one.html", CITY_PACK)
        (tmp_path / "skip.txt").write_text("not html")

        documents = list(load_documents(tmp_path))

        assert [path.name for path, _ in documents] == ["one.html"]
        assert documents[0][1].find("div") is not None

    def test_missing_folder_yields_nothing(self, tmp_path: Path, caplog) -> None:
        """Should log and yield nothing when the folder is unreadable."""
        with caplog.at_level(logging.ERROR):
            documents = list(load_documents(tmp_path / "missing"))

        assert documents == []
        assert "Error reading directory" in caplog.text

    def test_unreadable_file_skipped(self, write_document, tmp_path: Path, caplog) -> None:
        """Should skip a file that cannot be read and continue."""
        write_document("bad.html", CITY_PACK)
        write_document("good.html", CITY_PACK)
        def flaky_read(path: Path) -> bytes:
            if path.name == "bad.html":
                raise PermissionError("denied")
            return read_document(path)

        with patch("vrchive.ingestion.html_loader.read_document", side_effect=flaky_read):
            with caplog.at_level(logging.ERROR):
                names = [path.name for path, _ in load_documents(tmp_path)]

        assert names == ["good.html"]
        assert "Error reading file" in caplog.text

    def test_directory_with_suffix_skipped(self, write_document, tmp_path: Path) -> None:
        """Should skip an entry that only looks like a document."""
        (tmp_path / "folder.html").mkdir()
        write_document("good.html", CITY_PACK)

        names = [path.name for path, _ in load_documents(tmp_path)]

        assert names == ["good.html"]

    def test_parse_failure_skipped(self, write_document, tmp_path: Path, caplog) -> None:
        """Should skip a document the parser rejects."""
        write_document("good.html", CITY_PACK)

        with patch(
            "vrchive.ingestion.html_loader.parse_document", side_effect=ValueError("broken")
        ):
            with caplog.at_level(logging.ERROR):
                documents = list(load_documents(tmp_path))

        assert documents == []
        assert "Error parsing HTML" in caplog.text
