"""Utility helpers for working with files."""

from __future__ import annotations

import os
from pathlib import Path
from typing import List

from vrchive.config import DEFAULT_SUFFIX


def iter_document_paths(folder: Path, suffix: str = DEFAULT_SUFFIX) -> List[Path]:
    """Return entries of ``folder`` whose name ends with ``suffix``.

    The match is case-sensitive and the directory listing order is kept as
    returned by the filesystem. Subdirectories are not descended into.
    Raises ``OSError`` when the folder cannot be listed.
    """
    folder = Path(folder)
    return [folder / name for name in os.listdir(folder) if name.endswith(suffix)]


def read_document(path: Path) -> bytes:
    """Read the full raw content of a document."""
    with Path(path).open("rb") as handle:
        return handle.read()
