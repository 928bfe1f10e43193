"""Core VRChive data models."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Dict


@dataclass(frozen=True, slots=True)
class SearchResult:
    """Resource record extracted from a single embed."""

    name: str = ""
    source_link: str = ""
    download_link: str = ""

    def fields(self) -> tuple[str, str, str]:
        return (self.name, self.source_link, self.download_link)

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class SearchRequest:
    """Search text and corpus folder, captured once per search."""

    text: str
    folder: Path
