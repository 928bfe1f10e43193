"""Application configuration defaults."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

DEFAULT_SUFFIX = ".html"


@dataclass(slots=True)
class AppConfig:
    data_folder: Path = Path("data")
    suffix: str = DEFAULT_SUFFIX
    stream_capacity: int = 16
    log_file: Path | None = Path("app.log")

    def __post_init__(self) -> None:
        if self.stream_capacity < 1:
            raise ValueError("stream_capacity must be at least 1")

    def resolve_data_folder(self, base_dir: Path | None = None) -> Path:
        folder = Path(self.data_folder).expanduser()
        if folder.is_absolute() or base_dir is None:
            return folder
        return base_dir / folder
