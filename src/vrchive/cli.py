"""Command line interface for VRChive Searcher."""

from __future__ import annotations

import logging
import queue
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from vrchive.config import AppConfig
from vrchive.models import SearchResult
from vrchive.search.orchestrator import ResourceSearcher, SearchSession
from vrchive.web.app import app as web_app


console = Console()
app = typer.Typer(help="VRChive Searcher - find resource links in exported chat logs")

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _setup_logging(verbose: bool, log_file: Optional[Path] = None) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    if log_file is None:
        logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")
        return
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        filename=str(log_file),
        filemode="w",
        encoding="utf-8",
    )


def _build_config(data: Optional[Path], log_file: Optional[Path]) -> AppConfig:
    defaults = AppConfig()
    return AppConfig(
        data_folder=data if data is not None else defaults.data_folder,
        log_file=log_file if log_file is not None else defaults.log_file,
    )


def _format_result(result: SearchResult) -> str:
    return "\t".join(result.fields())


def _stream_search(searcher: ResourceSearcher, text: str, folder: Path) -> int:
    """Run one search and print results as they arrive. Returns the match count."""
    events: queue.Queue = queue.Queue()
    session = SearchSession(
        searcher,
        on_result=lambda request, result: events.put(result),
        on_complete=lambda request: events.put(None),
    )

    if not folder.is_dir():
        console.print(f"[yellow]Data folder not found: {folder}[/yellow]")

    console.print(f"Searching: '{text}' ...", markup=False, highlight=False)
    session.submit(text, folder)

    count = 0
    while True:
        result = events.get()
        if result is None:
            break
        console.print(_format_result(result), markup=False, highlight=False, soft_wrap=True)
        count += 1

    console.print("Done!")
    return count


@app.command()
def search(
    text: str = typer.Argument(..., help="Text to look for in titles and links"),
    data: Path = typer.Option(None, "--data", help="Folder containing the exported HTML files"),
    log_file: Path = typer.Option(None, "--log-file", help="Log file, truncated on start"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Search the exported chat logs once."""
    config = _build_config(data, log_file)
    _setup_logging(verbose, config.log_file)

    searcher = ResourceSearcher(config)
    count = _stream_search(searcher, text, config.resolve_data_folder(Path.cwd()))
    if not count:
        console.print("[yellow]No matches found.[/yellow]")


@app.command()
def interactive(
    data: Path = typer.Option(None, "--data", help="Folder containing the exported HTML files"),
    log_file: Path = typer.Option(None, "--log-file", help="Log file, truncated on start"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Prompt for searches until an empty line is entered."""
    config = _build_config(data, log_file)
    _setup_logging(verbose, config.log_file)

    searcher = ResourceSearcher(config)
    folder = config.resolve_data_folder(Path.cwd())
    logging.getLogger(__name__).info("Setup application and running it")

    console.rule("VRChive Searcher")
    while True:
        try:
            text = console.input("Enter search: ")
        except EOFError:
            break
        if not text:
            break
        _stream_search(searcher, text, folder)


@app.command()
def web(
    host: str = typer.Option("127.0.0.1", help="Host interface"),
    port: int = typer.Option(8000, help="Server port"),
    data: Path = typer.Option(None, "--data", help="Folder containing the exported HTML files"),
) -> None:
    """Start the web interface."""
    try:
        import uvicorn
    except ImportError as exc:  # pragma: no cover - defensive
        raise typer.BadParameter(
            "uvicorn is not installed. Install the web extras with \"python -m pip install '.[web]'\""
        ) from exc

    config = _build_config(data, None)
    folder = config.resolve_data_folder(Path.cwd())
    if not folder.is_dir():
        console.print("[yellow]Warning: data folder not found, searches will be empty.[/yellow]")
    web_app.state.data_folder = folder

    console.print(f"Starting web interface on http://{host}:{port} (data: {folder})")
    uvicorn.run(
        web_app,
        host=host,
        port=port,
        reload=False,
        log_level="info",
    )
