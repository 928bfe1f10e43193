"""Run searches over a document folder and stream the matches.

A search runs on its own scanning thread which hands results to the consumer
through a bounded queue, so a slow consumer throttles the scan. The stream is
always closed once the scan ends, whatever happened to the documents.
"""

from __future__ import annotations

import logging
import queue
import threading
from pathlib import Path
from typing import Callable, Iterator, List, Optional

from bs4 import BeautifulSoup

from vrchive.config import AppConfig
from vrchive.extraction.extractor import extract_record
from vrchive.extraction.locator import iter_embeds
from vrchive.ingestion.html_loader import load_documents
from vrchive.models import SearchRequest, SearchResult
from vrchive.search.matcher import filter_records

LOGGER = logging.getLogger(__name__)

_CLOSED = object()
_POLL_INTERVAL = 0.1

ResultCallback = Callable[[SearchRequest, SearchResult], None]
CompleteCallback = Callable[[SearchRequest], None]


class SearchStream:
    """Bounded, closable stream of results for one search request.

    Iterating yields results until the producer closes the stream. After
    :meth:`cancel` the producer stops at its next step and any pending results
    are dropped.
    """

    def __init__(self, request: SearchRequest, *, capacity: int = 16) -> None:
        self.request = request
        self._queue: queue.Queue = queue.Queue(maxsize=capacity)
        self._cancel = threading.Event()
        self._finished = threading.Event()

    @property
    def cancel_event(self) -> threading.Event:
        return self._cancel

    @property
    def cancelled(self) -> bool:
        return self._cancel.is_set()

    @property
    def finished(self) -> bool:
        """True once the producer has closed the stream."""
        return self._finished.is_set()

    def put(self, result: SearchResult) -> bool:
        """Block until ``result`` is queued. Returns False if cancelled meanwhile."""
        while not self._cancel.is_set():
            try:
                self._queue.put(result, timeout=_POLL_INTERVAL)
                return True
            except queue.Full:
                continue
        return False

    def close(self) -> None:
        while True:
            try:
                self._queue.put(_CLOSED, timeout=_POLL_INTERVAL)
                break
            except queue.Full:
                if self._cancel.is_set():
                    self._drain()
        self._finished.set()

    def cancel(self) -> None:
        self._cancel.set()
        self._drain()

    def wait(self, timeout: float | None = None) -> bool:
        return self._finished.wait(timeout)

    def _drain(self) -> None:
        closed = False
        while True:
            try:
                item = self._queue.get_nowait()
            except queue.Empty:
                break
            closed = closed or item is _CLOSED
        if closed:
            self._queue.put_nowait(_CLOSED)

    def __iter__(self) -> Iterator[SearchResult]:
        while True:
            item = self._queue.get()
            if item is _CLOSED:
                return
            if self._cancel.is_set():
                continue
            yield item


class ResourceSearcher:
    """High-level API to search a folder of exported transcripts."""

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config = config or AppConfig()

    def iter_matches(
        self, request: SearchRequest, cancel: Optional[threading.Event] = None
    ) -> Iterator[SearchResult]:
        """Yield matching records document by document, in document order."""
        for path, tree in load_documents(request.folder, self.config.suffix):
            if cancel is not None and cancel.is_set():
                LOGGER.info("Search for %r cancelled", request.text)
                return
            try:
                for record in self._match_document(tree, request.text):
                    yield record
                    if cancel is not None and cancel.is_set():
                        LOGGER.info("Search for %r cancelled", request.text)
                        return
            except Exception as exc:
                LOGGER.error("Error processing %s: %s", path, exc)

    def _match_document(self, tree: BeautifulSoup, text: str) -> Iterator[SearchResult]:
        records = (extract_record(embed) for embed in iter_embeds(tree))
        return filter_records(records, text)

    def search(self, request: SearchRequest) -> List[SearchResult]:
        return list(self.iter_matches(request))

    def start(self, request: SearchRequest) -> SearchStream:
        """Start scanning on a background thread and return its stream."""
        stream = SearchStream(request, capacity=self.config.stream_capacity)
        thread = threading.Thread(
            target=self._produce,
            args=(stream,),
            name=f"vrchive-search-{request.text!r}",
            daemon=True,
        )
        thread.start()
        return stream

    def _produce(self, stream: SearchStream) -> None:
        try:
            for result in self.iter_matches(stream.request, stream.cancel_event):
                if not stream.put(result):
                    break
        except Exception:
            LOGGER.exception("Search for %r failed", stream.request.text)
        finally:
            stream.close()


class SearchSession:
    """Relays results of the current search to presentation callbacks.

    Submitting a new search cancels the previous one; results and completion
    of a superseded search are dropped from then on. Callbacks run on the relay
    thread, so they should only enqueue work for the presentation thread.
    """

    def __init__(
        self,
        searcher: ResourceSearcher,
        on_result: ResultCallback,
        on_complete: CompleteCallback,
    ) -> None:
        self.searcher = searcher
        self.on_result = on_result
        self.on_complete = on_complete
        self._lock = threading.Lock()
        self._stream: SearchStream | None = None
        self._relay: threading.Thread | None = None

    def submit(self, text: str, folder: Path) -> SearchRequest:
        request = SearchRequest(text=text, folder=Path(folder))
        with self._lock:
            if self._stream is not None:
                if not self._stream.finished:
                    LOGGER.info("Cancelling search for %r", self._stream.request.text)
                self._stream.cancel()
            stream = self.searcher.start(request)
            relay = threading.Thread(
                target=self._relay_results, args=(stream,), name="vrchive-relay", daemon=True
            )
            self._stream = stream
            self._relay = relay
        relay.start()
        return request

    def cancel(self) -> None:
        with self._lock:
            if self._stream is not None:
                self._stream.cancel()

    def wait(self, timeout: float | None = None) -> None:
        relay = self._relay
        if relay is not None:
            relay.join(timeout)

    def _is_current(self, stream: SearchStream) -> bool:
        with self._lock:
            return stream is self._stream and not stream.cancelled

    def _relay_results(self, stream: SearchStream) -> None:
        for result in stream:
            if self._is_current(stream):
                self.on_result(stream.request, result)
        if self._is_current(stream):
            self.on_complete(stream.request)
