"""FastAPI application exposing transcript searches."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterator, List

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import StreamingResponse
from pydantic import BaseModel

from vrchive.config import AppConfig
from vrchive.models import SearchRequest
from vrchive.search.orchestrator import ResourceSearcher, SearchStream

LOGGER = logging.getLogger(__name__)

app = FastAPI(title="VRChive Searcher", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


class SearchPayload(BaseModel):
    query: str
    data: Path | None = None


def _resolve_data_folder(data: Path | None) -> Path:
    if data is None:
        data = getattr(app.state, "data_folder", None)
    config = AppConfig(data_folder=data if data is not None else AppConfig().data_folder)
    return config.resolve_data_folder(Path.cwd())


def _build_request(payload: SearchPayload) -> SearchRequest:
    folder = _resolve_data_folder(payload.data)
    if not folder.is_dir():
        raise HTTPException(status_code=404, detail=f"Data folder not found: {folder}")
    return SearchRequest(text=payload.query, folder=folder)


def _iter_ndjson(stream: SearchStream) -> Iterator[str]:
    try:
        for result in stream:
            yield json.dumps(result.to_dict()) + "\n"
        yield json.dumps({"done": True}) + "\n"
    finally:
        stream.cancel()


@app.post("/search")
async def search_documents(payload: SearchPayload) -> Dict[str, List[Dict[str, Any]]]:
    request = _build_request(payload)
    searcher = ResourceSearcher()
    results = await asyncio.to_thread(searcher.search, request)
    return {"results": [result.to_dict() for result in results]}


@app.post("/search/stream")
async def stream_documents(payload: SearchPayload) -> StreamingResponse:
    request = _build_request(payload)
    stream = ResourceSearcher().start(request)
    LOGGER.info("Streaming search for %r in %s", request.text, request.folder)
    return StreamingResponse(_iter_ndjson(stream), media_type="application/x-ndjson")
