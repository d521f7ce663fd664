"""FastAPI application exposing ingestion and question answering."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from pydantic import BaseModel, Field

from pagemind.config import settings
from pagemind.errors import GenerationFailed, InvalidArgument, RetrievalFailed
from pagemind.ingestion.models import IngestionReport
from pagemind.services import Services, build_services

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create collaborators at startup, close them at shutdown."""
    logging.basicConfig(level=settings.log_level)
    services = build_services(settings)
    app.state.services = services
    try:
        yield
    finally:
        services.close()


app = FastAPI(
    title="PageMind API",
    version="0.1.0",
    description="Ingest web pages and answer questions grounded in them.",
    lifespan=lifespan,
)


def get_services(request: Request) -> Services:
    return request.app.state.services


# ── Request / Response schemas ────────────────────────────────────────
class IngestRequest(BaseModel):
    """URLs to (re-)ingest."""

    urls: list[str] = Field(min_length=1)


class QueryRequest(BaseModel):
    """Incoming question from the user."""

    question: str


class QueryResponse(BaseModel):
    """Answer plus the page it is primarily grounded in."""

    answer: str
    url: str | None = None
    sources: list[str] = []
    citations: list[str] = []


class SourcesResponse(BaseModel):
    """Source URLs currently present in the vector store."""

    sources: list[str]


class DeleteResponse(BaseModel):
    url: str
    deleted: int


# ── Routes ────────────────────────────────────────────────────────────
@app.get("/health")
async def health() -> dict[str, str]:
    """Liveness probe."""
    return {"status": "ok"}


@app.post("/ingest", response_model=list[IngestionReport])
def ingest(request: IngestRequest, services: Services = Depends(get_services)) -> list[IngestionReport]:
    """Ingest every URL; per-URL failures are reported, not raised."""
    return services.pipeline.ingest_many(request.urls, max_workers=services.ingest_max_workers)


@app.get("/sources", response_model=SourcesResponse)
def list_sources(
    url: str | None = Query(None, min_length=1),
    services: Services = Depends(get_services),
) -> SourcesResponse:
    """List ingested source URLs, or check a single one with ``?url=``."""
    if url is not None:
        return SourcesResponse(sources=[url] if services.indexer.is_ingested(url) else [])
    return SourcesResponse(sources=services.indexer.list_sources())


@app.delete("/sources", response_model=DeleteResponse)
def delete_source(
    url: str = Query(..., min_length=1),
    services: Services = Depends(get_services),
) -> DeleteResponse:
    """Remove every indexed chunk of *url*."""
    return DeleteResponse(url=url, deleted=services.pipeline.delete_source(url))


@app.post("/query", response_model=QueryResponse)
def query(request: QueryRequest, services: Services = Depends(get_services)) -> QueryResponse:
    """Answer a question from the indexed pages."""
    try:
        answer = services.answerer.answer(request.question)
    except InvalidArgument as exc:
        raise HTTPException(status_code=422, detail=exc.message) from exc
    except (RetrievalFailed, GenerationFailed) as exc:
        logger.error("Query failed: %s", exc)
        raise HTTPException(status_code=502, detail=exc.message) from exc

    return QueryResponse(
        answer=answer.text,
        url=answer.primary_url,
        sources=[r.citation.url for r in answer.sources],
        citations=[r.citation.short_ref() for r in answer.sources],
    )
