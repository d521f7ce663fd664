"""Retrieval orchestrator: question to grounded answer.

Usage::

    answerer = Answerer(embedder, store, generator, k=3)
    answer = answerer.answer("List all his projects?")
    print(answer.text, answer.primary_url)
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

from pagemind.embeddings import TextEmbedder
from pagemind.errors import InvalidArgument, PageMindError, RetrievalFailed
from pagemind.generation.prompts import build_answer_prompt
from pagemind.retrieval.base import VectorStoreBase
from pagemind.retrieval.models import Answer, Citation, RetrievalResult

logger = logging.getLogger(__name__)


class TextGenerator(Protocol):
    def generate(self, messages: Any) -> str: ...


class Answerer:
    """Answers questions from the indexed pages.

    Parameters
    ----------
    embedder:
        Embedding service adapter used for the question.
    store:
        Vector store holding the indexed chunks.
    generator:
        Generative service adapter.
    k:
        Number of nearest chunks retrieved per question.
    """

    def __init__(
        self,
        embedder: TextEmbedder,
        store: VectorStoreBase,
        generator: TextGenerator,
        *,
        k: int = 3,
    ) -> None:
        if k <= 0:
            raise InvalidArgument("k must be greater than zero", {"k": k})
        self._embedder = embedder
        self._store = store
        self._generator = generator
        self.k = k

    # -- public API -----------------------------------------------------------

    def retrieve(self, question: str) -> list[RetrievalResult]:
        """Return the grounding passages for *question* in store order.

        Records with a blank body are dropped.

        Raises
        ------
        InvalidArgument
            When *question* is blank.
        RetrievalFailed
            When embedding the question or querying the store fails.
        """
        if not question.strip():
            raise InvalidArgument("Question must not be blank")

        try:
            embedding = self._embedder.embed(question)
            hits = self._store.query(embedding, n_results=self.k)
        except PageMindError as exc:
            raise RetrievalFailed(f"Could not retrieve context: {exc.message}", exc.details) from exc
        except Exception as exc:
            raise RetrievalFailed(f"Could not retrieve context: {exc}") from exc

        results = self._to_results(hits)
        logger.info("Retrieved %d/%d usable chunks for %r", len(results), len(hits), question)
        return results

    def answer(self, question: str) -> Answer:
        """Retrieve context for *question* and generate a grounded answer.

        The generator is called even when nothing was retrieved.  Generator
        errors surface as :class:`~pagemind.errors.GenerationFailed`.
        """
        results = self.retrieve(question)
        urls = [r.citation.url for r in results if r.citation.url.strip()]
        bodies = [r.content for r in results]

        messages = build_answer_prompt(question, urls, bodies)
        logger.debug("Prompt user message: %d chars", len(messages[-1].content))
        text = self._generator.generate(messages)

        return Answer(text=text, primary_url=urls[0] if urls else None, sources=results)

    # -- internals ------------------------------------------------------------

    @staticmethod
    def _to_results(hits: list[dict[str, Any]]) -> list[RetrievalResult]:
        results: list[RetrievalResult] = []
        for hit in hits:
            meta = hit.get("metadata") or {}
            body = meta.get("body") or ""
            if not body.strip():
                continue
            chunk_index = meta.get("chunkIndex")
            citation = Citation(
                document_id=hit.get("id"),
                url=meta.get("url") or "",
                chunk_index=int(chunk_index) if chunk_index is not None else None,
                distance=hit.get("distance"),
                metadata=meta,
            )
            results.append(RetrievalResult(content=body, citation=citation))
        return results
