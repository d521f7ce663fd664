"""
Retrieval — vector-store access and grounded question answering.

The vector store is wrapped behind a small interface so that the
orchestrators never need to know which DB is backing retrieval.

Public surface
--------------
- :class:`Answerer` — embeds a question, retrieves top-k chunks, generates an answer.
- :class:`VectorStoreBase` — abstract backend.
- :class:`ChromaVectorStore` — default Chroma backend.
- :class:`Citation`, :class:`RetrievalResult`, :class:`Answer` — data models.
"""

from pagemind.retrieval.answerer import Answerer
from pagemind.retrieval.base import StoredRecords, VectorStoreBase
from pagemind.retrieval.models import Answer, Citation, RetrievalResult

__all__ = [
    "Answer",
    "Answerer",
    "ChromaVectorStore",
    "Citation",
    "RetrievalResult",
    "StoredRecords",
    "VectorStoreBase",
]


def __getattr__(name: str):  # noqa: ANN001
    """Lazy-import ChromaVectorStore to avoid pulling in chromadb at import time."""
    if name == "ChromaVectorStore":
        from pagemind.retrieval.chroma_store import ChromaVectorStore

        return ChromaVectorStore
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
