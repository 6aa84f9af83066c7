"""
Similarity index - exhaustive nearest-neighbour retrieval over named documents.
A document and its embedding are stored together or not at all.
"""

import asyncio
import threading
import time
from typing import Dict, Iterable, List, Optional, Set, Tuple

import numpy as np

from ..core.config import get_top_k, get_vector_store
from ..core.exceptions import AgentMemoryError, DuplicateDocument, EmbeddingProviderError
from ..util.logging import logger, truncate
from .embeddings import IEmbeddingProvider
from .index import IVectorStore
from .types import Document, LoadReport, VectorRecord


class SimilarityIndex:
    """
    Owns a document corpus and the matching embedding vectors.

    The embedding provider is borrowed: its lifetime is managed by the
    caller. Ranking is delegated to a scan backend (IVectorStore) so the
    brute-force scan can be swapped without changing this interface.

    Concurrency policy: a name is reserved before the provider is awaited,
    so of two concurrent adds for the same name exactly one succeeds and
    the other raises DuplicateDocument. Adds for distinct names proceed
    concurrently. The reservation is released if the provider fails or the
    call is cancelled, leaving the index exactly as it was.
    """

    def __init__(self, embedder: IEmbeddingProvider, vector_store: Optional[IVectorStore] = None):
        self.embedder = embedder
        self.vector_store = vector_store if vector_store is not None else get_vector_store()
        self._documents: Dict[str, Document] = {}
        self._pending: Set[str] = set()
        self._lock = threading.Lock()

    async def _embed(self, text: str) -> np.ndarray:
        """Call the provider and check that it returned a usable vector."""
        try:
            vector = await self.embedder.embed(text)
        except EmbeddingProviderError:
            raise
        except Exception as e:
            raise EmbeddingProviderError(f"embedding provider failed: {e}") from e

        try:
            array = np.asarray(vector, dtype=np.float32)
        except (TypeError, ValueError) as e:
            raise EmbeddingProviderError(f"malformed embedding: {e}") from e

        if array.ndim != 1 or array.size == 0 or not np.isfinite(array).all():
            raise EmbeddingProviderError(f"malformed embedding of shape {array.shape}")
        return array

    async def add(self, document: Document) -> None:
        """
        Embed and index a single document.

        Raises:
            DuplicateDocument: a document with the same name is indexed or
                being indexed. Content is not compared.
            EmbeddingProviderError: the provider failed; nothing is stored.
            ValueError: the embedding dimension differs from the corpus.
        """
        with self._lock:
            if document.name in self._documents or document.name in self._pending:
                logger.log_vector_operation("index", document.name, {"reason": "duplicate"}, status="rejected")
                raise DuplicateDocument(document.name)
            self._pending.add(document.name)

        try:
            start = time.perf_counter()
            vector = await self._embed(document.data)

            with self._lock:
                self.vector_store.add(VectorRecord(
                    id=document.name,
                    vector=vector,
                    metadata={"size": document.size},
                ))
                self._documents[document.name] = document
        finally:
            with self._lock:
                self._pending.discard(document.name)

        logger.log_vector_operation("index", document.name, {
            "bytes": document.size,
            "elapsed_ms": round((time.perf_counter() - start) * 1000, 2),
            "embedding_size": int(vector.shape[0]),
        })

    async def add_many(self, documents: Iterable[Document], concurrency: int = 1) -> LoadReport:
        """
        Index a batch of documents, isolating per-document failures.

        Provider failures go to ``report.failed`` and duplicate names to
        ``report.skipped``; both are logged and the rest of the batch still
        loads. A name ends up in at most one of ``loaded`` and ``failed``:
        if any copy of it was indexed it counts as loaded, and a name whose
        only indexing attempt failed is reported as failed even when another
        copy of it was rejected as a duplicate meanwhile. Up to
        ``concurrency`` provider calls are in flight at once.
        """
        documents = list(documents)
        report = LoadReport()
        semaphore = asyncio.Semaphore(max(1, concurrency))

        async def _add(document: Document) -> None:
            async with semaphore:
                await self.add(document)

        results = await asyncio.gather(*(_add(doc) for doc in documents), return_exceptions=True)

        fatal = None
        for document, result in zip(documents, results):
            if result is None:
                report.loaded.append(document.name)
                report.failed.pop(document.name, None)
            elif isinstance(result, DuplicateDocument):
                report.skipped[document.name] = str(result)
            elif isinstance(result, AgentMemoryError):
                report.failed[document.name] = str(result)
                logger.log_vector_operation("index", document.name, {"error": str(result)}, status="failed")
            elif fatal is None:
                fatal = result

        for name in [name for name in report.skipped if name in report.failed]:
            del report.skipped[name]

        if fatal is not None:
            raise fatal
        return report

    async def retrieve(self, query: str, top_k: Optional[int] = None) -> List[Tuple[Document, float]]:
        """
        Return the ``top_k`` documents closest to ``query``.

        Results are (document, cosine distance) pairs sorted by
        non-decreasing distance. An empty index gives an empty list without
        calling the provider. Equal distances keep insertion order for the
        in-memory backend under a single writer; under concurrent mutation
        the tie order is unspecified.
        """
        top_k = get_top_k() if top_k is None else top_k
        logger.log_vector_operation("retrieve", "query", {"query": truncate(query), "top_k": top_k})

        if top_k <= 0 or not len(self):
            return []

        query_vector = await self._embed(query)

        with self._lock:
            hits = self.vector_store.search(query_vector, top_k)
            return [(self._documents[hit.id], hit.score) for hit in hits]

    def reset(self) -> None:
        """Drop every document and embedding."""
        with self._lock:
            self.vector_store.clear()
            self._documents.clear()
        logger.log_vector_operation("reset", "*")

    def get(self, name: str) -> Optional[Document]:
        with self._lock:
            return self._documents.get(name)

    def names(self) -> List[str]:
        """Indexed document names in insertion order."""
        with self._lock:
            return list(self._documents.keys())

    def __contains__(self, name: str) -> bool:
        with self._lock:
            return name in self._documents

    def __len__(self) -> int:
        with self._lock:
            return len(self._documents)
