"""
FAISS-backed scan backend.
Uses a flat inner-product index, which is still an exact exhaustive scan.
"""

from typing import Dict, List, Optional
import numpy as np

from .index import IVectorStore
from .metrics import normalize
from .types import VectorRecord, QueryResult


class FaissVectorStore(IVectorStore):
    """FAISS-backed implementation of IVectorStore."""

    def __init__(self, dimension: Optional[int] = None):
        """
        Initialize FAISS vector store.

        Args:
            dimension: Dimension of the vectors. When omitted the index is
                created on the first add, sized to that vector.
        """
        import faiss
        self.faiss = faiss
        self._configured_dimension = dimension
        self.dimension = dimension
        self.index = faiss.IndexFlatIP(dimension) if dimension else None

        # Keep track of record IDs and their corresponding vector indices
        self.id_to_vector_index: Dict[str, int] = {}
        self.vector_id_map: Dict[int, str] = {}  # Vector index -> record ID
        self.id_to_metadata: Dict[str, Dict[str, object]] = {}

    def add(self, record: VectorRecord) -> None:
        """Add a single vector record to the FAISS store."""
        if record.id in self.id_to_vector_index:
            raise ValueError(f"Record '{record.id}' already stored")
        if record.vector is None or len(record.vector) == 0:
            raise ValueError(f"Record '{record.id}' has no vector")

        if self.index is None:
            self.dimension = len(record.vector)
            self.index = self.faiss.IndexFlatIP(self.dimension)

        # Check dimension match and normalize vector for cosine similarity
        if len(record.vector) != self.dimension:
            raise ValueError(f"Vector dimension {len(record.vector)} does not match expected dimension {self.dimension}")

        # Zero vectors stay zero: inner product 0, distance 1
        vector_array = normalize(record.vector).reshape(1, -1)
        self.index.add(vector_array)

        position = self.index.ntotal - 1
        self.id_to_vector_index[record.id] = position
        self.vector_id_map[position] = record.id
        self.id_to_metadata[record.id] = record.metadata

    def search(self, query_vector: np.ndarray, top_k: int = 5) -> List[QueryResult]:
        """Search for similar vectors and return ranked results."""
        if self.index is None or not self.index.ntotal or top_k <= 0:
            return []

        if len(query_vector) != self.dimension:
            raise ValueError(f"Vector dimension {len(query_vector)} does not match expected dimension {self.dimension}")

        query_array = normalize(query_vector).reshape(1, -1)
        k = min(top_k, self.index.ntotal)
        similarities, indices = self.index.search(query_array, k)

        results = []
        for similarity, idx in zip(similarities[0], indices[0]):
            if idx < 0:
                continue
            record_id = self.vector_id_map[int(idx)]
            results.append(QueryResult(
                id=record_id,
                score=float(1.0 - similarity),
                metadata=self.id_to_metadata.get(record_id, {}),
            ))
        return results

    def clear(self) -> None:
        """Clear all records; an unsized store accepts a new dimension afterwards."""
        self.dimension = self._configured_dimension
        self.index = self.faiss.IndexFlatIP(self.dimension) if self.dimension else None
        self.id_to_vector_index.clear()
        self.vector_id_map.clear()
        self.id_to_metadata.clear()

    def __len__(self) -> int:
        return 0 if self.index is None else self.index.ntotal
