"""
Scan backends for the similarity index.
Every backend is exhaustive: each stored vector is compared with the query.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional
import numpy as np

from .metrics import cosine_many, normalize
from .types import VectorRecord, QueryResult


class IVectorStore(ABC):
    """Abstract interface for vector scan operations.

    Implementations return results sorted by non-decreasing cosine distance
    and reject a second record with an id they already hold. Identity and
    atomicity are handled by the caller (see SimilarityIndex).
    """

    @abstractmethod
    def add(self, record: VectorRecord) -> None:
        """Add a single vector record to the store."""
        pass

    @abstractmethod
    def search(self, query_vector: np.ndarray, top_k: int = 5) -> List[QueryResult]:
        """Search for similar vectors and return ranked results."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Clear all records from the store."""
        pass

    @abstractmethod
    def __len__(self) -> int:
        pass


class SimpleInMemoryVectorStore(IVectorStore):
    """Simple in-memory implementation of IVectorStore using cosine distance.

    Distances are computed for the whole corpus in one matrix product and
    ranked with a stable sort, so ties come back in insertion order.
    """

    def __init__(self):
        self._vectors: Dict[str, VectorRecord] = {}  # record_id -> VectorRecord
        self._index: Dict[str, np.ndarray] = {}      # record_id -> normalized vector
        self._dimension: Optional[int] = None
        # Stacked view of _index, rebuilt after every add
        self._ids: List[str] = []
        self._matrix: Optional[np.ndarray] = None

    @property
    def dimension(self) -> Optional[int]:
        return self._dimension

    def add(self, record: VectorRecord) -> None:
        """Add a single vector record to the store."""
        if record.id in self._vectors:
            raise ValueError(f"Record '{record.id}' already stored")
        if record.vector is None:
            raise ValueError(f"Record '{record.id}' has no vector")

        vector = normalize(record.vector)
        if vector.ndim != 1 or vector.shape[0] == 0:
            raise ValueError(f"Record '{record.id}' vector must be one-dimensional and non-empty")

        if self._dimension is None:
            self._dimension = vector.shape[0]
        elif vector.shape[0] != self._dimension:
            raise ValueError(
                f"Vector dimension {vector.shape[0]} does not match expected dimension {self._dimension}"
            )

        self._vectors[record.id] = record
        self._index[record.id] = vector
        self._matrix = None

    def search(self, query_vector: np.ndarray, top_k: int = 5) -> List[QueryResult]:
        """Search for similar vectors and return ranked results."""
        if not self._index or top_k <= 0:
            return []

        if self._matrix is None:
            self._ids = list(self._index.keys())
            self._matrix = np.vstack(list(self._index.values()))

        distances = cosine_many(normalize(query_vector), self._matrix)
        order = np.argsort(distances, kind="stable")[:top_k]

        return [
            QueryResult(
                id=self._ids[i],
                score=float(distances[i]),
                metadata=self._vectors[self._ids[i]].metadata,
            )
            for i in order
        ]

    def clear(self) -> None:
        """Clear all records from the store."""
        self._vectors.clear()
        self._index.clear()
        self._ids = []
        self._matrix = None
        self._dimension = None

    def __len__(self) -> int:
        return len(self._index)
