"""
Embedding providers for the similarity index.
Providers are asynchronous: the provider call is the only suspension point
of an index add or retrieve.
"""

from abc import ABC, abstractmethod
import asyncio
import hashlib
from typing import List

from ..core.exceptions import EmbeddingProviderError
from ..util.logging import logger


class IEmbeddingProvider(ABC):
    """Abstract interface for embedding providers."""

    @abstractmethod
    async def embed(self, text: str) -> List[float]:
        """Generate embedding vector for given text."""
        pass

    @abstractmethod
    def get_dimension(self) -> int:
        """Get the dimension of the embedding vectors."""
        pass


class DeterministicHashEmbedding(IEmbeddingProvider):
    """Deterministic hash-based embedding provider for testing purposes.

    Uses a consistent hashing approach to generate reproducible embeddings
    from text, which is useful for testing and offline runs without
    requiring external model dependencies. Identical texts always map to
    identical vectors, so a document queried with its own text has
    distance 0.
    """

    def __init__(self, dimension: int = 384):
        if dimension < 1:
            raise ValueError("dimension must be >= 1")
        self.dimension = dimension

    async def embed(self, text: str) -> List[float]:
        """Generate deterministic embedding vector using hash function."""
        vector = []
        block = 0
        while len(vector) < self.dimension:
            hex_dig = hashlib.md5(f"{block}:{text}".encode()).hexdigest()

            # Map each 32-bit chunk to [-1, 1]
            for i in range(0, len(hex_dig), 8):
                value = int(hex_dig[i:i + 8], 16)
                vector.append((value / (2**32)) * 2 - 1)
            block += 1

        return vector[:self.dimension]

    def get_dimension(self) -> int:
        """Get the dimension of the embedding vectors."""
        return self.dimension


class SentenceTransformerEmbedding(IEmbeddingProvider):
    """Sentence transformers embedding provider using pre-trained models.

    The model is loaded on first use and encoding runs in a worker thread so
    the event loop stays responsive while the model computes.
    """

    def __init__(self, model_name: str = "all-MiniLM-L6-v2"):
        self.model_name = model_name
        self._model = None
        self._dimension = None

    @property
    def model(self):
        if self._model is None:
            from sentence_transformers import SentenceTransformer
            logger.info(f"Loading sentence-transformers model '{self.model_name}'")
            self._model = SentenceTransformer(self.model_name)
        return self._model

    def _encode(self, text: str) -> List[float]:
        embedding = self.model.encode(text, convert_to_tensor=False)
        return embedding.tolist()

    async def embed(self, text: str) -> List[float]:
        """Generate embedding vector using sentence transformers."""
        try:
            return await asyncio.to_thread(self._encode, text)
        except Exception as e:
            logger.error(f"sentence-transformers embedding failed: {e}")
            raise EmbeddingProviderError(f"sentence-transformers embedding error: {e}") from e

    def get_dimension(self) -> int:
        """Get the dimension of the embedding vectors."""
        if self._dimension is None:
            self._dimension = len(self._encode("test"))
        return self._dimension
