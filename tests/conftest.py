"""Pytest configuration and fixtures for agent memory tests."""

import asyncio
from typing import List, Optional

import pytest

from agent_memory.core.exceptions import EmbeddingProviderError
from agent_memory.vector.embeddings import DeterministicHashEmbedding, IEmbeddingProvider
from agent_memory.vector.index import SimpleInMemoryVectorStore
from agent_memory.vector.similarity_index import SimilarityIndex


class KeywordEmbedding(IEmbeddingProvider):
    """Counts vocabulary words, so texts sharing words end up close together."""

    def __init__(self, vocabulary: List[str], delay: float = 0.0, fail_on: Optional[set] = None):
        self.vocabulary = vocabulary
        self.delay = delay
        self.fail_on = fail_on or set()
        self.calls: List[str] = []

    async def embed(self, text: str) -> List[float]:
        self.calls.append(text)
        if self.delay:
            await asyncio.sleep(self.delay)
        if text in self.fail_on:
            raise EmbeddingProviderError(f"provider refused '{text}'")
        words = text.lower().split()
        return [float(words.count(word)) for word in self.vocabulary]

    def get_dimension(self) -> int:
        return len(self.vocabulary)


@pytest.fixture
def keyword_embedder():
    return KeywordEmbedding(["cat", "dog", "fish", "bird", "tree"])


@pytest.fixture
def hash_embedder():
    return DeterministicHashEmbedding(dimension=64)


@pytest.fixture
def index(hash_embedder):
    return SimilarityIndex(hash_embedder, SimpleInMemoryVectorStore())


@pytest.fixture
def keyword_index(keyword_embedder):
    return SimilarityIndex(keyword_embedder, SimpleInMemoryVectorStore())


@pytest.fixture
def corpus_dir(tmp_path):
    """A small directory tree of text documents."""
    (tmp_path / "animals").mkdir()
    (tmp_path / "animals" / "cats.txt").write_text("cat cat cat", encoding="utf-8")
    (tmp_path / "animals" / "dogs.txt").write_text("dog dog", encoding="utf-8")
    (tmp_path / "plants.txt").write_text("tree tree bird", encoding="utf-8")
    (tmp_path / "notes.md").write_text("cat dog", encoding="utf-8")
    return tmp_path
