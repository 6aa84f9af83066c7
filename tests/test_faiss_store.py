"""
Test cases for FaissVectorStore implementation.
"""

import pytest
import numpy as np

faiss = pytest.importorskip("faiss")

from agent_memory.vector import FaissVectorStore, SimpleInMemoryVectorStore, VectorRecord


def test_faiss_store_lazy_dimension():
    """The index is created on first add, sized to that vector."""
    store = FaissVectorStore()
    assert store.index is None
    assert len(store) == 0

    store.add(VectorRecord(id="a", vector=np.array([0.5] * 8, dtype=np.float32)))

    assert store.dimension == 8
    assert len(store) == 1
    assert "a" in store.id_to_vector_index


def test_faiss_store_dimension_mismatch():
    """Vectors with the wrong dimension are refused."""
    store = FaissVectorStore(dimension=4)

    with pytest.raises(ValueError, match="dimension"):
        store.add(VectorRecord(id="bad", vector=np.ones(3, dtype=np.float32)))
    assert len(store) == 0


def test_faiss_store_duplicate_rejected():
    store = FaissVectorStore(dimension=2)
    store.add(VectorRecord(id="dup", vector=np.array([1.0, 0.0])))

    with pytest.raises(ValueError, match="already stored"):
        store.add(VectorRecord(id="dup", vector=np.array([0.0, 1.0])))
    assert len(store) == 1


def test_faiss_store_search_distances():
    """Results are sorted by cosine distance, matching the in-memory store."""
    faiss_store = FaissVectorStore()
    memory_store = SimpleInMemoryVectorStore()

    rng = np.random.default_rng(7)
    for i in range(20):
        record = VectorRecord(id=f"doc_{i}", vector=rng.normal(size=16).astype(np.float32))
        faiss_store.add(record)
        memory_store.add(record)

    query = rng.normal(size=16).astype(np.float32)
    faiss_results = faiss_store.search(query, top_k=5)
    memory_results = memory_store.search(query, top_k=5)

    assert [r.id for r in faiss_results] == [r.id for r in memory_results]
    for f, m in zip(faiss_results, memory_results):
        assert f.score == pytest.approx(m.score, abs=1e-5)

    scores = [r.score for r in faiss_results]
    assert scores == sorted(scores)


def test_faiss_store_top_k_exceeds_corpus():
    store = FaissVectorStore()
    store.add(VectorRecord(id="a", vector=np.array([1.0, 0.0])))
    store.add(VectorRecord(id="b", vector=np.array([0.0, 1.0])))

    results = store.search(np.array([1.0, 0.0]), top_k=10)
    assert [r.id for r in results] == ["a", "b"]


def test_faiss_store_clear_and_empty_search():
    store = FaissVectorStore()
    assert store.search(np.array([1.0, 0.0]), top_k=3) == []

    store.add(VectorRecord(id="a", vector=np.array([1.0, 0.0])))
    store.clear()

    assert len(store) == 0
    assert store.search(np.array([1.0, 0.0]), top_k=3) == []


def test_faiss_store_clear_accepts_new_dimension():
    """A store sized by its first vector can be resized after clear()."""
    store = FaissVectorStore()
    store.add(VectorRecord(id="a", vector=np.array([1.0, 0.0])))

    store.clear()
    store.add(VectorRecord(id="again", vector=np.array([1.0, 0.0, 0.0])))

    assert store.dimension == 3
    assert len(store) == 1
    assert store.search(np.array([1.0, 0.0, 0.0]), top_k=1)[0].id == "again"


def test_faiss_store_clear_keeps_configured_dimension():
    """A dimension given to the constructor still applies after clear()."""
    store = FaissVectorStore(dimension=2)
    store.add(VectorRecord(id="a", vector=np.array([1.0, 0.0])))

    store.clear()

    assert store.dimension == 2
    with pytest.raises(ValueError, match="dimension"):
        store.add(VectorRecord(id="b", vector=np.array([1.0, 0.0, 0.0])))
