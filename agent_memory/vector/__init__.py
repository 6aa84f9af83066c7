"""
Vector memory - document similarity index with swappable exhaustive scan backends.
"""

from .index import IVectorStore, SimpleInMemoryVectorStore
from .faiss_store import FaissVectorStore
from .types import Document, VectorRecord, QueryResult, LoadReport
from .embeddings import IEmbeddingProvider, DeterministicHashEmbedding, SentenceTransformerEmbedding
from .metrics import cosine
from .similarity_index import SimilarityIndex
from .loader import iter_text_documents, load_directory

__all__ = [
    'IVectorStore',
    'SimpleInMemoryVectorStore',
    'FaissVectorStore',
    'Document',
    'VectorRecord',
    'QueryResult',
    'LoadReport',
    'IEmbeddingProvider',
    'DeterministicHashEmbedding',
    'SentenceTransformerEmbedding',
    'cosine',
    'SimilarityIndex',
    'iter_text_documents',
    'load_directory',
]
