"""
Configuration for the agent memory substrate.
Settings come from environment variables, optionally seeded from a .env file.
"""

import os

from dotenv import load_dotenv

from .exceptions import ConfigurationError

load_dotenv()

# Document source configuration
RAG_SOURCE_PATH = os.getenv("RAG_SOURCE_PATH", "./data/docs")
RAG_SOURCE_PATTERN = os.getenv("RAG_SOURCE_PATTERN", "**/*.txt")
RAG_TOP_K = int(os.getenv("RAG_TOP_K", "5"))

# Vector system configuration
VECTOR_BACKEND = os.getenv("VECTOR_BACKEND", "memory")  # memory|faiss
EMBED_PROVIDER = os.getenv("EMBED_PROVIDER", "hash")  # hash|sentence_transformers
EMBED_MODEL_NAME = os.getenv("EMBED_MODEL_NAME", "all-MiniLM-L6-v2")
EMBED_DIM = int(os.getenv("EMBED_DIM", "384"))

# Logging and state notification configuration
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
STATE_VERBOSE = os.getenv("STATE_VERBOSE", "true").lower() == "true"

VERSION = "0.3.0"

VECTOR_BACKENDS = ("memory", "faiss")
EMBED_PROVIDERS = ("hash", "sentence_transformers")


def get_vector_backend() -> str:
    """Get the configured scan backend name."""
    return os.getenv("VECTOR_BACKEND", VECTOR_BACKEND).lower()


def get_embed_provider() -> str:
    """Get the configured embedding provider name."""
    return os.getenv("EMBED_PROVIDER", EMBED_PROVIDER).lower()


def get_top_k() -> int:
    """Get the default number of documents returned by retrieval."""
    return int(os.getenv("RAG_TOP_K", str(RAG_TOP_K)))


def state_verbose_enabled() -> bool:
    """Check if state changes are written to the log."""
    return os.getenv("STATE_VERBOSE", "true" if STATE_VERBOSE else "false").lower() == "true"


def get_vector_store():
    """Get configured vector store implementation."""
    backend = get_vector_backend()

    if backend == "memory":
        from ..vector.index import SimpleInMemoryVectorStore
        return SimpleInMemoryVectorStore()
    elif backend == "faiss":
        from ..vector.faiss_store import FaissVectorStore
        return FaissVectorStore()

    raise ConfigurationError(f"Invalid VECTOR_BACKEND: {backend}")


def get_embedding_provider():
    """Get configured embedding provider implementation."""
    provider = get_embed_provider()

    if provider == "hash":
        from ..vector.embeddings import DeterministicHashEmbedding
        return DeterministicHashEmbedding(int(os.getenv("EMBED_DIM", str(EMBED_DIM))))
    elif provider == "sentence_transformers":
        from ..vector.embeddings import SentenceTransformerEmbedding
        return SentenceTransformerEmbedding(os.getenv("EMBED_MODEL_NAME", EMBED_MODEL_NAME))

    raise ConfigurationError(f"Invalid EMBED_PROVIDER: {provider}")


def validate_config():
    """Validate configuration and return any issues."""
    issues = []

    if get_vector_backend() not in VECTOR_BACKENDS:
        issues.append(f"Invalid VECTOR_BACKEND: {get_vector_backend()}")

    if get_embed_provider() not in EMBED_PROVIDERS:
        issues.append(f"Invalid EMBED_PROVIDER: {get_embed_provider()}")

    try:
        if get_top_k() < 1:
            issues.append("RAG_TOP_K must be >= 1")
    except ValueError:
        issues.append(f"RAG_TOP_K must be an integer, got {os.getenv('RAG_TOP_K')!r}")

    try:
        if int(os.getenv("EMBED_DIM", str(EMBED_DIM))) < 1:
            issues.append("EMBED_DIM must be >= 1")
    except ValueError:
        issues.append(f"EMBED_DIM must be an integer, got {os.getenv('EMBED_DIM')!r}")

    return issues
