"""
agent-memory: similarity index and named state stores for an autonomous agent.
"""

from .core.config import VERSION as __version__
from .core.exceptions import (
    AgentMemoryError,
    ConfigurationError,
    DocumentLoadError,
    DuplicateDocument,
    EmbeddingProviderError,
    StoreDisciplineViolation,
)
from .vector import Document, SimilarityIndex, load_directory
from .state import StoreKind, StoreRegistry

__all__ = [
    'AgentMemoryError',
    'ConfigurationError',
    'DocumentLoadError',
    'DuplicateDocument',
    'EmbeddingProviderError',
    'StoreDisciplineViolation',
    'Document',
    'SimilarityIndex',
    'load_directory',
    'StoreKind',
    'StoreRegistry',
]
