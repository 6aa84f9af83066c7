"""
Common exceptions used throughout the memory substrate.
Recoverable errors are caught per document during bulk loads; discipline
violations are programming errors and are never caught by the library.
"""


class AgentMemoryError(Exception):
    """Base exception for all agent memory errors."""
    pass


class ConfigurationError(AgentMemoryError):
    """Error related to memory configuration (unknown backend, bad values)."""
    pass


class DuplicateDocument(AgentMemoryError):
    """A document with the same name is already indexed."""

    def __init__(self, name: str):
        super().__init__(f"document with name '{name}' already indexed")
        self.name = name


class EmbeddingProviderError(AgentMemoryError):
    """Error generating embedding vectors (network, timeout, malformed response)."""
    pass


class DocumentLoadError(AgentMemoryError):
    """A document could not be read from its source."""

    def __init__(self, name: str, reason: str):
        super().__init__(f"cannot load document '{name}': {reason}")
        self.name = name
        self.reason = reason


class StoreDisciplineViolation(AgentMemoryError, TypeError):
    """An operation was requested on a store of the wrong kind."""
    pass
