"""
Data types for the similarity index.
Documents are immutable once stored; vectors live in the scan backend.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional
import numpy as np


@dataclass(frozen=True)
class Document:
    """A named text blob indexed as a single unit."""

    name: str
    """Unique identifier for the document (file path for directory sources)"""

    data: str
    """Raw text content"""

    @property
    def size(self) -> int:
        """Size of the text in UTF-8 bytes."""
        return len(self.data.encode("utf-8"))


@dataclass
class VectorRecord:
    """Represents a vector record with metadata."""

    id: str
    """Unique identifier for the vector record"""

    vector: Optional[np.ndarray]
    """The vector representation of the content"""

    metadata: Dict[str, object] = field(default_factory=dict)
    """Additional metadata associated with the vector"""


@dataclass
class QueryResult:
    """Represents a search result from a vector store."""

    id: str
    """Identifier for the matching record"""

    score: float
    """Cosine distance of the match (0 = identical direction, 2 = opposite)"""

    metadata: Dict[str, object] = field(default_factory=dict)
    """Metadata associated with the matched record"""


@dataclass
class LoadReport:
    """
    Outcome of a bulk load: which documents made it in and which did not.

    A name in ``failed`` is not indexed, and is in neither ``loaded`` nor
    ``skipped``. A copy rejected because its name is already indexed (by an
    earlier load or earlier in the same batch) is listed in ``skipped``, so
    a batch repeating a name can report it as both loaded and skipped.
    """

    loaded: List[str] = field(default_factory=list)
    """Names indexed by this load, in input order"""

    failed: Dict[str, str] = field(default_factory=dict)
    """Names that could not be indexed, with the reason"""

    skipped: Dict[str, str] = field(default_factory=dict)
    """Names already indexed whose duplicate copy was dropped, with the reason"""

    @property
    def ok(self) -> bool:
        """True when nothing failed; skipped duplicates do not count."""
        return not self.failed

    def merge(self, other: "LoadReport") -> "LoadReport":
        """Fold ``other`` into this report in place and return it."""
        self.loaded.extend(other.loaded)
        self.failed.update(other.failed)
        self.skipped.update(other.skipped)
        return self
