"""
Directory document source.
Walks a directory tree for text files and feeds them into a SimilarityIndex.
"""

from pathlib import Path
from typing import Iterator, Optional, Union

from ..core.config import RAG_SOURCE_PATH, RAG_SOURCE_PATTERN
from ..core.exceptions import DocumentLoadError
from ..util.logging import logger
from .similarity_index import SimilarityIndex
from .types import Document, LoadReport


def iter_text_documents(path: Union[str, Path], pattern: str = RAG_SOURCE_PATTERN) -> Iterator[Union[Document, DocumentLoadError]]:
    """
    Yield one Document per file matching ``pattern`` under ``path``.

    Documents are named by their absolute path and yielded in sorted order.
    A file that cannot be read or decoded yields a DocumentLoadError in its
    place, so one bad file never stops the walk.

    Raises:
        DocumentLoadError: if ``path`` is not an existing directory.
    """
    root = Path(path)
    try:
        root = root.resolve(strict=True)
    except OSError as e:
        raise DocumentLoadError(str(path), str(e)) from e
    if not root.is_dir():
        raise DocumentLoadError(str(root), "not a directory")

    for file_path in sorted(p for p in root.glob(pattern) if p.is_file()):
        name = str(file_path)
        try:
            yield Document(name=name, data=file_path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as e:
            yield DocumentLoadError(name, str(e))


async def load_directory(index: SimilarityIndex, path: Optional[Union[str, Path]] = None, pattern: Optional[str] = None,
                         concurrency: int = 1) -> LoadReport:
    """
    Index every readable text file under ``path`` (default: RAG_SOURCE_PATH).

    Read and provider failures land in ``failed``, files already indexed in
    ``skipped``. Each is logged per document and the rest of the corpus
    loads.
    """
    path = path or RAG_SOURCE_PATH
    report = LoadReport()
    documents = []

    for item in iter_text_documents(path, pattern or RAG_SOURCE_PATTERN):
        if isinstance(item, DocumentLoadError):
            logger.log_vector_operation("load", item.name, {"error": item.reason}, status="failed")
            report.failed[item.name] = str(item)
        else:
            documents.append(item)

    report.merge(await index.add_many(documents, concurrency=concurrency))
    logger.log_operation("rag.load_directory", "success" if report.ok else "partial", {
        "path": str(path),
        "loaded": len(report.loaded),
        "failed": len(report.failed),
        "skipped": len(report.skipped),
    })
    return report
