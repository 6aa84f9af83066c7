"""
Directory document source tests.
"""

import pytest

from agent_memory.core.exceptions import DocumentLoadError
from agent_memory.vector.loader import iter_text_documents, load_directory
from agent_memory.vector.types import Document


def test_iter_text_documents_finds_nested_txt(corpus_dir):
    documents = list(iter_text_documents(corpus_dir))

    names = [doc.name for doc in documents]
    assert names == sorted(names)
    assert len(documents) == 3
    assert all(isinstance(doc, Document) for doc in documents)
    assert str((corpus_dir / "animals" / "cats.txt").resolve()) in names
    # Only .txt files are picked up by default
    assert not any(name.endswith(".md") for name in names)


def test_iter_text_documents_custom_pattern(corpus_dir):
    documents = list(iter_text_documents(corpus_dir, "*.md"))

    assert [doc.data for doc in documents] == ["cat dog"]


def test_unreadable_file_is_reported_in_place(corpus_dir):
    (corpus_dir / "broken.txt").write_bytes(b"\xff\xfe\xfa not utf-8")

    items = list(iter_text_documents(corpus_dir))

    errors = [item for item in items if isinstance(item, DocumentLoadError)]
    assert len(errors) == 1
    assert errors[0].name.endswith("broken.txt")
    assert len(items) == 4


def test_missing_directory(tmp_path):
    with pytest.raises(DocumentLoadError):
        list(iter_text_documents(tmp_path / "nope"))


def test_file_instead_of_directory(corpus_dir):
    with pytest.raises(DocumentLoadError, match="not a directory"):
        list(iter_text_documents(corpus_dir / "plants.txt"))


@pytest.mark.asyncio
async def test_load_directory(keyword_index, corpus_dir):
    report = await load_directory(keyword_index, corpus_dir)

    assert report.ok
    assert len(report.loaded) == 3
    assert len(keyword_index) == 3

    results = await keyword_index.retrieve("cat", top_k=1)
    assert results[0][0].name.endswith("cats.txt")


@pytest.mark.asyncio
async def test_load_directory_continues_past_failures(keyword_index, corpus_dir):
    (corpus_dir / "broken.txt").write_bytes(b"\xff\xfe\xfa not utf-8")
    keyword_index.embedder.fail_on = {"dog dog"}

    report = await load_directory(keyword_index, corpus_dir)

    assert len(report.loaded) == 2
    assert len(report.failed) == 2
    assert any(name.endswith("broken.txt") for name in report.failed)
    assert any(name.endswith("dogs.txt") for name in report.failed)
    assert len(keyword_index) == 2


@pytest.mark.asyncio
async def test_reloading_reports_duplicates(keyword_index, corpus_dir):
    await load_directory(keyword_index, corpus_dir)

    report = await load_directory(keyword_index, corpus_dir)

    assert report.loaded == []
    assert report.failed == {}
    assert len(report.skipped) == 3
    assert all("already indexed" in reason for reason in report.skipped.values())
    assert report.ok
    assert len(keyword_index) == 3


@pytest.mark.asyncio
async def test_load_directory_default_path(keyword_index, corpus_dir, monkeypatch):
    from agent_memory.vector import loader
    monkeypatch.setattr(loader, "RAG_SOURCE_PATH", str(corpus_dir))

    report = await load_directory(keyword_index)

    assert len(report.loaded) == 3
