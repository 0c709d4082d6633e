"""Unit tests for the ChromaDB content store.

Each test uses a fresh persistent directory under ``tmp_path``.
"""

from __future__ import annotations

import pytest

from prepdocs.models.content import ContentRecord
from prepdocs.providers.content_store.chromadb_provider import ChromaDBContentStore
from prepdocs.utils.errors import ContentStoreError


def _text(record_id: str, vector: list[float], **kwargs) -> ContentRecord:
    defaults = {
        "content": f"content of {record_id}",
        "source_page": "report-0.pdf",
        "source_file": "report.pdf",
    }
    defaults.update(kwargs)
    return ContentRecord(id=record_id, embedding=vector, **defaults)


def _image(record_id: str, vector: list[float]) -> ContentRecord:
    return ContentRecord(
        id=record_id,
        content=f"{record_id}.png",
        category="image",
        source_file=f"https://cdn.example.com/{record_id}.png",
        image_embedding=vector,
    )


class TestChromaDBContentStore:
    @pytest.fixture()
    def store(self, tmp_path) -> ChromaDBContentStore:
        return ChromaDBContentStore(persist_directory=str(tmp_path / "chroma"))

    def test_get_provider_name(self, store) -> None:
        assert store.get_provider_name() == "chromadb"

    def test_is_available(self, store) -> None:
        assert store.is_available() is True

    @pytest.mark.asyncio
    async def test_insert_many_and_query(self, store) -> None:
        count = await store.insert_many(
            [
                _text("a", [1.0, 0.0, 0.0, 0.0], content="Alpha section"),
                _text("b", [0.0, 1.0, 0.0, 0.0], content="Beta section", source_page="report-1.pdf"),
            ]
        )
        assert count == 2

        results = await store.query([0.0, 1.0, 0.0, 0.0], top=1)

        assert results == [
            ContentRecord(
                id="b",
                content="Beta section",
                source_page="report-1.pdf",
                source_file="report.pdf",
            )
        ]
        assert results[0].category is None
        assert results[0].embedding is None

    @pytest.mark.asyncio
    async def test_query_empty_store(self, store) -> None:
        assert await store.query([1.0, 0.0, 0.0, 0.0]) == []
        assert await store.query_images([1.0, 0.0]) == []

    @pytest.mark.asyncio
    async def test_exclude_category(self, store) -> None:
        await store.insert_many(
            [
                _text("tbl", [1.0, 0.0, 0.0, 0.0], category="tables"),
                _text("txt", [0.0, 1.0, 0.0, 0.0]),
            ]
        )

        unfiltered = await store.query([1.0, 0.0, 0.0, 0.0], top=1)
        filtered = await store.query([1.0, 0.0, 0.0, 0.0], top=1, exclude_category="tables")

        assert unfiltered[0].id == "tbl"
        assert unfiltered[0].category == "tables"
        assert [r.id for r in filtered] == ["txt"]

    @pytest.mark.asyncio
    async def test_images_kept_separate_from_text(self, store) -> None:
        await store.insert_one(_image("cat", [0.5, 0.5]))

        images = await store.query_images([0.5, 0.5], top=3)

        assert [r.id for r in images] == ["cat"]
        assert images[0].is_image
        assert images[0].source_file == "https://cdn.example.com/cat.png"
        assert await store.query([0.5, 0.5, 0.5, 0.5]) == []

    @pytest.mark.asyncio
    async def test_reinsert_same_id_overwrites(self, store) -> None:
        await store.insert_many([_text("a", [1.0, 0.0, 0.0, 0.0], content="old")])
        await store.insert_many([_text("a", [1.0, 0.0, 0.0, 0.0], content="new")])

        results = await store.query([1.0, 0.0, 0.0, 0.0], top=5)

        assert [r.content for r in results] == ["new"]

    @pytest.mark.asyncio
    async def test_insert_empty(self, store) -> None:
        assert await store.insert_many([]) == 0

    @pytest.mark.asyncio
    async def test_record_without_embedding_rejected(self, store) -> None:
        record = ContentRecord(id="x", content="no vector", source_file="report.pdf")

        with pytest.raises(ContentStoreError):
            await store.insert_many([record])

    @pytest.mark.asyncio
    async def test_dimension_mismatch_detected_on_open(self, tmp_path) -> None:
        path = str(tmp_path / "chroma")
        store = ChromaDBContentStore(persist_directory=path)
        await store.insert_many([_text("a", [1.0, 0.0, 0.0, 0.0])])

        with pytest.raises(ContentStoreError, match="dimension mismatch"):
            ChromaDBContentStore(persist_directory=path, embedding_dimension=8)

        # Matching dimension opens fine.
        ChromaDBContentStore(persist_directory=path, embedding_dimension=4)
