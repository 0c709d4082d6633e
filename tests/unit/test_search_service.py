"""Unit tests for SearchService -- the vector search read path."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from prepdocs.models.content import (
    ContentRecord,
    RequestOverrides,
    SupportingContentRecord,
    SupportingImageRecord,
)
from prepdocs.services.search_service import SearchService
from prepdocs.utils.errors import InputError


def _text_record(content: str, source_page: str | None = "report-0.pdf") -> ContentRecord:
    return ContentRecord(
        id="report_pdf-0",
        content=content,
        source_page=source_page,
        source_file="report.pdf",
    )


class TestQueryDocuments:
    @pytest.mark.asyncio
    async def test_requires_query_or_embedding(
        self, mock_content_store, mock_embedding_provider
    ) -> None:
        service = SearchService(mock_content_store, mock_embedding_provider)

        with pytest.raises(InputError):
            await service.query_documents()

        mock_content_store.query.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_embeds_query_text(self, mock_content_store, mock_embedding_provider) -> None:
        mock_content_store.query = AsyncMock(
            return_value=[_text_record("Revenue grew.\r\nCosts fell.\nMargins widened.")]
        )
        service = SearchService(mock_content_store, mock_embedding_provider)

        results = await service.query_documents(query="How did revenue change?")

        mock_embedding_provider.embed_single.assert_awaited_once_with("How did revenue change?")
        mock_content_store.query.assert_awaited_once_with(
            [0.1] * 8, top=3, exclude_category=None
        )
        assert results == [
            SupportingContentRecord(
                title="report-0.pdf",
                content="Revenue grew.  Costs fell. Margins widened.",
            )
        ]

    @pytest.mark.asyncio
    async def test_given_embedding_is_used_directly(
        self, mock_content_store, mock_embedding_provider
    ) -> None:
        service = SearchService(mock_content_store, mock_embedding_provider)

        await service.query_documents(query="ignored", embedding=[0.9, 0.1])

        mock_embedding_provider.embed_single.assert_not_awaited()
        mock_content_store.query.assert_awaited_once_with(
            [0.9, 0.1], top=3, exclude_category=None
        )

    @pytest.mark.asyncio
    async def test_overrides_forwarded(self, mock_content_store, mock_embedding_provider) -> None:
        service = SearchService(mock_content_store, mock_embedding_provider)

        await service.query_documents(
            embedding=[1.0],
            overrides=RequestOverrides(top=7, exclude_category="tables"),
        )

        mock_content_store.query.assert_awaited_once_with([1.0], top=7, exclude_category="tables")

    @pytest.mark.asyncio
    async def test_title_falls_back_to_source_file(
        self, mock_content_store, mock_embedding_provider
    ) -> None:
        mock_content_store.query = AsyncMock(return_value=[_text_record("x", source_page=None)])
        service = SearchService(mock_content_store, mock_embedding_provider)

        results = await service.query_documents(embedding=[1.0])

        assert results[0].title == "report.pdf"


class TestQueryImages:
    @pytest.mark.asyncio
    async def test_returns_name_and_url(self, mock_content_store, mock_embedding_provider) -> None:
        mock_content_store.query_images = AsyncMock(
            return_value=[
                ContentRecord(
                    id="img",
                    content="cat.png",
                    category="image",
                    source_file="https://cdn.example.com/cat.png",
                ),
                _text_record("not an image"),
            ]
        )
        service = SearchService(mock_content_store, mock_embedding_provider)

        results = await service.query_images([0.5] * 4, RequestOverrides(top=2))

        mock_content_store.query_images.assert_awaited_once_with([0.5] * 4, top=2)
        assert results == [
            SupportingImageRecord(name="cat.png", url="https://cdn.example.com/cat.png")
        ]

    @pytest.mark.asyncio
    async def test_empty_store(self, mock_content_store, mock_embedding_provider) -> None:
        service = SearchService(mock_content_store, mock_embedding_provider)
        assert await service.query_images([0.5] * 4) == []
