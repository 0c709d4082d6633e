"""Shared pytest fixtures for the prepdocs test suite."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from prepdocs.interfaces.blob_archive import IBlobArchive
from prepdocs.interfaces.content_store import IContentStore
from prepdocs.interfaces.document_analyzer import IDocumentAnalyzer
from prepdocs.interfaces.embedding_provider import IEmbeddingProvider
from prepdocs.interfaces.image_embedding_provider import IImageEmbeddingProvider
from prepdocs.models.content import PageDetail
from prepdocs.models.document import (
    AnalyzedDocument,
    AnalyzedPage,
    AnalyzedTable,
    DocumentSpan,
    TableCell,
)

# ---------------------------------------------------------------------------
# Sample documents
# ---------------------------------------------------------------------------

PAGE_ONE_INTRO = "Quarterly report. "
PAGE_ONE_TABLE_TEXT = "Name Value Alpha 1"
PAGE_ONE_TAIL = " End of page one."
PAGE_TWO = "Second page text."

SAMPLE_TABLE_HTML = (
    "<table>"
    "<tr><th>Name</th><th>Value</th></tr>"
    "<tr><td>Alpha</td><td>1</td></tr>"
    "</table>"
)


@pytest.fixture
def sample_table() -> AnalyzedTable:
    """A 2x2 table with a header row, located on page 1."""
    return AnalyzedTable(
        page_number=1,
        row_count=2,
        column_count=2,
        cells=[
            TableCell(row_index=0, column_index=1, kind="columnHeader", content="Value"),
            TableCell(row_index=0, column_index=0, kind="columnHeader", content="Name"),
            TableCell(row_index=1, column_index=0, content="Alpha"),
            TableCell(row_index=1, column_index=1, content="1"),
        ],
        spans=[DocumentSpan(offset=len(PAGE_ONE_INTRO), length=len(PAGE_ONE_TABLE_TEXT))],
    )


@pytest.fixture
def sample_document(sample_table: AnalyzedTable) -> AnalyzedDocument:
    """Two-page analysis result; page 1 carries one table."""
    page_one = PAGE_ONE_INTRO + PAGE_ONE_TABLE_TEXT + PAGE_ONE_TAIL
    return AnalyzedDocument(
        content=page_one + PAGE_TWO,
        pages=[
            AnalyzedPage(page_number=1, offset=0, length=len(page_one)),
            AnalyzedPage(page_number=2, offset=len(page_one), length=len(PAGE_TWO)),
        ],
        tables=[sample_table],
    )


@pytest.fixture
def sample_page_map() -> list[PageDetail]:
    """Page map as produced by PageExtractor for :func:`sample_document`."""
    first = PAGE_ONE_INTRO + SAMPLE_TABLE_HTML + PAGE_ONE_TAIL + " "
    second = PAGE_TWO + " "
    return [
        PageDetail(index=0, offset=0, text=first),
        PageDetail(index=1, offset=len(first), text=second),
    ]


# ---------------------------------------------------------------------------
# Mock providers
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_document_analyzer(sample_document: AnalyzedDocument) -> IDocumentAnalyzer:
    """Mock IDocumentAnalyzer returning :func:`sample_document`."""
    mock = MagicMock(spec=IDocumentAnalyzer)
    mock.get_provider_name.return_value = "mock-analyzer"
    mock.analyze = AsyncMock(return_value=sample_document)
    return mock


@pytest.fixture
def mock_embedding_provider() -> IEmbeddingProvider:
    """Mock IEmbeddingProvider producing 8-dimensional vectors."""
    mock = MagicMock(spec=IEmbeddingProvider)
    mock.get_provider_name.return_value = "mock-embedding"
    mock.get_dimension.return_value = 8
    mock.is_available.return_value = True
    mock.embed_single = AsyncMock(return_value=[0.1] * 8)
    mock.embed = AsyncMock(side_effect=lambda texts: [[0.1] * 8 for _ in texts])
    return mock


@pytest.fixture
def mock_image_embedding_provider() -> IImageEmbeddingProvider:
    """Mock IImageEmbeddingProvider producing 4-dimensional vectors."""
    mock = MagicMock(spec=IImageEmbeddingProvider)
    mock.get_provider_name.return_value = "mock-vision"
    mock.is_available.return_value = True
    mock.vectorize_image = AsyncMock(return_value=[0.5] * 4)
    return mock


@pytest.fixture
def mock_content_store() -> IContentStore:
    """Mock IContentStore that reports every record as written."""
    mock = MagicMock(spec=IContentStore)
    mock.get_provider_name.return_value = "mock-store"
    mock.is_available.return_value = True
    mock.insert_one = AsyncMock(return_value=None)
    mock.insert_many = AsyncMock(side_effect=lambda records: len(records))
    mock.query = AsyncMock(return_value=[])
    mock.query_images = AsyncMock(return_value=[])
    return mock


@pytest.fixture
def mock_blob_archive() -> IBlobArchive:
    """Mock IBlobArchive that starts empty."""
    mock = MagicMock(spec=IBlobArchive)
    mock.get_provider_name.return_value = "mock-archive"
    mock.exists = AsyncMock(return_value=False)
    mock.upload = AsyncMock(return_value=None)
    return mock
