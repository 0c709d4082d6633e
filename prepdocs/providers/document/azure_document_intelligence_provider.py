"""Azure AI Document Intelligence layout analysis adapter.

Wraps the async ``DocumentIntelligenceClient`` to implement
:class:`IDocumentAnalyzer`.  Documents are analyzed with the
``prebuilt-layout`` model and ``unicodeCodePoint`` offsets, so every span
offset can be used directly as a Python string index.

The SDK result is converted into the backend-neutral
:class:`~prepdocs.models.document.AnalyzedDocument` right here; nothing
past this module sees an Azure type.
"""

from __future__ import annotations

from typing import Any

import structlog
from azure.ai.documentintelligence.aio import DocumentIntelligenceClient
from azure.ai.documentintelligence.models import AnalyzeDocumentRequest
from azure.core.exceptions import AzureError

from prepdocs.interfaces.document_analyzer import IDocumentAnalyzer
from prepdocs.models.document import (
    AnalyzedDocument,
    AnalyzedPage,
    AnalyzedTable,
    DocumentSpan,
    TableCell,
)
from prepdocs.utils.errors import DocumentAnalysisError

logger = structlog.get_logger(logger_name=__name__)

_STRING_INDEX_TYPE = "unicodeCodePoint"


class AzureDocumentIntelligenceProvider(IDocumentAnalyzer):
    """Layout analyzer backed by Azure AI Document Intelligence.

    Parameters
    ----------
    client:
        Shared async client, built once by :func:`prepdocs.main.build_services`.
    model_id:
        Analysis model; ``prebuilt-layout`` returns pages and tables.
    """

    def __init__(
        self,
        client: DocumentIntelligenceClient,
        model_id: str = "prebuilt-layout",
    ) -> None:
        self._client = client
        self._model_id = model_id

    async def analyze(self, data: bytes) -> AnalyzedDocument:
        try:
            poller = await self._client.begin_analyze_document(
                model_id=self._model_id,
                body=AnalyzeDocumentRequest(bytes_source=data),
                string_index_type=_STRING_INDEX_TYPE,
            )
            result = await poller.result()
        except AzureError as exc:
            logger.error("document_analysis_failed", model_id=self._model_id, error=str(exc))
            raise DocumentAnalysisError(
                message=f"Document Intelligence analysis failed: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        document = self._to_document(result)
        logger.info(
            "document_analyzed",
            model_id=self._model_id,
            pages=len(document.pages),
            tables=len(document.tables),
            chars=len(document.content),
        )
        return document

    def get_provider_name(self) -> str:
        return "azure-document-intelligence"

    async def close(self) -> None:
        """Close the underlying client's transport."""
        await self._client.close()

    # ------------------------------------------------------------------
    # SDK result conversion
    # ------------------------------------------------------------------

    @classmethod
    def _to_document(cls, result: Any) -> AnalyzedDocument:
        pages = [cls._to_page(page) for page in (result.pages or [])]
        tables = [cls._to_table(table) for table in (result.tables or [])]
        return AnalyzedDocument(content=result.content or "", pages=pages, tables=tables)

    @staticmethod
    def _to_page(page: Any) -> AnalyzedPage:
        # A page's text is described by its first span.
        spans = page.spans or []
        offset = spans[0].offset if spans else 0
        length = spans[0].length if spans else 0
        return AnalyzedPage(page_number=page.page_number, offset=offset, length=length)

    @staticmethod
    def _to_table(table: Any) -> AnalyzedTable:
        regions = table.bounding_regions or []
        page_number = regions[0].page_number if regions else 1
        cells = [
            TableCell(
                row_index=cell.row_index,
                column_index=cell.column_index,
                row_span=cell.row_span or 1,
                column_span=cell.column_span or 1,
                kind=cell.kind or "content",
                content=cell.content or "",
            )
            for cell in (table.cells or [])
        ]
        spans = [DocumentSpan(offset=s.offset, length=s.length) for s in (table.spans or [])]
        return AnalyzedTable(
            page_number=page_number,
            row_count=table.row_count,
            column_count=table.column_count or 0,
            cells=cells,
            spans=spans,
        )
