"""prepdocs domain models -- re-exports all public model classes.

    - document.py -- backend-neutral layout analysis result (pages, tables, spans)
    - content.py  -- page map, sections, persisted records and read-path results
"""

from __future__ import annotations

from prepdocs.models.content import (
    IMAGE_CATEGORY,
    ContentRecord,
    IngestionResult,
    PageDetail,
    RequestOverrides,
    Section,
    SplitterConfig,
    SupportingContentRecord,
    SupportingImageRecord,
)
from prepdocs.models.document import (
    AnalyzedDocument,
    AnalyzedPage,
    AnalyzedTable,
    DocumentSpan,
    TableCell,
)

__all__ = [
    # document
    "AnalyzedDocument",
    "AnalyzedPage",
    "AnalyzedTable",
    "DocumentSpan",
    "TableCell",
    # content
    "IMAGE_CATEGORY",
    "ContentRecord",
    "IngestionResult",
    "PageDetail",
    "RequestOverrides",
    "Section",
    "SplitterConfig",
    "SupportingContentRecord",
    "SupportingImageRecord",
]
