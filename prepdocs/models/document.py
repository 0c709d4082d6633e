"""Backend-neutral models for the result of a document layout analysis.

Concrete analyzers (see :mod:`prepdocs.providers.document`) translate their
SDK objects into these models so the page extractor never touches a vendor
type.  Offsets are character offsets into :attr:`AnalyzedDocument.content`.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class DocumentSpan(BaseModel):
    """A contiguous ``[offset, offset + length)`` range of the document text."""

    model_config = ConfigDict(frozen=True)

    offset: int = Field(ge=0, description="Start offset into the full document text.")
    length: int = Field(ge=0, description="Number of characters covered.")


class TableCell(BaseModel):
    """One cell of a detected table."""

    model_config = ConfigDict(frozen=True)

    row_index: int = Field(ge=0)
    column_index: int = Field(ge=0)
    row_span: int = Field(default=1, ge=1)
    column_span: int = Field(default=1, ge=1)
    # "content", "columnHeader", "rowHeader", "stubHead" or "description".
    kind: str = Field(default="content")
    content: str = Field(default="")


class AnalyzedTable(BaseModel):
    """A table detected on a page, with the spans its cells occupy in the text."""

    model_config = ConfigDict(frozen=True)

    page_number: int = Field(ge=1, description="1-based page of the table's first bounding region.")
    row_count: int = Field(ge=0)
    column_count: int = Field(default=0, ge=0)
    cells: list[TableCell] = Field(default_factory=list)
    spans: list[DocumentSpan] = Field(default_factory=list)


class AnalyzedPage(BaseModel):
    """One page of the analyzed document and its span in the full text."""

    model_config = ConfigDict(frozen=True)

    page_number: int = Field(ge=1)
    offset: int = Field(ge=0)
    length: int = Field(ge=0)


class AnalyzedDocument(BaseModel):
    """Full result of a layout analysis: recognized text, pages and tables."""

    model_config = ConfigDict(frozen=True)

    content: str = Field(default="", description="Full recognized text of the document.")
    pages: list[AnalyzedPage] = Field(default_factory=list)
    tables: list[AnalyzedTable] = Field(default_factory=list)
