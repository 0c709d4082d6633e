"""Ingestion and retrieval models for the prepdocs content store.

The flow through these models is strictly forward:

    AnalyzedDocument -> PageDetail -> Section -> ContentRecord

``PageDetail`` and ``Section`` live only for the duration of one document's
ingestion; ``ContentRecord`` is the persisted, embedding-bearing unit that
retrieval later reads back as ``SupportingContentRecord`` /
``SupportingImageRecord``.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

IMAGE_CATEGORY = "image"


# ---------------------------------------------------------------------------
# PageDetail -- one page of extracted text, tables inlined as HTML.
# ---------------------------------------------------------------------------
class PageDetail(BaseModel):
    """Plain text of one page and its offset into the concatenated document text."""

    model_config = ConfigDict(frozen=True)

    index: int = Field(ge=0, description="0-based page index.")
    offset: int = Field(
        ge=0,
        description="Sum of the text lengths of all previous pages.",
    )
    text: str = Field(description="Page text with tables rendered as HTML and a trailing space.")


# ---------------------------------------------------------------------------
# SplitterConfig -- the knobs of the section splitter.
# ---------------------------------------------------------------------------
class SplitterConfig(BaseModel):
    """Sizes, in characters, used when splitting a document into sections."""

    model_config = ConfigDict(frozen=True)

    max_section_length: int = Field(default=500, gt=0)
    sentence_search_limit: int = Field(default=100, ge=0)
    section_overlap: int = Field(default=100, gt=0)

    @model_validator(mode="after")
    def _overlap_below_section_length(self) -> SplitterConfig:
        if self.section_overlap >= self.max_section_length:
            raise ValueError(
                f"section_overlap ({self.section_overlap}) must be smaller than "
                f"max_section_length ({self.max_section_length})"
            )
        return self


# ---------------------------------------------------------------------------
# Section -- the unit of embedding and retrieval.
# ---------------------------------------------------------------------------
class Section(BaseModel):
    """An overlapping slice of a document's text, sized for embedding."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Sanitized '{source_file}-{offset}' identifier.")
    content: str = Field(min_length=1)
    source_page: str = Field(description="Citation label of the page the section starts on.")
    source_file: str = Field(description="Name of the originating blob.")
    category: str | None = Field(default=None)
    offset: int = Field(default=0, ge=0, description="Start offset in the document text.")


# ---------------------------------------------------------------------------
# ContentRecord -- what the content store persists.
# ---------------------------------------------------------------------------
class ContentRecord(BaseModel):
    """A persisted text section or image together with its vector."""

    model_config = ConfigDict(frozen=True)

    id: str
    content: str
    category: str | None = None
    source_page: str | None = None
    source_file: str
    embedding: list[float] | None = None
    image_embedding: list[float] | None = None

    @property
    def is_image(self) -> bool:
        return self.category == IMAGE_CATEGORY


# ---------------------------------------------------------------------------
# IngestionResult -- output of the orchestrator for one document.
# ---------------------------------------------------------------------------
class IngestionResult(BaseModel):
    """Summary of a single document ingestion run."""

    model_config = ConfigDict(frozen=True)

    blob_name: str
    pages: int = Field(default=0, ge=0)
    sections_created: int = Field(default=0, ge=0)
    ingestion_time: float = Field(
        default=0.0,
        ge=0.0,
        description="Wall-clock time in seconds for the ingestion run.",
    )


# ---------------------------------------------------------------------------
# Read path
# ---------------------------------------------------------------------------
class RequestOverrides(BaseModel):
    """Per-request knobs for the read path."""

    model_config = ConfigDict(frozen=True)

    top: int = Field(default=3, gt=0)
    exclude_category: str | None = None


class SupportingContentRecord(BaseModel):
    """A retrieved text section, titled by its source page label."""

    model_config = ConfigDict(frozen=True)

    title: str
    content: str


class SupportingImageRecord(BaseModel):
    """A retrieved image: its display name and URL."""

    model_config = ConfigDict(frozen=True)

    name: str
    url: str
