"""Utility modules for prepdocs.

- **errors** -- Domain exception hierarchy rooted at PrepDocsError.
- **logging** -- structlog setup with console output in development and
  JSON in production.
- **concurrency** -- semaphore-bounded ``asyncio.gather`` for multi-document
  ingestion.
- **identifiers** -- record id sanitization and source page labels.
"""

from prepdocs.utils.concurrency import throttled_gather
from prepdocs.utils.errors import (
    ArchiveError,
    BackendError,
    ConfigurationError,
    ContentStoreError,
    DocumentAnalysisError,
    EmbeddingError,
    IngestionError,
    InputError,
    PrepDocsError,
)
from prepdocs.utils.identifiers import corpus_name, sanitize_id, section_id, source_page_label
from prepdocs.utils.logging import configure_logging, get_logger

__all__ = [
    "ArchiveError",
    "BackendError",
    "ConfigurationError",
    "ContentStoreError",
    "DocumentAnalysisError",
    "EmbeddingError",
    "IngestionError",
    "InputError",
    "PrepDocsError",
    "configure_logging",
    "corpus_name",
    "get_logger",
    "sanitize_id",
    "section_id",
    "source_page_label",
    "throttled_gather",
]
