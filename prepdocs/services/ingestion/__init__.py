"""Document ingestion pipeline for the prepdocs content store.

Orchestrates the full pipeline: **analyze -> page map -> split -> embed -> store**.

Pipeline stages overview:

1. **Analyze** (via IDocumentAnalyzer) -- Layout analysis turns PDF bytes
   into recognized text, page spans and table geometry.

2. **Page map** (page_extractor.py / PageExtractor) -- Builds per-page text
   with every table replaced by a single HTML rendering.

3. **Split** (section_splitter.py / SectionSplitter) -- Cuts the page map
   into ~500-character overlapping sections snapped to sentence and word
   boundaries, keeping tables together where possible.

4. **Embed** (via IEmbeddingProvider) -- One vector per section.

5. **Store** (via IContentStore) -- Persists the embedded sections in one
   bulk write.

The EmbedService class orchestrates all five stages and also ingests
images through the optional IImageEmbeddingProvider.
"""

from prepdocs.services.ingestion.embed_service import EmbedService
from prepdocs.services.ingestion.page_extractor import PageExtractor, table_to_html
from prepdocs.services.ingestion.section_splitter import (
    SectionCursor,
    SectionSplitter,
    find_page,
)

__all__ = [
    "EmbedService",
    "PageExtractor",
    "SectionCursor",
    "SectionSplitter",
    "find_page",
    "table_to_html",
]
