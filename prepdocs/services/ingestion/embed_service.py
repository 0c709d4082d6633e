"""Orchestrator for PDF and image ingestion into the content store.

Pipeline stages for a PDF: **analyze -> page map -> archive -> split ->
embed -> store**.

The :class:`EmbedService` coordinates its collaborators (layout analyzer,
page extractor, section splitter, embedding providers, content store and the
optional corpus archive) without any of them knowing about each other.  All
of them are injected via the constructor, so backends can be swapped without
changing this class.

A single document is processed strictly sequentially.  Any failure, from a
backend or from malformed analysis output, aborts the document and surfaces
as :class:`IngestionError` with the blob name attached; records already written for that document are not rolled
back.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

import structlog

from prepdocs.models.content import (
    IMAGE_CATEGORY,
    ContentRecord,
    IngestionResult,
    PageDetail,
    Section,
)
from prepdocs.services.ingestion.page_extractor import PageExtractor
from prepdocs.services.ingestion.section_splitter import SectionSplitter
from prepdocs.utils.concurrency import throttled_gather
from prepdocs.utils.errors import BackendError, ConfigurationError, IngestionError
from prepdocs.utils.identifiers import corpus_name, sanitize_id

if TYPE_CHECKING:
    from prepdocs.interfaces.blob_archive import IBlobArchive
    from prepdocs.interfaces.content_store import IContentStore
    from prepdocs.interfaces.document_analyzer import IDocumentAnalyzer
    from prepdocs.interfaces.embedding_provider import IEmbeddingProvider
    from prepdocs.interfaces.image_embedding_provider import IImageEmbeddingProvider

logger = structlog.get_logger(logger_name=__name__)


class EmbedService:
    """Turns PDFs and images into embedded, searchable content records.

    Parameters
    ----------
    document_analyzer:
        Layout analysis backend that returns text, pages and tables.
    embedding_provider:
        Generates one text embedding per section.
    content_store:
        Persists the resulting :class:`ContentRecord` objects.
    splitter:
        Cuts the page map into overlapping sections.  Defaults to a
        :class:`SectionSplitter` with default sizes.
    page_extractor:
        Builds the page map from the analysis result.
    blob_archive:
        Optional corpus archive receiving each page's raw text.  ``None``
        skips archival.
    image_embedding_provider:
        Optional image vectorizer.  Without one, :meth:`embed_image_blob`
        raises :class:`ConfigurationError`.
    concurrency:
        Default number of documents :meth:`embed_pdf_blobs` ingests at once.
    """

    def __init__(
        self,
        document_analyzer: IDocumentAnalyzer,
        embedding_provider: IEmbeddingProvider,
        content_store: IContentStore,
        splitter: SectionSplitter | None = None,
        page_extractor: PageExtractor | None = None,
        blob_archive: IBlobArchive | None = None,
        image_embedding_provider: IImageEmbeddingProvider | None = None,
        concurrency: int = 1,
    ) -> None:
        self._document_analyzer = document_analyzer
        self._embedding_provider = embedding_provider
        self._content_store = content_store
        self._splitter = splitter or SectionSplitter()
        self._page_extractor = page_extractor or PageExtractor()
        self._blob_archive = blob_archive
        self._image_embedding_provider = image_embedding_provider
        self._concurrency = max(1, concurrency)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def embed_pdf_blob(self, data: bytes, blob_name: str) -> IngestionResult:
        """Ingest one PDF through the full pipeline.

        1. :class:`IDocumentAnalyzer` -> text, pages, tables
        2. :class:`PageExtractor` -> page map with tables inlined as HTML
        3. :class:`IBlobArchive` -> raw page text archived (if configured)
        4. :class:`SectionSplitter` -> overlapping sections
        5. :class:`IEmbeddingProvider` -> one vector per section
        6. :class:`IContentStore` -> one bulk insert

        Raises
        ------
        IngestionError
            If any backend call fails.  The backend error is chained.
        """
        start = time.monotonic()
        log = logger.bind(blob_name=blob_name)
        log.info("embed_blob_started", size_bytes=len(data))

        try:
            document = await self._document_analyzer.analyze(data)
            page_map = self._page_extractor.extract(document)

            if self._blob_archive is not None:
                await self._upload_corpus(self._blob_archive, page_map, blob_name)

            sections = list(self._splitter.split(page_map, blob_name))
            if not sections:
                log.warning("embed_blob_no_sections", pages=len(page_map))
            else:
                await self._insert_sections(sections)
        except BackendError as exc:
            log.error(
                "embed_blob_failed",
                error=str(exc),
                error_type=type(exc).__name__,
            )
            raise IngestionError(
                message=f"Failed to embed {blob_name}: {exc.message}",
                blob_name=blob_name,
                provider_name=exc.provider_name,
            ) from exc
        except Exception as exc:
            log.error(
                "embed_blob_failed",
                error=str(exc),
                error_type=type(exc).__name__,
            )
            raise IngestionError(
                message=f"Failed to embed {blob_name}: {exc}",
                blob_name=blob_name,
            ) from exc

        elapsed = time.monotonic() - start
        result = IngestionResult(
            blob_name=blob_name,
            pages=len(page_map),
            sections_created=len(sections),
            ingestion_time=round(elapsed, 2),
        )
        log.info(
            "embed_blob_complete",
            pages=result.pages,
            sections=result.sections_created,
            time_s=result.ingestion_time,
        )
        return result

    async def embed_image_blob(
        self,
        image_data: bytes,
        image_url: str,
        image_name: str,
    ) -> bool:
        """Vectorize the image at *image_url* and store it as an image record.

        *image_data* is accepted for parity with the PDF path; the vision
        backend fetches the image from *image_url* itself.

        Raises
        ------
        ConfigurationError
            If no image embedding provider was configured.  Nothing is
            called in that case.
        IngestionError
            If vectorization or the store write fails.
        """
        if self._image_embedding_provider is None:
            logger.error("embed_image_not_configured", image_url=image_url)
            raise ConfigurationError(
                "Image embeddings are not configured; "
                "set VISION_ENDPOINT and VISION_KEY and enable INCLUDE_IMAGE_EMBEDDINGS",
            )

        log = logger.bind(image_url=image_url, image_name=image_name)
        try:
            vector = await self._image_embedding_provider.vectorize_image(image_url)
            record = ContentRecord(
                id=sanitize_id(image_url),
                content=image_name,
                category=IMAGE_CATEGORY,
                source_file=image_url,
                image_embedding=vector,
            )
            await self._content_store.insert_one(record)
        except BackendError as exc:
            log.error("embed_image_failed", error=str(exc), error_type=type(exc).__name__)
            raise IngestionError(
                message=f"Failed to embed image {image_name}: {exc.message}",
                blob_name=image_url,
                provider_name=exc.provider_name,
            ) from exc
        except Exception as exc:
            log.error("embed_image_failed", error=str(exc), error_type=type(exc).__name__)
            raise IngestionError(
                message=f"Failed to embed image {image_name}: {exc}",
                blob_name=image_url,
            ) from exc

        log.info("embed_image_complete", size_bytes=len(image_data), dimensions=len(vector))
        return True

    async def embed_pdf_blobs(
        self,
        blobs: list[tuple[bytes, str]],
        concurrency: int | None = None,
    ) -> list[IngestionResult | BaseException]:
        """Ingest several PDFs, at most *concurrency* at a time.

        Parameters
        ----------
        blobs:
            ``(data, blob_name)`` pairs.
        concurrency:
            Maximum number of documents in flight.  Defaults to the
            value given at construction; values below 1 are treated as 1.

        Returns
        -------
        list
            One entry per blob, in input order: the :class:`IngestionResult`
            or the :class:`IngestionError` that aborted that document.
        """
        limit = max(1, concurrency if concurrency is not None else self._concurrency)
        results = await throttled_gather(
            [self.embed_pdf_blob(data, blob_name) for data, blob_name in blobs],
            limit=limit,
        )
        failed = sum(1 for r in results if isinstance(r, BaseException))
        logger.info(
            "embed_blobs_complete",
            blobs=len(blobs),
            succeeded=len(blobs) - failed,
            failed=failed,
            concurrency=limit,
        )
        return results

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @staticmethod
    async def _upload_corpus(
        archive: IBlobArchive,
        page_map: list[PageDetail],
        blob_name: str,
    ) -> None:
        for page in page_map:
            name = corpus_name(blob_name, page.index)
            # Already archived counts as success.
            if await archive.exists(name):
                logger.debug("corpus_exists", corpus_name=name)
                continue
            await archive.upload(name, page.text.encode("utf-8"), "text/plain")
            logger.debug("corpus_uploaded", corpus_name=name, chars=len(page.text))

    async def _insert_sections(self, sections: list[Section]) -> int:
        records: list[ContentRecord] = []
        for section in sections:
            embedding = await self._embedding_provider.embed_single(
                section.content.replace("\r", " ")
            )
            records.append(
                ContentRecord(
                    id=section.id,
                    content=section.content,
                    category=section.category,
                    source_page=section.source_page,
                    source_file=section.source_file,
                    embedding=embedding,
                )
            )

        inserted = await self._content_store.insert_many(records)
        logger.debug("sections_inserted", sections=len(records), inserted=inserted)
        return inserted
