"""Vector search over the content store.

The read path is deliberately thin: embed the query (unless the caller
already has a vector), ask the store for the nearest records and reshape
them into citation-ready :class:`SupportingContentRecord` /
:class:`SupportingImageRecord` objects.  Ranking beyond the store's own
similarity order is out of scope.
"""

from __future__ import annotations

import structlog

from prepdocs.interfaces.content_store import IContentStore
from prepdocs.interfaces.embedding_provider import IEmbeddingProvider
from prepdocs.models.content import (
    RequestOverrides,
    SupportingContentRecord,
    SupportingImageRecord,
)
from prepdocs.utils.errors import InputError

logger = structlog.get_logger(logger_name=__name__)


class SearchService:
    """Retrieves supporting content for a question.

    Parameters
    ----------
    content_store:
        Store populated by :class:`~prepdocs.services.ingestion.EmbedService`.
    embedding_provider:
        Must be the same provider (and model) used at ingestion time so
        query vectors share the section vector space.
    """

    def __init__(
        self,
        content_store: IContentStore,
        embedding_provider: IEmbeddingProvider,
    ) -> None:
        self._content_store = content_store
        self._embedding_provider = embedding_provider

    async def query_documents(
        self,
        query: str | None = None,
        embedding: list[float] | None = None,
        overrides: RequestOverrides | None = None,
    ) -> list[SupportingContentRecord]:
        """Return the text sections nearest to *query* or *embedding*.

        When both are given, *embedding* wins and *query* is not embedded.

        Raises
        ------
        InputError
            If neither *query* nor *embedding* is supplied.
        """
        if query is None and embedding is None:
            raise InputError("Either query or embedding must be provided")

        overrides = overrides or RequestOverrides()
        if embedding is None:
            embedding = await self._embedding_provider.embed_single(query)

        records = await self._content_store.query(
            embedding,
            top=overrides.top,
            exclude_category=overrides.exclude_category,
        )
        logger.debug(
            "query_documents",
            top=overrides.top,
            exclude_category=overrides.exclude_category,
            results=len(records),
        )
        return [
            SupportingContentRecord(
                title=record.source_page or record.source_file,
                content=record.content.replace("\r", " ").replace("\n", " "),
            )
            for record in records
        ]

    async def query_images(
        self,
        embedding: list[float],
        overrides: RequestOverrides | None = None,
    ) -> list[SupportingImageRecord]:
        """Return the images nearest to *embedding* (an image-space vector)."""
        overrides = overrides or RequestOverrides()
        records = await self._content_store.query_images(embedding, top=overrides.top)
        logger.debug("query_images", top=overrides.top, results=len(records))
        return [
            SupportingImageRecord(name=record.content, url=record.source_file)
            for record in records
            if record.is_image
        ]
