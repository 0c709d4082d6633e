"""prepdocs composition root.

Wires every provider and service together via dependency injection.  All
shared clients (Document Intelligence, OpenAI, ChromaDB, httpx) are built
exactly once here and injected; no module creates its own client lazily.

Typical use::

    components = build_services()
    result = await components["embed_service"].embed_pdf_blob(data, "report.pdf")
    ...
    await close_services(components)
"""

from __future__ import annotations

from typing import Any

import httpx
import structlog
from azure.ai.documentintelligence.aio import DocumentIntelligenceClient
from azure.core.credentials import AzureKeyCredential

from prepdocs.config.settings import Settings
from prepdocs.interfaces.blob_archive import IBlobArchive
from prepdocs.interfaces.image_embedding_provider import IImageEmbeddingProvider
from prepdocs.providers.archive.local_blob_archive import LocalBlobArchive
from prepdocs.providers.content_store.chromadb_provider import ChromaDBContentStore
from prepdocs.providers.document.azure_document_intelligence_provider import (
    AzureDocumentIntelligenceProvider,
)
from prepdocs.providers.embedding.openai_embedding_provider import OpenAIEmbeddingProvider
from prepdocs.providers.image_embedding.azure_vision_image_embedding_provider import (
    AzureVisionImageEmbeddingProvider,
)
from prepdocs.services.ingestion.embed_service import EmbedService
from prepdocs.services.ingestion.page_extractor import PageExtractor
from prepdocs.services.ingestion.section_splitter import SectionSplitter
from prepdocs.services.search_service import SearchService
from prepdocs.utils.errors import ConfigurationError
from prepdocs.utils.logging import configure_logging, get_logger

_logger: structlog.BoundLogger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Provider selection
# ---------------------------------------------------------------------------


def _build_document_analyzer(app_settings: Settings) -> AzureDocumentIntelligenceProvider:
    """Build the layout analyzer; a Document Intelligence endpoint is mandatory."""
    if not app_settings.document_intelligence_endpoint:
        raise ConfigurationError(
            "DOCUMENT_INTELLIGENCE_ENDPOINT is not set",
            provider_name="azure-document-intelligence",
        )
    client = DocumentIntelligenceClient(
        endpoint=app_settings.document_intelligence_endpoint,
        credential=AzureKeyCredential(app_settings.document_intelligence_key),
    )
    return AzureDocumentIntelligenceProvider(
        client=client,
        model_id=app_settings.document_intelligence_model,
    )


def _check_image_settings(app_settings: Settings) -> None:
    if app_settings.include_image_embeddings and not app_settings.has_image_embeddings():
        raise ConfigurationError(
            "INCLUDE_IMAGE_EMBEDDINGS is set but VISION_ENDPOINT / VISION_KEY are missing",
            provider_name="azure-vision",
        )


def _build_image_embedding_provider(
    app_settings: Settings,
    http_client: httpx.AsyncClient,
) -> IImageEmbeddingProvider | None:
    """Return the vision provider, ``None`` when image embeddings are off.

    Enabling image embeddings without a vision endpoint and key is a
    configuration error, reported at startup rather than on first use.
    """
    if not app_settings.include_image_embeddings:
        return None
    _check_image_settings(app_settings)
    return AzureVisionImageEmbeddingProvider(
        http_client=http_client,
        endpoint=app_settings.vision_endpoint,
        api_key=app_settings.vision_key,
    )


def _build_blob_archive(app_settings: Settings) -> IBlobArchive | None:
    if not app_settings.corpus_archive_enabled:
        return None
    return LocalBlobArchive(root_dir=app_settings.corpus_archive_dir)


# ---------------------------------------------------------------------------
# Composition
# ---------------------------------------------------------------------------


def build_services(settings: Settings | None = None) -> dict[str, Any]:
    """Construct every provider and service instance.

    Parameters
    ----------
    settings:
        Application settings; read from the environment when omitted.

    Returns
    -------
    dict[str, Any]
        Flat dict of named components: ``embed_service``,
        ``search_service`` and each provider, plus the shared
        ``http_client``.

    Raises
    ------
    ConfigurationError
        If a required service is not configured, or image embeddings are
        enabled without a vision service.
    """
    app_settings = settings or Settings()
    configure_logging(
        log_level=app_settings.log_level,
        json_output=(app_settings.app_env == "production"),
    )

    # Every check that can fail runs before the network clients below exist,
    # so a failed build leaves nothing to close.
    splitter = SectionSplitter(app_settings.get_splitter_config())
    _check_image_settings(app_settings)

    embedding_provider = OpenAIEmbeddingProvider(settings=app_settings)
    content_store = ChromaDBContentStore(
        persist_directory=app_settings.chromadb_persist_dir,
        collection_name=app_settings.chromadb_collection,
        image_collection_name=app_settings.chromadb_image_collection,
        embedding_dimension=embedding_provider.get_dimension(),
    )
    blob_archive = _build_blob_archive(app_settings)

    # -- Network clients --
    document_analyzer = _build_document_analyzer(app_settings)
    http_client = httpx.AsyncClient(timeout=30.0)
    image_embedding_provider = _build_image_embedding_provider(app_settings, http_client)

    # -- Services --
    embed_service = EmbedService(
        document_analyzer=document_analyzer,
        embedding_provider=embedding_provider,
        content_store=content_store,
        splitter=splitter,
        page_extractor=PageExtractor(),
        blob_archive=blob_archive,
        image_embedding_provider=image_embedding_provider,
        concurrency=app_settings.ingest_concurrency,
    )
    search_service = SearchService(
        content_store=content_store,
        embedding_provider=embedding_provider,
    )

    _logger.info(
        "services_built",
        document_analyzer=document_analyzer.get_provider_name(),
        embedding_provider=embedding_provider.get_provider_name(),
        image_embeddings=image_embedding_provider is not None,
        content_store=content_store.get_provider_name(),
        corpus_archive=blob_archive is not None,
        ingest_concurrency=app_settings.ingest_concurrency,
        splitter=splitter.config.model_dump(),
    )

    return {
        "settings": app_settings,
        "http_client": http_client,
        "document_analyzer": document_analyzer,
        "embedding_provider": embedding_provider,
        "image_embedding_provider": image_embedding_provider,
        "content_store": content_store,
        "blob_archive": blob_archive,
        "embed_service": embed_service,
        "search_service": search_service,
    }


async def close_services(components: dict[str, Any]) -> None:
    """Release the network clients created by :func:`build_services`."""
    await components["document_analyzer"].close()
    http_client: httpx.AsyncClient = components["http_client"]
    await http_client.aclose()
    _logger.info("services_closed")
