"""Public interface definitions for all external service providers.

Every external service in the prepdocs pipeline is accessed exclusively
through the abstract base classes defined in this package.  Concrete
adapters implement these interfaces and are constructed once in
:func:`prepdocs.main.build_services`, then injected.

    Interface                  ->  Concrete implementation (prepdocs/providers/)
    ---------------------------------------------------------------------
    IDocumentAnalyzer          ->  AzureDocumentIntelligenceProvider
    IEmbeddingProvider         ->  OpenAIEmbeddingProvider
    IImageEmbeddingProvider    ->  AzureVisionImageEmbeddingProvider
    IContentStore              ->  ChromaDBContentStore
    IBlobArchive               ->  LocalBlobArchive
"""

from prepdocs.interfaces.blob_archive import IBlobArchive
from prepdocs.interfaces.content_store import IContentStore
from prepdocs.interfaces.document_analyzer import IDocumentAnalyzer
from prepdocs.interfaces.embedding_provider import IEmbeddingProvider
from prepdocs.interfaces.image_embedding_provider import IImageEmbeddingProvider

__all__ = [
    "IBlobArchive",
    "IContentStore",
    "IDocumentAnalyzer",
    "IEmbeddingProvider",
    "IImageEmbeddingProvider",
]
