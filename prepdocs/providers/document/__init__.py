"""Document layout analysis provider implementations."""

from prepdocs.providers.document.azure_document_intelligence_provider import (
    AzureDocumentIntelligenceProvider,
)

__all__ = ["AzureDocumentIntelligenceProvider"]
