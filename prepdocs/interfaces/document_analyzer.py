"""Abstract base class for document layout analysis providers.

Defines the contract for turning raw PDF bytes into recognized text plus
page spans and table geometry.  Implementations may wrap Azure AI Document
Intelligence, AWS Textract, or a local layout model.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from prepdocs.models.document import AnalyzedDocument


# Concrete implementation: AzureDocumentIntelligenceProvider
# Located in: prepdocs/providers/document/
class IDocumentAnalyzer(ABC):
    """Contract for layout analysis services used by the page extractor."""

    @abstractmethod
    async def analyze(self, data: bytes) -> AnalyzedDocument:
        """Analyze a document and return its text, pages and tables.

        Parameters
        ----------
        data:
            The raw bytes of the document (usually a PDF).

        Returns
        -------
        AnalyzedDocument
            Full recognized text, one :class:`AnalyzedPage` per page and
            every detected :class:`AnalyzedTable`.  All offsets index into
            ``AnalyzedDocument.content`` as Python string positions.

        Raises
        ------
        prepdocs.utils.errors.DocumentAnalysisError
            If the backend rejects the document or the call fails.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier, e.g. ``"azure-document-intelligence"``."""
