"""Abstract base class for the corpus archive.

The corpus archive keeps a durable, write-once-per-name copy of each page's
raw extracted text, independent of the section/embedding pipeline.  It is
optional: minimal deployments run without one.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


# Concrete implementation: LocalBlobArchive (prepdocs/providers/archive/)
class IBlobArchive(ABC):
    """Contract for a named blob store used for corpus archival."""

    @abstractmethod
    async def exists(self, name: str) -> bool:
        """Return ``True`` if a blob called *name* is already stored."""

    @abstractmethod
    async def upload(self, name: str, data: bytes, content_type: str = "text/plain") -> None:
        """Store *data* under *name*.

        Raises
        ------
        prepdocs.utils.errors.ArchiveError
            If the upload fails.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier, e.g. ``"local-archive"``."""
