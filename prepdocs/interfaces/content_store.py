"""Abstract base class for the searchable content store.

Defines the contract for persisting :class:`ContentRecord` objects and for
the thin vector-search read path.  Implementations may wrap ChromaDB,
MongoDB Atlas vector search, Azure AI Search, or any other vector database.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from prepdocs.models.content import ContentRecord


# Concrete implementation: ChromaDBContentStore (prepdocs/providers/content_store/)
class IContentStore(ABC):
    """Contract for the store that holds embedded sections and images.

    Text records carry ``embedding``; image records (``category == "image"``)
    carry ``image_embedding``.  The two live in separate vector spaces and
    are searched separately.
    """

    @abstractmethod
    async def insert_one(self, record: ContentRecord) -> None:
        """Persist a single record.

        Raises
        ------
        prepdocs.utils.errors.ContentStoreError
            If the write fails.
        """

    @abstractmethod
    async def insert_many(self, records: list[ContentRecord]) -> int:
        """Persist all *records* in one bulk write.

        Returns
        -------
        int
            The number of records written.

        Raises
        ------
        prepdocs.utils.errors.ContentStoreError
            If the write fails.
        """

    @abstractmethod
    async def query(
        self,
        embedding: list[float],
        top: int = 3,
        exclude_category: str | None = None,
    ) -> list[ContentRecord]:
        """Return the *top* text records nearest to *embedding*.

        Records whose ``category`` equals *exclude_category* are skipped.
        Returned records do not carry their vectors.
        """

    @abstractmethod
    async def query_images(
        self,
        embedding: list[float],
        top: int = 3,
    ) -> list[ContentRecord]:
        """Return the *top* image records nearest to *embedding*."""

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier, e.g. ``"chromadb"``."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if the store is reachable."""
