"""ChromaDB content store adapter.

Wraps ``chromadb.PersistentClient`` to implement :class:`IContentStore`.
Text sections and images live in two separate collections because their
vectors come from different models and are never compared with each other.
Both collections use cosine distance.
"""

from __future__ import annotations

import os
from typing import Any

# Disable ChromaDB's PostHog telemetry before importing chromadb; a version
# mismatch between its bundled client and the installed posthog raises on
# every capture() call.
os.environ["ANONYMIZED_TELEMETRY"] = "False"

import posthog

posthog.disabled = True

import chromadb
import structlog

from prepdocs.interfaces.content_store import IContentStore
from prepdocs.models.content import ContentRecord
from prepdocs.utils.errors import ContentStoreError

logger = structlog.get_logger(logger_name=__name__)

_UPSERT_BATCH_SIZE = 500


class _NoopEmbeddingFunction(chromadb.EmbeddingFunction[list[str]]):
    """No-op embedding function that prevents ChromaDB from loading a model.

    prepdocs always passes pre-computed vectors, so ChromaDB's built-in
    embedding is never invoked.  Without this, ChromaDB downloads its
    default ONNX model on collection creation.
    """

    def __call__(self, input: list[str]) -> list[list[float]]:
        raise NotImplementedError(
            "prepdocs uses pre-computed embeddings; "
            "ChromaDB's built-in embedding should never be called."
        )

    def name(self) -> str:
        """Return function name (required by ChromaDB's EmbeddingFunction protocol)."""
        return "noop_precomputed"


class ChromaDBContentStore(IContentStore):
    """Content store backed by ChromaDB with local persistence.

    Parameters
    ----------
    persist_directory:
        Directory holding the ChromaDB files.
    collection_name:
        Collection for text sections.
    image_collection_name:
        Collection for image records.
    embedding_dimension:
        When given, the text collection's stored vectors are checked
        against it at startup so a model switch fails loudly instead of
        returning meaningless neighbours.
    """

    def __init__(
        self,
        persist_directory: str = "./data/chromadb",
        collection_name: str = "content",
        image_collection_name: str = "images",
        embedding_dimension: int | None = None,
    ) -> None:
        self._persist_directory = persist_directory
        self._client = chromadb.PersistentClient(
            path=persist_directory,
            settings=chromadb.config.Settings(anonymized_telemetry=False),
        )
        self._collection = self._open_collection(collection_name)
        self._image_collection = self._open_collection(image_collection_name)

        if embedding_dimension is not None:
            self._validate_embedding_dimension(embedding_dimension)

    def _open_collection(self, name: str) -> Any:
        # Collections created by another ChromaDB version may have a
        # persisted embedding function that conflicts with the no-op one.
        try:
            return self._client.get_or_create_collection(
                name=name,
                metadata={"hnsw:space": "cosine"},
                embedding_function=_NoopEmbeddingFunction(),
            )
        except ValueError:
            return self._client.get_or_create_collection(
                name=name,
                metadata={"hnsw:space": "cosine"},
            )

    def _validate_embedding_dimension(self, expected_dim: int) -> None:
        """Compare one stored text vector with *expected_dim*."""
        if self._collection.count() == 0:
            return

        sample = self._collection.peek(limit=1)
        embeddings = sample.get("embeddings") if sample else None
        if embeddings is None or len(embeddings) == 0:
            return

        stored_dim = len(embeddings[0])
        if stored_dim != expected_dim:
            logger.error(
                "embedding_dimension_mismatch",
                stored_dim=stored_dim,
                expected_dim=expected_dim,
            )
            raise ContentStoreError(
                message=(
                    f"Embedding dimension mismatch: store has {stored_dim}-dim vectors "
                    f"but the embedding provider produces {expected_dim}-dim vectors. "
                    f"Set OPENAI_EMBEDDING_MODEL to the model used to build the store."
                ),
                provider_name=self.get_provider_name(),
            )
        logger.info("embedding_dimension_validated", dimension=stored_dim)

    # ------------------------------------------------------------------
    # IContentStore implementation
    # ------------------------------------------------------------------

    async def insert_one(self, record: ContentRecord) -> None:
        """Persist a single text or image record."""
        await self.insert_many([record])

    async def insert_many(self, records: list[ContentRecord]) -> int:
        """Write *records*, routing image records to the image collection.

        Records are upserted by id, so re-ingesting a document overwrites
        its earlier sections instead of duplicating them.
        """
        if not records:
            return 0

        text_records = [r for r in records if not r.is_image]
        image_records = [r for r in records if r.is_image]
        try:
            stored = self._upsert(self._collection, text_records, image=False)
            stored += self._upsert(self._image_collection, image_records, image=True)
        except ContentStoreError:
            raise
        except Exception as exc:
            raise ContentStoreError(
                message=f"ChromaDB insert failed: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        logger.info(
            "chromadb_insert",
            text_records=len(text_records),
            image_records=len(image_records),
        )
        return stored

    async def query(
        self,
        embedding: list[float],
        top: int = 3,
        exclude_category: str | None = None,
    ) -> list[ContentRecord]:
        """Nearest text sections, optionally skipping one category."""
        where = {"category": {"$ne": exclude_category}} if exclude_category else None
        return self._query(self._collection, embedding, top, where)

    async def query_images(
        self,
        embedding: list[float],
        top: int = 3,
    ) -> list[ContentRecord]:
        """Nearest image records in the image vector space."""
        return self._query(self._image_collection, embedding, top, None)

    def get_provider_name(self) -> str:
        return "chromadb"

    def is_available(self) -> bool:
        """Return ``True`` if both collections are accessible."""
        try:
            self._collection.count()
            self._image_collection.count()
            return True
        except Exception:
            return False

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _upsert(self, collection: Any, records: list[ContentRecord], image: bool) -> int:
        stored = 0
        for start in range(0, len(records), _UPSERT_BATCH_SIZE):
            batch = records[start : start + _UPSERT_BATCH_SIZE]
            vectors = [r.image_embedding if image else r.embedding for r in batch]
            if any(v is None for v in vectors):
                missing = next(r.id for r, v in zip(batch, vectors, strict=True) if v is None)
                raise ContentStoreError(
                    message=f"Record {missing} has no {'image ' if image else ''}embedding",
                    provider_name=self.get_provider_name(),
                )
            collection.upsert(
                ids=[r.id for r in batch],
                embeddings=vectors,
                documents=[r.content for r in batch],
                metadatas=[self._record_to_metadata(r) for r in batch],
            )
            stored += len(batch)
        return stored

    def _query(
        self,
        collection: Any,
        embedding: list[float],
        top: int,
        where: dict[str, Any] | None,
    ) -> list[ContentRecord]:
        try:
            count = collection.count()
            if count == 0:
                return []

            kwargs: dict[str, Any] = {
                "query_embeddings": [embedding],
                "n_results": min(top, count),
                "include": ["documents", "metadatas", "distances"],
            }
            if where:
                kwargs["where"] = where
            results = collection.query(**kwargs)
        except Exception as exc:
            raise ContentStoreError(
                message=f"ChromaDB query failed: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        if not results["ids"] or not results["ids"][0]:
            return []

        ids = results["ids"][0]
        documents = results["documents"][0] if results["documents"] else [""] * len(ids)
        metadatas = results["metadatas"][0] if results["metadatas"] else [{}] * len(ids)

        records = [
            self._metadata_to_record(record_id, doc_text or "", meta or {})
            for record_id, doc_text, meta in zip(ids, documents, metadatas, strict=True)
        ]
        logger.debug("chromadb_query", top=top, results=len(records), filtered=bool(where))
        return records

    @staticmethod
    def _record_to_metadata(record: ContentRecord) -> dict[str, str]:
        """ChromaDB metadata values cannot be ``None``; empty strings stand in."""
        return {
            "category": record.category or "",
            "source_page": record.source_page or "",
            "source_file": record.source_file,
        }

    @staticmethod
    def _metadata_to_record(record_id: str, text: str, meta: dict[str, Any]) -> ContentRecord:
        return ContentRecord(
            id=record_id,
            content=text,
            category=meta.get("category") or None,
            source_page=meta.get("source_page") or None,
            source_file=meta.get("source_file", ""),
        )

