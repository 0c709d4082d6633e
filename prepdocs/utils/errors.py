"""Exception hierarchy for prepdocs.

Every exception derives from :class:`PrepDocsError` and may name the
external service involved (``"azure-document-intelligence"``,
``"openai_embedding"``, ``"chromadb"`` ...) through ``provider_name``.

    PrepDocsError
    +-- ConfigurationError       (missing capability / invalid settings)
    +-- InputError               (caller supplied unusable arguments)
    +-- BackendError             (an external service call failed)
        +-- DocumentAnalysisError
        +-- EmbeddingError         (text or image vectorization)
        +-- ContentStoreError
        +-- ArchiveError           (corpus archive)
        +-- IngestionError         (a whole document failed; carries blob_name)

Each class supplies its own ``default_message`` used when none is given.
"""


class PrepDocsError(Exception):
    """Base exception for all prepdocs errors.

    ``str(err)`` is ``"[provider] message"`` when a provider is known,
    e.g. ``[chromadb] insert_many failed``.
    """

    default_message = "An unexpected error occurred"

    def __init__(self, message: str | None = None, provider_name: str | None = None) -> None:
        self._message = message or self.default_message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Caller / configuration errors
# ---------------------------------------------------------------------------

class ConfigurationError(PrepDocsError):
    """A required capability is not configured, or settings are invalid."""

    default_message = "Invalid or missing configuration"


class InputError(PrepDocsError):
    """The caller supplied neither of two alternative arguments."""

    default_message = "Invalid input"


# ---------------------------------------------------------------------------
# External service errors
# ---------------------------------------------------------------------------

class BackendError(PrepDocsError):
    """A call to an external collaborator failed.

    prepdocs does not retry; retry policy is left to the client SDKs.
    """

    default_message = "External service call failed"


class DocumentAnalysisError(BackendError):
    default_message = "Document analysis failed"


class EmbeddingError(BackendError):
    default_message = "Embedding generation failed"


class ContentStoreError(BackendError):
    default_message = "Content store operation failed"


class ArchiveError(BackendError):
    default_message = "Corpus archive operation failed"


class IngestionError(BackendError):
    """One document's ingestion aborted.

    ``blob_name`` identifies the document so callers ingesting many blobs
    can tell which one failed.  The underlying :class:`BackendError` is
    chained as ``__cause__``.
    """

    default_message = "Document ingestion failed"

    def __init__(
        self,
        message: str | None = None,
        blob_name: str = "",
        provider_name: str | None = None,
    ) -> None:
        self._blob_name = blob_name
        super().__init__(message=message, provider_name=provider_name)

    @property
    def blob_name(self) -> str:
        return self._blob_name
