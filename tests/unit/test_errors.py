"""Unit tests for the prepdocs exception hierarchy."""

from __future__ import annotations

import pytest

from prepdocs.utils.errors import (
    ArchiveError,
    BackendError,
    ConfigurationError,
    ContentStoreError,
    DocumentAnalysisError,
    EmbeddingError,
    IngestionError,
    InputError,
    PrepDocsError,
)


class TestPrepDocsError:
    def test_str_includes_provider(self) -> None:
        err = PrepDocsError("insert failed", provider_name="chromadb")
        assert str(err) == "[chromadb] insert failed"
        assert err.message == "insert failed"
        assert err.provider_name == "chromadb"

    def test_str_without_provider(self) -> None:
        assert str(PrepDocsError("plain")) == "plain"

    @pytest.mark.parametrize(
        "cls",
        [DocumentAnalysisError, EmbeddingError, ContentStoreError, ArchiveError, IngestionError],
    )
    def test_backend_errors(self, cls: type[PrepDocsError]) -> None:
        err = cls()
        assert isinstance(err, BackendError)
        assert isinstance(err, PrepDocsError)
        assert err.message

    @pytest.mark.parametrize("cls", [ConfigurationError, InputError])
    def test_caller_errors_are_not_backend_errors(self, cls: type[PrepDocsError]) -> None:
        assert not isinstance(cls(), BackendError)


class TestIngestionError:
    def test_carries_blob_name(self) -> None:
        err = IngestionError("failed", blob_name="report.pdf", provider_name="openai_embedding")
        assert err.blob_name == "report.pdf"
        assert str(err) == "[openai_embedding] failed"
