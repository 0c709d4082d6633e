"""Corpus archive implementations."""

from prepdocs.providers.archive.local_blob_archive import LocalBlobArchive

__all__ = ["LocalBlobArchive"]
