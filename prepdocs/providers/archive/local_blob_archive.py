"""Filesystem-backed corpus archive.

Each blob is a file directly under the archive root.  Blob names are
reduced to their final path component so a name can never escape the
root directory.
"""

from __future__ import annotations

import asyncio
from pathlib import Path, PurePosixPath

import structlog

from prepdocs.interfaces.blob_archive import IBlobArchive
from prepdocs.utils.errors import ArchiveError

logger = structlog.get_logger(logger_name=__name__)


class LocalBlobArchive(IBlobArchive):
    """Corpus archive stored in a local directory (created on first upload)."""

    def __init__(self, root_dir: str = "./data/corpus") -> None:
        self._root = Path(root_dir)

    def _path_for(self, name: str) -> Path:
        return self._root / PurePosixPath(name).name

    async def exists(self, name: str) -> bool:
        return await asyncio.to_thread(self._path_for(name).exists)

    async def upload(self, name: str, data: bytes, content_type: str = "text/plain") -> None:
        path = self._path_for(name)
        try:
            await asyncio.to_thread(self._write, path, data)
        except OSError as exc:
            raise ArchiveError(
                message=f"Failed to archive {name}: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc
        logger.debug("corpus_archived", name=name, bytes=len(data), content_type=content_type)

    @staticmethod
    def _write(path: Path, data: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)

    def get_provider_name(self) -> str:
        return "local-archive"
