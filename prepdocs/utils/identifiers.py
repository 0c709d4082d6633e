"""Record identifier and source label helpers shared by sections and images."""

from __future__ import annotations

import re
from pathlib import PurePosixPath

# Store ids may only contain ASCII letters, digits, underscore and dash.
_INVALID_ID_CHARS = re.compile(r"[^0-9a-zA-Z_-]")


def sanitize_id(value: str) -> str:
    """Replace every character outside ``[0-9A-Za-z_-]`` with ``_`` and strip leading ``_``."""
    return _INVALID_ID_CHARS.sub("_", value).lstrip("_")


def section_id(source_file: str, offset: int) -> str:
    """Return the deterministic id of the section starting at *offset* in *source_file*."""
    return sanitize_id(f"{source_file}-{offset}")


def source_page_label(blob_name: str, page: int = 0) -> str:
    """Return the citation label for *page* of *blob_name*.

    PDFs get a per-page label (``report.pdf`` page 3 -> ``report-3.pdf``);
    any other blob is cited by its file name alone.
    """
    path = PurePosixPath(blob_name)
    if path.suffix.lower() == ".pdf":
        return f"{path.stem}-{page}.pdf"
    return path.name


def corpus_name(blob_name: str, page: int) -> str:
    """Return the archive name for the raw text of *page*: ``{stem}-{page}.txt``."""
    return f"{PurePosixPath(blob_name).stem}-{page}.txt"
