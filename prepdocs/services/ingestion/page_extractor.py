"""Page extraction: analyzed document -> ordered per-page plain text.

Tables are not left as the flattened cell text the layout backend puts in
the document content.  Every character covered by a table's spans is
replaced by one HTML rendering of that table, emitted where the table's
first covered character was, so downstream sections keep rows and columns
intact.
"""

from __future__ import annotations

import html

import structlog

from prepdocs.models.content import PageDetail
from prepdocs.models.document import AnalyzedDocument, AnalyzedPage, AnalyzedTable

logger = structlog.get_logger(logger_name=__name__)

_HEADER_KINDS = frozenset({"columnHeader", "rowHeader"})

# Marker for characters that belong to no table.
_NO_TABLE = -1


def table_to_html(table: AnalyzedTable) -> str:
    """Render *table* as a compact HTML ``<table>``.

    One ``<tr>`` per row index ``0 .. row_count - 1``; cells inside a row are
    ordered by column index.  Header cells become ``<th>``, everything else
    ``<td>``.  ``colSpan`` / ``rowSpan`` are only written when greater than 1.
    """
    parts = ["<table>"]
    for row_index in range(table.row_count):
        row_cells = sorted(
            (c for c in table.cells if c.row_index == row_index),
            key=lambda c: c.column_index,
        )
        parts.append("<tr>")
        for cell in row_cells:
            tag = "th" if cell.kind in _HEADER_KINDS else "td"
            cell_spans = ""
            if cell.column_span > 1:
                cell_spans += f" colSpan='{cell.column_span}'"
            if cell.row_span > 1:
                cell_spans += f" rowSpan='{cell.row_span}'"
            parts.append(f"<{tag}{cell_spans}>{html.escape(cell.content)}</{tag}>")
        parts.append("</tr>")
    parts.append("</table>")
    return "".join(parts)


class PageExtractor:
    """Builds the page map that the section splitter consumes."""

    def extract(self, document: AnalyzedDocument) -> list[PageDetail]:
        """Return one :class:`PageDetail` per page of *document*.

        Page ``i`` (0-based) collects the tables whose ``page_number`` is
        ``i + 1``.  Each page's text gets one trailing space as the
        inter-page separator, and ``offset`` accumulates the lengths of the
        previous pages' text.
        """
        page_map: list[PageDetail] = []
        offset = 0
        for index, page in enumerate(document.pages):
            tables_on_page = [t for t in document.tables if t.page_number == index + 1]
            text = self._page_text(document.content, page, tables_on_page) + " "
            page_map.append(PageDetail(index=index, offset=offset, text=text))
            offset += len(text)

        logger.debug(
            "pages_extracted",
            pages=len(page_map),
            tables=len(document.tables),
            total_chars=offset,
        )
        return page_map

    @staticmethod
    def _page_text(content: str, page: AnalyzedPage, tables: list[AnalyzedTable]) -> str:
        # Mark every page position covered by a table span with that table's index.
        table_chars = [_NO_TABLE] * page.length
        for table_id, table in enumerate(tables):
            for span in table.spans:
                for j in range(span.length):
                    index = span.offset - page.offset + j
                    if 0 <= index < page.length:
                        table_chars[index] = table_id

        parts: list[str] = []
        added_tables: set[int] = set()
        for j, table_id in enumerate(table_chars):
            if table_id == _NO_TABLE:
                parts.append(content[page.offset + j])
            elif table_id not in added_tables:
                parts.append(table_to_html(tables[table_id]))
                added_tables.add(table_id)
        return "".join(parts)
