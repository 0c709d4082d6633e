"""Section splitting with sentence/word boundary snapping and table carry-over.

Splits the concatenated page text of one document into overlapping
:class:`~prepdocs.models.content.Section` objects sized for embedding
(default 500 characters with 100 characters of overlap).

Each section is produced in three moves:

1. **End snapping** -- from ``start + max_section_length`` scan forward up
   to ``sentence_search_limit`` characters for a sentence ending; failing
   that, fall back to the last word break seen so no word is cut in half.
2. **Start snapping** -- mirror the same search backward from ``start`` so
   the section does not open mid-sentence or mid-word.
3. **Table carry-over** -- if the section ends inside an HTML table that
   opened well past its beginning, the next section restarts at that
   ``<table`` tag instead of the default overlap point, so tables are not
   split across sections.

Production is a single forward pass driven by :class:`SectionCursor`; each
section depends only on the cursor state left by the previous one.
"""

from __future__ import annotations

from typing import Iterator

import structlog

from prepdocs.models.content import PageDetail, Section, SplitterConfig
from prepdocs.utils.identifiers import section_id, source_page_label

logger = structlog.get_logger(logger_name=__name__)

SENTENCE_ENDINGS = frozenset(".!?")
WORD_BREAKS = frozenset(",;: ()[]{}\t\n")

_TABLE_OPEN = "<table"
_TABLE_CLOSE = "</table"


def find_page(page_map: list[PageDetail], offset: int) -> int:
    """Return the index of the page containing character *offset*.

    Offsets past the start of the last page (or any offset that matches no
    page range) resolve to the last page.
    """
    length = len(page_map)
    for i in range(length - 1):
        if page_map[i].offset <= offset < page_map[i + 1].offset:
            return i
    return length - 1


class SectionCursor:
    """Forward-only state machine yielding the sections of one document.

    Call :meth:`next_section` until it returns ``None``, or iterate the
    cursor directly.  A cursor is consumed once; build a new one through
    :meth:`SectionSplitter.split` to start over.
    """

    def __init__(
        self,
        text: str,
        page_map: list[PageDetail],
        source_file: str,
        config: SplitterConfig,
    ) -> None:
        self._text = text
        self._length = len(text)
        self._page_map = page_map
        self._source_file = source_file
        self._config = config
        self._start = 0
        self._end = self._length
        self._emitted = 0
        self._last_offset = -1
        self._finished = False

    @property
    def emitted(self) -> int:
        """Number of sections produced so far."""
        return self._emitted

    def __iter__(self) -> Iterator[Section]:
        return self

    def __next__(self) -> Section:
        section = self.next_section()
        if section is None:
            raise StopIteration
        return section

    def next_section(self) -> Section | None:
        """Return the next section, or ``None`` once the document is exhausted."""
        if self._finished:
            return None

        if self._start + self._config.section_overlap < self._length:
            return self._advance()

        self._finished = True
        # Whatever stretch the loop left behind; for a document no longer than
        # the overlap this is the whole text.
        if self._start + self._config.section_overlap < self._end or (
            self._emitted == 0 and self._text.strip()
        ):
            return self._make_section(self._start, self._end)
        return None

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _advance(self) -> Section:
        position = self._start
        end = self._find_end(position)
        start = self._find_start(position, end)
        section = self._make_section(start, end)
        self._end = end
        self._start = self._next_start(position, start, end, section.content)
        return section

    def _find_end(self, start: int) -> int:
        text = self._text
        length = self._length
        max_length = self._config.max_section_length
        search_limit = self._config.sentence_search_limit

        end = start + max_length
        if end > length:
            return length

        last_word = -1
        while (
            end < length
            and (end - start - max_length) < search_limit
            and text[end] not in SENTENCE_ENDINGS
        ):
            if text[end] in WORD_BREAKS:
                last_word = end
            end += 1

        if end < length and text[end] not in SENTENCE_ENDINGS and last_word > 0:
            end = last_word

        # Include the delimiter itself.
        if end < length:
            end += 1
        return end

    def _find_start(self, start: int, end: int) -> int:
        text = self._text
        floor = end - self._config.max_section_length - 2 * self._config.sentence_search_limit
        # Never back up to the previous section's start.
        floor = max(floor, self._last_offset)

        last_word = -1
        while start > 0 and start > floor and text[start] not in SENTENCE_ENDINGS:
            if text[start] in WORD_BREAKS:
                last_word = start
            start -= 1

        if text[start] not in SENTENCE_ENDINGS and last_word > 0:
            start = last_word
        if start > 0:
            start += 1
        return max(start, self._last_offset + 1)

    def _next_start(self, position: int, start: int, end: int, content: str) -> int:
        search_limit = self._config.sentence_search_limit
        next_start = end - self._config.section_overlap

        # Tables opening within the first 2 * search_limit characters are
        # ignored: restarting there would re-emit the same section forever
        # for tables longer than max_section_length.  A table at or before
        # the current position was already carried over.
        last_table_start = content.rfind(_TABLE_OPEN)
        if last_table_start > 2 * search_limit and last_table_start > content.rfind(_TABLE_CLOSE):
            carryover = start + last_table_start
            if carryover > position:
                logger.warning(
                    "section_ends_with_unclosed_table",
                    source_file=self._source_file,
                    page=find_page(self._page_map, start),
                    start=start,
                    table_start=last_table_start,
                )
                next_start = min(next_start, carryover)

        return next_start

    def _make_section(self, start: int, end: int) -> Section:
        self._emitted += 1
        self._last_offset = start
        return Section(
            id=section_id(self._source_file, start),
            content=self._text[start:end],
            source_page=source_page_label(self._source_file, find_page(self._page_map, start)),
            source_file=self._source_file,
            offset=start,
        )


class SectionSplitter:
    """Turns a page map into a :class:`SectionCursor`.

    Parameters
    ----------
    config:
        Section sizes; defaults to 500 / 100 / 100 characters for
        ``max_section_length`` / ``sentence_search_limit`` /
        ``section_overlap``.
    """

    def __init__(self, config: SplitterConfig | None = None) -> None:
        self._config = config or SplitterConfig()

    @property
    def config(self) -> SplitterConfig:
        return self._config

    def split(self, page_map: list[PageDetail], source_file: str) -> SectionCursor:
        """Return a cursor over the sections of the document described by *page_map*."""
        text = "".join(page.text for page in page_map)
        logger.info("splitting_document", source_file=source_file, total_chars=len(text))
        return SectionCursor(text, page_map, source_file, self._config)
