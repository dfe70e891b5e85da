"""Section — paginated walker over one row cursor.

A section renders one band of content per record. Records flow down the page
from ``y_start`` in steps of ``row_height``; a record whose band would cross
``y_end`` is moved to the first line of the next page and raises the
page-break flag so the engine closes the current page's loop.
"""

import logging

from folio.data.base import Row, RowCursor
from folio.engine.settings import PageSettings

logger = logging.getLogger(__name__)

# tolerance for float geometry (mm)
EPS = 1e-9


class Section:
    def __init__(self, section_id: str, cursor: RowCursor | None = None,
                 page: PageSettings | None = None):
        self.id = section_id
        self.cursor = cursor
        self.page = page            # fixed page format: breaks come from the template
        self.y_start: float = 0.0
        self.row_height: float = 6.0
        self.y_end: float = 290.0
        self.row: Row | None = None
        self._record_index = 0
        self._line_index = 0
        self._page_index = 0
        self._page_break = False
        self._end_of_data = True
        self._record_count = 0
        self.reset()

    def __repr__(self) -> str:
        return (f"Section({self.id!r}, record={self._record_index}, line={self._line_index}, "
                f"page={self._page_index}, eod={self._end_of_data})")

    # ---- State transitions ------------------------------------------------------

    def reset(self) -> None:
        self.row = None
        self._record_index = 0
        self._line_index = 0
        self._page_index = 0
        self._page_break = False
        self._end_of_data = True
        self._record_count = 0
        if self.cursor is not None:
            self.cursor.reset()

    def execute_query(self) -> int:
        """Run the cursor and load the first record; returns the record count."""
        if self.cursor is None:
            return 0
        if self.row is not None:
            return self.cursor.record_count()
        self.reset()
        self.cursor.execute()
        self._record_count = self.cursor.record_count()
        self.next_record()
        self._end_of_data = not self.cursor.has_more_records()
        logger.debug("Section '%s' executed: %d records", self.id, self._record_count)
        return self._record_count

    def next_record(self) -> None:
        if self.cursor is None:
            return
        self._page_break = False
        row = self.cursor.fetch_next()
        if row is None:
            self.row = None
            self._end_of_data = True
            self._line_index = 0
            logger.debug("Section '%s' end of data after %d records", self.id, self._record_index)
            return

        first = self._record_index == 0
        self.row = row
        self._record_index += 1
        self._line_index += 1
        self._end_of_data = False
        if first:
            self._page_index += 1

        if self.page is None and self.row_height > 0 and self._line_index > 1:
            if self.current_y() + self.row_height > self.y_end + EPS:
                self._line_index = 1
                self._page_break = True
                self._page_index += 1
                logger.debug("Section '%s' page break at record %d", self.id, self._record_index)

    def reset_page_break(self) -> None:
        self._line_index = 1
        self._page_break = False

    # ---- Queries ----------------------------------------------------------------

    def end_of_page(self) -> bool:
        return self._page_break or self._end_of_data

    def end_of_data(self) -> bool:
        return self._end_of_data

    def offset_y(self) -> float:
        return (self._line_index - 1 if self._line_index > 0 else 0) * self.row_height

    def current_y(self) -> float:
        return self.y_start + self.offset_y()

    @property
    def query(self) -> str:
        return self.cursor.query if self.cursor is not None else ""

    @query.setter
    def query(self, value: str) -> None:
        if self.cursor is not None:
            self.cursor.query = value

    @property
    def query_raw(self) -> str:
        return self.cursor.query_raw if self.cursor is not None else ""

    @query_raw.setter
    def query_raw(self, value: str) -> None:
        if self.cursor is not None:
            self.cursor.query_raw = value

    @property
    def has_cursor(self) -> bool:
        return self.cursor is not None

    @property
    def record_index(self) -> int:
        return self._record_index

    @property
    def line_index(self) -> int:
        return self._line_index

    @property
    def page_index(self) -> int:
        return self._page_index

    @property
    def record_count(self) -> int:
        return self._record_count

    @property
    def page_break(self) -> bool:
        return self._page_break
